from __future__ import annotations

import unittest

from workbench.errors import NotFound, ValidationError
from workbench.services.project_service import ProjectService
from workbench.services.task_service import TaskService

from tests.helpers import make_session_factory


class TestProjectService(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_create_defaults(self) -> None:
        p = ProjectService.create(self.db, {"name": "Alpha"})
        self.assertEqual("#165DFF", p.color)
        self.assertFalse(p.archived)
        self.assertEqual(0, p.task_count)
        self.assertIsNotNone(p.created_at)

    def test_name_rules(self) -> None:
        ProjectService.create(self.db, {"name": "Alpha"})
        with self.assertRaises(ValidationError):
            ProjectService.create(self.db, {"name": "Alpha"})
        with self.assertRaises(ValidationError):
            ProjectService.create(self.db, {"name": "   "})

    def test_task_count_is_derived(self) -> None:
        p = ProjectService.create(self.db, {"name": "Alpha"})
        for name in ("a", "b", "c"):
            TaskService.create(self.db, {"name": name, "project_id": p.id})
        TaskService.create(self.db, {"name": "loose"})
        self.assertEqual(3, ProjectService.get_by_id(self.db, p.id).task_count)

        doomed = TaskService.get_all(self.db, {"project_id": p.id})[0]
        TaskService.delete(self.db, doomed.id)
        self.assertEqual(2, ProjectService.get_by_id(self.db, p.id).task_count)

    def test_archive_hides_from_default_listing(self) -> None:
        a = ProjectService.create(self.db, {"name": "Alpha"})
        ProjectService.create(self.db, {"name": "Beta"})
        ProjectService.archive(self.db, a.id, True)

        self.assertEqual(["Beta"], [p.name for p in ProjectService.get_all(self.db)])
        self.assertEqual(["Beta", "Alpha"], [p.name for p in ProjectService.get_all(self.db, include_archived=True)])

        ProjectService.archive(self.db, a.id, False)
        self.assertEqual(["Alpha", "Beta"], [p.name for p in ProjectService.get_all(self.db)])

    def test_update(self) -> None:
        p = ProjectService.create(self.db, {"name": "Alpha", "description": "first"})
        other = ProjectService.create(self.db, {"name": "Beta"})
        updated = ProjectService.update(self.db, p.id, {"color": "#FF0000"})
        self.assertEqual("Alpha", updated.name)
        self.assertEqual("first", updated.description)
        self.assertEqual("#FF0000", updated.color)
        with self.assertRaises(ValidationError):
            ProjectService.update(self.db, other.id, {"name": "Alpha"})
        with self.assertRaises(NotFound):
            ProjectService.update(self.db, 404, {"name": "Gamma"})

    def test_delete_orphans_tasks(self) -> None:
        pid = ProjectService.create(self.db, {"name": "Alpha"}).id
        t1 = TaskService.create(self.db, {"name": "a", "project_id": pid})
        t2 = TaskService.create(self.db, {"name": "b", "project_id": pid})
        self.assertEqual("Alpha", t1.project_name)

        self.assertEqual(2, ProjectService.delete(self.db, pid))
        self.db.expire_all()

        for task_id in (t1.id, t2.id):
            task = TaskService.get_by_id(self.db, task_id)
            self.assertIsNone(task.project_id)
            self.assertEqual("", task.project_name)
        with self.assertRaises(NotFound):
            ProjectService.get_by_id(self.db, pid)


if __name__ == "__main__":
    unittest.main()
