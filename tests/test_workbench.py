from __future__ import annotations

from datetime import date, datetime, timezone
import unittest

from workbench.services.status_machine import StatusMachine
from workbench.services.task_service import TaskService
from workbench.services.workbench_service import WorkbenchService, build_workbench

from tests.helpers import make_session_factory, make_task

TODAY = date(2026, 10, 19)


class TestBuildWorkbench(unittest.TestCase):
    def test_counters(self) -> None:
        tasks = [
            make_task(id=1, hours=2.0, status="completed", actual_hours=1.5, start_time="10:00"),
            make_task(id=2, hours=3.0, status="in_progress", start_time="09:00"),
            make_task(id=3, hours=1.0, status="planned"),
            make_task(id=4, hours=8.0, date=date(2026, 10, 20)),
            make_task(id=5, hours=4.0, date=None),
        ]
        wb = build_workbench(tasks, TODAY)
        self.assertEqual([2, 1, 3], [t.id for t in wb.today_tasks])
        self.assertEqual(3, wb.total_count)
        self.assertEqual(1, wb.completed_count)
        self.assertEqual(2, wb.pending_count)
        self.assertEqual(6.0, wb.planned_hours)
        self.assertEqual(1.5, wb.completed_hours)
        self.assertEqual(1, wb.backlog_count)

    def test_completed_plus_pending_is_total(self) -> None:
        statuses = ["planned", "completed", "in_progress", "someday", "completed"]
        tasks = [make_task(id=i, status=s) for i, s in enumerate(statuses, start=1)]
        wb = build_workbench(tasks, TODAY)
        self.assertEqual(wb.total_count, wb.completed_count + wb.pending_count)
        self.assertEqual(2, wb.completed_count)

    def test_empty(self) -> None:
        wb = build_workbench([], TODAY)
        self.assertEqual([], wb.today_tasks)
        self.assertEqual(0, wb.total_count)
        self.assertEqual(0, wb.pending_count)
        self.assertEqual(0.0, wb.planned_hours)

    def test_mixed_aware_and_missing_created_at(self) -> None:
        tasks = [
            make_task(id=1, start_time="09:00", created_at=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)),
            make_task(id=2, start_time="09:00", created_at=None),
            make_task(id=3, start_time="09:00", created_at=datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)),
        ]
        wb = build_workbench(tasks, TODAY)
        self.assertEqual([3, 1, 2], [t.id for t in wb.today_tasks])

    def test_input_not_mutated(self) -> None:
        tasks = [make_task(id=2), make_task(id=1, start_time="08:00")]
        build_workbench(tasks, TODAY)
        self.assertEqual([2, 1], [t.id for t in tasks])


class TestWorkbenchService(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_snapshot_from_store(self) -> None:
        a = TaskService.create(self.db, {"name": "a", "date": TODAY, "hours": 2})
        TaskService.create(self.db, {"name": "b", "date": TODAY, "hours": 1})
        TaskService.create(self.db, {"name": "c", "date": date(2026, 10, 18), "hours": 5})
        TaskService.create(self.db, {"name": "d"})
        StatusMachine.complete(self.db, a.id, 2.5, datetime(2026, 10, 19, 9, 0))

        wb = WorkbenchService.get(self.db, TODAY)
        self.assertEqual(TODAY, wb.today)
        self.assertEqual(["a", "b"], sorted(t.name for t in wb.today_tasks))
        self.assertEqual(2, wb.total_count)
        self.assertEqual(1, wb.completed_count)
        self.assertEqual(1, wb.pending_count)
        self.assertEqual(3.0, wb.planned_hours)
        self.assertEqual(2.5, wb.completed_hours)
        self.assertEqual(1, wb.backlog_count)


if __name__ == "__main__":
    unittest.main()
