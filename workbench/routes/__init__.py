from fastapi import HTTPException

from workbench.errors import WorkbenchError


def http_error(e: WorkbenchError) -> HTTPException:
    """The HTTPException a route should raise for a service failure."""
    return HTTPException(status_code=e.status_code, detail=e.message)
