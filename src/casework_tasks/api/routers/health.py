"""Health check endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from casework_tasks import __version__
from casework_tasks.api.deps import get_database
from casework_tasks.api.schemas import HealthResponse
from casework_tasks.database.orm_manager import ORMManager

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(database: ORMManager = Depends(get_database)) -> JSONResponse:
    """Report service and database health; 503 when the database check fails."""
    check = database.perform_health_check()
    healthy = bool(check.get("healthy"))
    body = HealthResponse(status="UP" if healthy else "DOWN", version=__version__, database=check)
    return JSONResponse(status_code=200 if healthy else 503, content=body.model_dump())
