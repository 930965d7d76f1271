"""Task endpoints under /api/v1/tasks."""

import math
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from casework_tasks.api.deps import get_task_service
from casework_tasks.api.schemas import (
    CreateTaskRequest,
    TaskPageResponse,
    TaskResponse,
    UpdateStatusRequest,
    UpdateTaskRequest,
)
from casework_tasks.services.task_service import TaskService

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Ids outside the storage integer range are rejected like unparseable ones.
TASK_ID_MIN = -(2**63)
TASK_ID_MAX = 2**63 - 1

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def _to_responses(tasks: list) -> List[TaskResponse]:
    return [TaskResponse.from_dto(task) for task in tasks]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Create a task; the case number is generated."""
    task = service.create_task(
        title=payload.title,
        description=payload.description,
        status=payload.status,
        due_date=payload.due_date,
    ).get_data_or_raise()
    return TaskResponse.from_dto(task)


@router.get("", response_model=TaskPageResponse)
def list_tasks(
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=INT32_MIN, le=INT32_MAX),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", ge=INT32_MIN, le=INT32_MAX),
    service: TaskService = Depends(get_task_service),
) -> TaskPageResponse:
    """
    List tasks with optional search, status filter and pagination.

    ``page`` is 1-based; values below 1 become 1. A ``pageSize`` outside
    1..100 falls back to 10. Values outside the 32-bit integer range are
    rejected with 400.
    """
    page = max(page, 1)
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE

    offset = (page - 1) * page_size
    tasks = service.search_tasks(search, status_filter, offset, page_size).get_data_or_raise()
    total = service.count_filtered_tasks(search, status_filter).get_data_or_raise()

    return TaskPageResponse(
        tasks=_to_responses(tasks),
        total_tasks=total,
        total_pages=math.ceil(total / page_size),
        current_page=page,
        page_size=page_size,
    )


# Fixed paths are declared before /{task_id} so they are not parsed as IDs.


@router.get("/overdue", response_model=List[TaskResponse])
def get_overdue_tasks(service: TaskService = Depends(get_task_service)) -> List[TaskResponse]:
    return _to_responses(service.get_overdue_tasks().get_data_or_raise())


@router.get("/statistics", response_model=Dict[str, int])
def get_task_statistics(service: TaskService = Depends(get_task_service)) -> Dict[str, int]:
    return service.get_task_statistics().get_data_or_raise()


@router.get("/statuses", response_model=List[str])
def get_valid_statuses(service: TaskService = Depends(get_task_service)) -> List[str]:
    return service.get_valid_statuses().get_data_or_raise()


@router.get("/status/{task_status}", response_model=List[TaskResponse])
def get_tasks_by_status(
    task_status: str,
    service: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    """Tasks with the given status (case-insensitive), newest first."""
    return _to_responses(service.get_tasks_by_status(task_status).get_data_or_raise())


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int = Path(..., ge=TASK_ID_MIN, le=TASK_ID_MAX),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.from_dto(service.get_task_by_id(task_id).get_data_or_raise())


@router.put("/{task_id}/status", response_model=TaskResponse)
def update_task_status(
    payload: UpdateStatusRequest,
    task_id: int = Path(..., ge=TASK_ID_MIN, le=TASK_ID_MAX),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = service.update_task_status(task_id, payload.status).get_data_or_raise()
    return TaskResponse.from_dto(task)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    payload: UpdateTaskRequest,
    task_id: int = Path(..., ge=TASK_ID_MIN, le=TASK_ID_MAX),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Partial update: only fields present in the body are applied."""
    task = service.update_task(
        task_id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        due_date=payload.due_date,
    ).get_data_or_raise()
    return TaskResponse.from_dto(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int = Path(..., ge=TASK_ID_MIN, le=TASK_ID_MAX),
    service: TaskService = Depends(get_task_service),
) -> Response:
    service.delete_task(task_id).get_data_or_raise()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
