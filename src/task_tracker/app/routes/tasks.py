from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from task_tracker.domain.errors import TaskNotFoundError, TaskValidationError
from task_tracker.domain.task_models import Task, TaskStats
from task_tracker.services.task_service import TaskListing, TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


class TaskCreate(BaseModel):
    # raw text; validation and normalization happen in the domain
    title: str = ""
    description: str = ""
    priority: str = ""
    due_date: str = ""


def get_service(request: Request) -> TaskService:
    return request.app.state.task_service


@router.get("", response_model=TaskListing)
async def list_tasks(
    q: str = "",
    status: Optional[str] = None,
    priority: Optional[str] = None,
    svc: TaskService = Depends(get_service),
):
    return await svc.list_tasks(q, status or "", priority or "")


@router.get("/stats", response_model=TaskStats)
async def get_stats(svc: TaskService = Depends(get_service)):
    return await svc.stats()


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int, svc: TaskService = Depends(get_service)):
    task = await svc.get_task(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=Task, status_code=201)
async def create_task(payload: TaskCreate, svc: TaskService = Depends(get_service)):
    try:
        return await svc.create_task(payload.title, payload.description, payload.priority, payload.due_date)
    except TaskValidationError as e:
        raise HTTPException(status_code=422, detail={"code": e.code, "message": e.message})


@router.post("/{task_id}/advance", response_model=Task)
async def advance_task(task_id: int, svc: TaskService = Depends(get_service)):
    try:
        return await svc.advance_task(task_id, strict=True)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int, svc: TaskService = Depends(get_service)):
    try:
        await svc.delete_task(task_id, strict=True)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)
