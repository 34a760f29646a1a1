from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.templating import Jinja2Templates

from task_tracker.app.routes.tasks import get_service
from task_tracker.domain.errors import TaskValidationError
from task_tracker.domain.task_models import TaskPriority, TaskStatus, normalize_priority, normalize_status
from task_tracker.services.task_service import TaskService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])

PRIORITY_BADGES = {
    TaskPriority.high: "bg-danger",
    TaskPriority.medium: "bg-warning text-dark",
    TaskPriority.low: "bg-secondary",
}
STATUS_BADGES = {
    TaskStatus.todo: "bg-secondary",
    TaskStatus.in_progress: "bg-primary",
    TaskStatus.done: "bg-success",
}
STATUS_LABELS = {
    TaskStatus.todo: "To do",
    TaskStatus.in_progress: "In progress",
    TaskStatus.done: "Done",
}


def badge_priority(value) -> str:
    return PRIORITY_BADGES[normalize_priority(value)]


def badge_status(value) -> str:
    return STATUS_BADGES[normalize_status(value)]


def status_label(value) -> str:
    return STATUS_LABELS[normalize_status(value)]


templates.env.globals.update(
    badge_priority=badge_priority,
    badge_status=badge_status,
    status_label=status_label,
    priorities=[p.value for p in TaskPriority],
    statuses=[s.value for s in TaskStatus],
)


async def _render(request: Request, svc: TaskService, *, q: str = "", status: str = "", priority: str = "",
                  form: dict | None = None, error: str = "", success: str = ""):
    listing = await svc.list_tasks(q, status, priority)
    context = {
        "listing": listing,
        "q": q,
        "f_status": status,
        "f_priority": priority,
        "form": form or {"title": "", "description": "", "priority": TaskPriority.medium.value, "due_date": ""},
        "error": error,
        "success": success,
    }
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    q: str = "",
    status: str = "",
    priority: str = "",
    created: int | None = None,
    svc: TaskService = Depends(get_service),
):
    success = "Task added!" if created else ""
    return await _render(request, svc, q=q.strip(), status=status.strip(), priority=priority.strip(), success=success)


@router.post("/", response_class=HTMLResponse)
async def add_task(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    priority: str = Form(TaskPriority.medium.value),
    due_date: str = Form(""),
    svc: TaskService = Depends(get_service),
):
    try:
        task = await svc.create_task(title, description, priority, due_date)
    except TaskValidationError as e:
        # echo the submitted values back into the form
        form = {"title": title, "description": description, "priority": priority, "due_date": due_date}
        return await _render(request, svc, form=form, error=e.message)
    return RedirectResponse(url=f"/?created={task.id}", status_code=303)


@router.post("/tasks/{task_id}/advance")
async def advance_task(task_id: int, svc: TaskService = Depends(get_service)):
    await svc.advance_task(task_id)
    return RedirectResponse(url="/", status_code=303)


@router.post("/tasks/{task_id}/delete")
async def delete_task(task_id: int, svc: TaskService = Depends(get_service)):
    await svc.delete_task(task_id)
    return RedirectResponse(url="/", status_code=303)
