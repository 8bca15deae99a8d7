"""FastAPI web application for todaylist."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from todaylist.config import env_flag, get_reset_check_interval, get_timezone
from todaylist.database.database import SessionLocal, get_db, init_db
from todaylist.database.repository import TaskRepository
from todaylist.database.settings_repository import SettingsRepository
from todaylist.database.sources import SessionResetHourSource, SessionTaskSource
from todaylist.engine.clock import SystemClock
from todaylist.engine.orchestrator import ResetOrchestrator, run_reset_loop
from todaylist.engine.ports import Clock
from todaylist.engine.reset_boundary import compute_last_reset_boundary, next_reset_boundary
from todaylist.models.task import Task
from todaylist.services.task_list import TaskListService

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"

_clock = SystemClock(get_timezone())
_reset_orchestrator = ResetOrchestrator(
    SessionTaskSource(SessionLocal),
    SessionResetHourSource(SessionLocal),
    clock=_clock,
)


def get_clock() -> Clock:
    return _clock


def get_reset_orchestrator() -> ResetOrchestrator:
    return _reset_orchestrator


def get_task_list_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> TaskListService:
    return TaskListService(TaskRepository(db), clock=clock)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if env_flag("INIT_DB_ON_STARTUP", True):
        init_db()

    reset_task: Optional[asyncio.Task] = None
    if env_flag("RESET_LOOP_ENABLED", True):
        interval = get_reset_check_interval()
        logger.info(f"Starting reset loop (interval={interval}s)")
        reset_task = asyncio.create_task(
            run_reset_loop(get_reset_orchestrator(), interval_seconds=interval)
        )
    try:
        yield
    finally:
        if reset_task is not None:
            reset_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reset_task


# Initialize FastAPI app
app = FastAPI(
    title="todaylist API",
    description="A daily task list that clears itself at a configurable hour",
    version=APP_VERSION,
    lifespan=lifespan,
)


# Request/response models
class TaskCreateRequest(BaseModel):
    """Request to add a task."""
    content: str = Field(..., description="Task text (line breaks are removed)")


class TaskMoveRequest(BaseModel):
    """Drag-and-drop move, expressed in display-list indices."""
    source_index: int = Field(..., ge=0)
    destination: int = Field(..., ge=0)


class TaskUpdateRequest(BaseModel):
    """Request to change a task's text."""
    content: str = Field(..., description="New task text (line breaks are removed)")


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    """Tasks in display order (completed first)."""
    tasks: List[Task]
    count: int


class SettingsUpdateRequest(BaseModel):
    reset_hour: int = Field(..., ge=0, le=23, description="Hour of day (0-23) at which the list is cleared")


class SettingsResponse(BaseModel):
    reset_hour: int
    last_reset_at: datetime
    next_reset_at: datetime


class ResetResponse(BaseModel):
    """Response for a manual reset pass."""
    deleted_count: int
    boundary: Optional[datetime]


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": APP_VERSION}


def _task_list_response(tasks: List[Task]) -> TaskListResponse:
    return TaskListResponse(tasks=tasks, count=len(tasks))


@app.get("/tasks", response_model=TaskListResponse)
def list_tasks(service: TaskListService = Depends(get_task_list_service)):
    """List tasks: completed first, then open tasks."""
    return _task_list_response(service.list_tasks())


@app.post("/tasks", response_model=TaskResponse, status_code=201)
def create_task(request: TaskCreateRequest, service: TaskListService = Depends(get_task_list_service)):
    """Add a task to the end of the open group."""
    task = service.add_task(request.content)
    if task is None:
        raise HTTPException(status_code=400, detail="Task content must not be empty")
    return TaskResponse(task=task)


@app.post("/tasks/move", response_model=TaskListResponse)
def move_task(request: TaskMoveRequest, service: TaskListService = Depends(get_task_list_service)):
    """Move an open task to a new position."""
    return _task_list_response(service.move_task(request.source_index, request.destination))


@app.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, service: TaskListService = Depends(get_task_list_service)):
    """Get a single task."""
    task = service.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse(task=task)


@app.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    service: TaskListService = Depends(get_task_list_service),
):
    """Change a task's text."""
    try:
        task = service.update_content(task_id, request.content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse(task=task)


@app.post("/tasks/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(task_id: str, service: TaskListService = Depends(get_task_list_service)):
    """Mark a task done, or reopen it."""
    task = service.toggle_completion(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse(task=task)


@app.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: str, service: TaskListService = Depends(get_task_list_service)):
    """Delete a task."""
    if not service.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)


def _settings_response(reset_hour: int, now: datetime) -> SettingsResponse:
    return SettingsResponse(
        reset_hour=reset_hour,
        last_reset_at=compute_last_reset_boundary(now, reset_hour),
        next_reset_at=next_reset_boundary(now, reset_hour),
    )


@app.get("/settings", response_model=SettingsResponse)
def get_settings(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    """Current reset hour and the surrounding reset boundaries."""
    reset_hour = SettingsRepository(db).get_reset_hour()
    return _settings_response(reset_hour, clock.now())


@app.put("/settings", response_model=SettingsResponse)
def update_settings(
    request: SettingsUpdateRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Change the reset hour."""
    settings = SettingsRepository(db).update_reset_hour(request.reset_hour)
    return _settings_response(settings.reset_hour, clock.now())


@app.post("/reset", response_model=ResetResponse)
def trigger_reset(orchestrator: ResetOrchestrator = Depends(get_reset_orchestrator)):
    """Run a reset pass now.

    deleted_count is 0 when nothing was stale or a pass was already running;
    boundary is that of the most recent completed pass.
    """
    deleted = orchestrator.run_reset_pass()
    result = orchestrator.last_result
    return ResetResponse(deleted_count=deleted, boundary=result.boundary if result else None)
