"""FastAPI routes for Domo.

Thin HTTP adapters over the application services: parse the request,
call one service method, map the Result to a response or an HTTP error.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request

from domo import __version__
from domo.application import DomainService, MoveCoordinator, TaskService
from domo.application.ports import EntityStore
from domo.config import AppConfig, load_config
from domo.domain.area import Domain
from domo.domain.shared import DomainError, Err, ErrorKind, Result
from domo.domain.task import Task
from domo.infrastructure.storage import JsonStore

from .schemas import (
    CreateDomainRequest,
    CreateTaskRequest,
    DeactivateDomainRequest,
    MoveTaskRequest,
    ReorderDomainsRequest,
    ReorderResponse,
    ReorderTasksRequest,
    UpdateDomainRequest,
    UpdateTaskRequest,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_STATE: 409,
    ErrorKind.VALIDATION: 400,
    ErrorKind.STORAGE: 500,
}


class Services:
    """Service objects sharing one store and one move coordinator."""

    def __init__(self, store: EntityStore, config: AppConfig) -> None:
        self.config = config
        self.moves = MoveCoordinator(store)
        self.tasks = TaskService(store, self.moves)
        self.domains = DomainService(store, self.moves)


def unwrap(result: Result) -> object:
    """Return the Ok value or raise the HTTP error matching the DomainError."""
    if isinstance(result, Err):
        error: DomainError = result.error
        if error.kind == ErrorKind.STORAGE:
            logger.error(f"Storage failure: {error.message}")
        raise HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=error.message)
    return result.value


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_user_id(
    request: Request,
    x_user_id: Optional[str] = Header(default=None),
) -> str:
    """User scope for the request: ``X-User-Id`` header, else the configured user."""
    return x_user_id or request.app.state.services.config.user_id


router = APIRouter(prefix="/api")


# =============================================================================
# Domains
# =============================================================================


@router.get("/domains", response_model=list[Domain])
def list_domains(
    include_inactive: bool = True,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """List the user's domains in sort order."""
    return unwrap(services.domains.list_domains(user_id, include_inactive=include_inactive))


@router.post("/domains", response_model=Domain, status_code=201)
def create_domain(
    req: CreateDomainRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Create a domain after the last one."""
    domain, _ = unwrap(services.domains.create_domain(user_id, req.name, is_active=req.is_active))
    return domain


@router.post("/domains/reorder")
def reorder_domains(
    req: ReorderDomainsRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Renumber the user's domains."""
    event = unwrap(services.domains.reorder_domains(user_id, req.ordered_domain_ids))
    return {"success": True, "domain_ids": event.domain_ids}


@router.patch("/domains/{domain_id}", response_model=Domain)
def update_domain(
    domain_id: str,
    req: UpdateDomainRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Rename and/or toggle a domain."""
    domain = unwrap(services.domains.get_domain(user_id, domain_id))
    if req.name is not None:
        domain, _ = unwrap(services.domains.rename_domain(user_id, domain_id, req.name))
    if req.is_active is not None and req.is_active != domain.is_active:
        domain, _ = unwrap(services.domains.set_domain_active(user_id, domain_id, req.is_active))
    return domain


@router.post("/domains/{domain_id}/deactivate", response_model=Domain)
def deactivate_domain(
    domain_id: str,
    req: DeactivateDomainRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Deactivate a domain, optionally reassigning its open tasks."""
    domain, _ = unwrap(
        services.domains.set_domain_active(user_id, domain_id, False, reassign_to=req.reassign_to)
    )
    return domain


@router.post("/domains/{domain_id}/tasks/reorder")
def reorder_domain_tasks(
    domain_id: str,
    req: ReorderTasksRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Apply a single drag-and-drop move or a full ordering to a domain."""
    if req.task_id is not None and req.new_index is not None:
        task = unwrap(services.tasks.get_task(user_id, req.task_id))
        if task.domain_id == domain_id:
            moved, _ = unwrap(services.moves.reorder_within_domain(user_id, domain_id, req.task_id, req.new_index))
        else:
            moved, _ = unwrap(services.moves.move_across_domains(user_id, req.task_id, domain_id, req.new_index))
        return moved.model_dump(mode="json")

    if req.ordered_task_ids is not None:
        event = unwrap(services.tasks.reorder_domain_tasks(user_id, domain_id, req.ordered_task_ids))
        return ReorderResponse(task_ids=event.task_ids).model_dump()

    raise HTTPException(status_code=400, detail="Either taskId+newIndex or ordered_task_ids is required")


# =============================================================================
# Tasks
# =============================================================================


@router.get("/tasks", response_model=list[Task])
def list_tasks(
    filter: Optional[str] = None,
    sort: Optional[str] = None,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Domain-grouped task list. Unknown filter/sort tokens use the defaults."""
    config = services.config
    return unwrap(
        services.tasks.list_tasks(
            user_id,
            filter or config.default_filter,
            sort or config.default_sort,
        )
    )


@router.post("/tasks", response_model=Task, status_code=201)
def create_task(
    req: CreateTaskRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Create a task at the end of its domain."""
    task, _ = unwrap(
        services.tasks.create_task(
            user_id,
            req.domain_id,
            req.title,
            priority=req.priority,
            effort_points=req.effort_points,
            complexity=req.complexity,
            valence=req.valence,
            scheduled_date=req.scheduled_date,
            due_date=req.due_date,
        )
    )
    return task


@router.get("/tasks/{task_id}", response_model=Task)
def get_task(
    task_id: str,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Get a task by ID."""
    return unwrap(services.tasks.get_task(user_id, task_id))


@router.patch("/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    req: UpdateTaskRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Edit task attributes. A new domain appends the task there."""
    changes = {name: getattr(req, name) for name in req.model_fields_set}
    task, _ = unwrap(services.tasks.update_task(user_id, task_id, changes))
    return task


@router.post("/tasks/{task_id}/move", response_model=Task)
def move_task(
    task_id: str,
    req: MoveTaskRequest,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    """Move an open task to another domain at an index."""
    task, _ = unwrap(services.moves.move_across_domains(user_id, task_id, req.new_domain_id, req.new_index))
    return task


@router.post("/tasks/{task_id}/complete", response_model=Task)
def complete_task(
    task_id: str,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    task, _ = unwrap(services.tasks.complete_task(user_id, task_id))
    return task


@router.post("/tasks/{task_id}/reopen", response_model=Task)
def reopen_task(
    task_id: str,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    task, _ = unwrap(services.tasks.reopen_task(user_id, task_id))
    return task


@router.post("/tasks/{task_id}/archive", response_model=Task)
def archive_task(
    task_id: str,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    task, _ = unwrap(services.tasks.archive_task(user_id, task_id))
    return task


@router.post("/tasks/{task_id}/restore", response_model=Task)
def restore_task(
    task_id: str,
    services: Services = Depends(get_services),
    user_id: str = Depends(get_user_id),
):
    task, _ = unwrap(services.tasks.restore_task(user_id, task_id))
    return task


# =============================================================================
# App Factory
# =============================================================================


def create_app(store: Optional[EntityStore] = None, config: Optional[AppConfig] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        store: Backend to use. Defaults to a JsonStore under the
            configured data directory.
        config: Settings. Loaded from the config directory if omitted.
    """
    config = config or load_config()
    services = Services(store or JsonStore(config.data_dir), config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Seed the default life areas for the configured user on startup."""
        seeded = services.domains.seed_default_domains(config.user_id, config.seed_domains)
        if isinstance(seeded, Err):
            logger.error(f"Seeding domains failed: {seeded.error.message}")
        yield

    app = FastAPI(
        title="Domo",
        description="Life-area task tracking with manual ordering",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services
    app.include_router(router)

    @app.get("/")
    def root():
        return {"name": "Domo", "version": __version__}

    return app
