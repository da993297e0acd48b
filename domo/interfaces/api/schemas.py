"""Request/Response schemas for the Domo API.

Request bodies accept camelCase keys (``taskId``, ``newIndex``) as well
as snake_case. Responses serialize the domain models directly.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Domain Schemas
# =============================================================================


class CreateDomainRequest(RequestModel):
    """Request to create a domain."""

    name: str
    is_active: bool = True


class UpdateDomainRequest(RequestModel):
    """Request to rename or toggle a domain."""

    name: Optional[str] = None
    is_active: Optional[bool] = None


class DeactivateDomainRequest(RequestModel):
    """Request to deactivate a domain, optionally handing its open tasks over."""

    reassign_to: Optional[str] = None


class ReorderDomainsRequest(BaseModel):
    """Request to renumber the user's domains."""

    ordered_domain_ids: list[str]


# =============================================================================
# Task Schemas
# =============================================================================


class CreateTaskRequest(RequestModel):
    """Request to create a task."""

    domain_id: str
    title: str
    priority: Optional[int] = None
    effort_points: Optional[int] = None
    complexity: Optional[int] = None
    valence: int = 0
    scheduled_date: Optional[date] = None
    due_date: Optional[date] = None


class UpdateTaskRequest(RequestModel):
    """Partial task edit. Explicit nulls clear optional fields."""

    title: Optional[str] = None
    domain_id: Optional[str] = None
    priority: Optional[int] = None
    effort_points: Optional[int] = None
    complexity: Optional[int] = None
    valence: Optional[int] = None
    scheduled_date: Optional[date] = None
    due_date: Optional[date] = None


class MoveTaskRequest(RequestModel):
    """Cross-domain move intent."""

    new_domain_id: str
    new_index: int = 0


class ReorderTasksRequest(RequestModel):
    """Reorder intent for one domain.

    Either a single move (``taskId`` + ``newIndex``) or a full ordering
    (``ordered_task_ids``).
    """

    task_id: Optional[str] = None
    new_index: Optional[int] = None
    ordered_task_ids: Optional[list[str]] = Field(default=None, alias="ordered_task_ids")


# =============================================================================
# Response Schemas
# =============================================================================


class ReorderResponse(BaseModel):
    """Result of a bulk reorder."""

    success: bool = True
    task_ids: list[str] = []

