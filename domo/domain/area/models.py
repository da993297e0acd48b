"""Life-area domain models.

A Domain is a named grouping of tasks owned by one user ("Body",
"Learn", ...). Pure data structures with no I/O.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field

# Life areas created for a user that has none yet
SEED_DOMAINS: tuple[str, ...] = (
    "Body",
    "Space",
    "Mind",
    "Plan",
    "Connect",
    "Attack",
    "Create",
    "Learn",
    "Manage",
)


class Domain(BaseModel):
    """A named grouping of tasks.

    ``sort_order`` is dense 0..N-1 across all of a user's domains, active
    and inactive together. Inactive domains are hidden from task views
    but keep their tasks.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    name: str = Field(min_length=1)
    sort_order: int = 0
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
