"""Todo domain type definitions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Todo:
    """A todo item scoped to one organization."""

    id: str
    organization_id: str
    created_by: str
    title: str
    description: Optional[str]
    completed: bool
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
