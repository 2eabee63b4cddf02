# todo_api/domains/auth/models.py
from typing import List

from pydantic import BaseModel

from todo_api.domains.organizations.models import OrganizationResponse


class SessionState(BaseModel):
    user_id: str
    organizations: List[OrganizationResponse]
