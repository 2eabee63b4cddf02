# todo_api/domains/auth/routes.py
from fastapi import APIRouter, Depends

from todo_api.core.container import Container, get_container
from todo_api.domains.auth.dependencies import get_current_principal
from todo_api.domains.auth.models import SessionState
from todo_api.domains.auth.types import Principal
from todo_api.domains.organizations.models import OrganizationResponse
from todo_api.shared.exceptions import UnexpectedError
from todo_api.shared.result import Err

# Add a prefix and tag to group this route clearly in OpenAPI
router = APIRouter(prefix="/session", tags=["Sessions"])


@router.get(
    "",
    response_model=SessionState,
    operation_id="getSessionState",
)
async def get_session_state(
    principal: Principal = Depends(get_current_principal),
    container: Container = Depends(get_container),
) -> SessionState:
    """Return the caller's identity and every organization they belong to."""
    result = await container.organization_service.list_user_organizations(
        principal.user_id
    )
    if isinstance(result, Err):
        raise UnexpectedError()

    return SessionState(
        user_id=principal.user_id,
        organizations=[OrganizationResponse.from_domain(o) for o in result.value],
    )
