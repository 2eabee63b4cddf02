from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping

from todo_api.domains.organizations.types import OrganizationRole


class Permission(str, Enum):
    """
    Defines all permissions available in the system.

    Permissions follow the pattern ``resource:action`` (or
    ``resource:sub-resource:action``). They are never persisted; they are
    derived from a membership's role on every request.
    """

    # Todo permissions
    TODOS_CREATE = "todos:create"
    TODOS_READ = "todos:read"
    TODOS_UPDATE = "todos:update"
    TODOS_DELETE = "todos:delete"
    TODOS_COMPLETE = "todos:complete"

    # Organization permissions
    ORG_MEMBERS_READ = "org:members:read"
    ORG_MEMBERS_INVITE = "org:members:invite"
    ORG_MEMBERS_REMOVE = "org:members:remove"
    ORG_MEMBERS_UPDATE_ROLE = "org:members:update-role"
    ORG_SETTINGS_READ = "org:settings:read"
    ORG_SETTINGS_UPDATE = "org:settings:update"
    ORG_DELETE = "org:delete"


# Roles are bundles of permissions, not a hierarchy. Higher-ranked roles are
# expected to be no less capable than lower ones, but that is a convention
# checked per role in tests: viewer holds ORG_SETTINGS_READ, member does not.
ROLE_PERMISSIONS: Mapping[OrganizationRole, FrozenSet[Permission]] = MappingProxyType(
    {
        OrganizationRole.owner: frozenset(
            {
                # Owners have all permissions
                Permission.TODOS_CREATE,
                Permission.TODOS_READ,
                Permission.TODOS_UPDATE,
                Permission.TODOS_DELETE,
                Permission.TODOS_COMPLETE,
                Permission.ORG_MEMBERS_READ,
                Permission.ORG_MEMBERS_INVITE,
                Permission.ORG_MEMBERS_REMOVE,
                Permission.ORG_MEMBERS_UPDATE_ROLE,
                Permission.ORG_SETTINGS_READ,
                Permission.ORG_SETTINGS_UPDATE,
                Permission.ORG_DELETE,
            }
        ),
        OrganizationRole.admin: frozenset(
            {
                # Admins manage todos and members, but cannot change roles,
                # update settings or delete the organization
                Permission.TODOS_CREATE,
                Permission.TODOS_READ,
                Permission.TODOS_UPDATE,
                Permission.TODOS_DELETE,
                Permission.TODOS_COMPLETE,
                Permission.ORG_MEMBERS_READ,
                Permission.ORG_MEMBERS_INVITE,
                Permission.ORG_MEMBERS_REMOVE,
                Permission.ORG_SETTINGS_READ,
            }
        ),
        OrganizationRole.member: frozenset(
            {
                # Members create and work on todos, and can see who else is here
                Permission.TODOS_CREATE,
                Permission.TODOS_READ,
                Permission.TODOS_UPDATE,
                Permission.TODOS_COMPLETE,
                Permission.ORG_MEMBERS_READ,
            }
        ),
        OrganizationRole.viewer: frozenset(
            {
                # Viewers have read-only access
                Permission.TODOS_READ,
                Permission.ORG_MEMBERS_READ,
                Permission.ORG_SETTINGS_READ,
            }
        ),
    }
)
