"""Permission Resolver - Role-based access decisions for modules and pages"""
from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

from ..domain.enums import BuiltinRole, PermissionLevel
from ..domain.models import ActorContext, PermissionMap
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..repositories.role_repo import RoleRepository

logger = get_logger(__name__)

# Role names that predate the role store. When no role document exists for
# one of these, access is granted in full. Any other unknown role is denied.
LEGACY_UNRESTRICTED_ROLES = frozenset({"staff", "academic_admin", "inventory_manager"})


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of an authorize() call"""
    allowed: bool
    level: PermissionLevel
    reason: Optional[str] = None


def describe_target(module: str, page: Optional[str] = None) -> str:
    """'Module' or 'Module - Page' as used in denial messages"""
    return f"{module} - {page}" if page else module


def level_from_permissions(
    permissions: Optional[PermissionMap],
    module: str,
    page: Optional[str] = None
) -> PermissionLevel:
    """
    Read a level out of a role's permission map.

    A module entry is either a page map (``{"Page": "view"}``) or a bare
    level string that applies to the whole module. Absent modules, absent
    pages, a page map queried without a page and unknown level strings all
    give ``NONE``.
    """
    if not permissions:
        return PermissionLevel.NONE

    entry: Any = permissions.get(module)
    if entry is None:
        return PermissionLevel.NONE

    if isinstance(entry, dict):
        if page is None:
            return PermissionLevel.NONE
        return PermissionLevel.parse(entry.get(page))

    return PermissionLevel.parse(entry)


class PermissionResolver:
    """
    Resolves an actor's permission level for a module/page.

    Rules, in order:
    - ``admin`` is always FULL, no lookup
    - a role document with the actor's exact role name decides
    - no role document: legacy role names get FULL, anything else NONE
    """

    def __init__(self, role_repo: "RoleRepository"):
        self._role_repo = role_repo

    async def resolve(
        self,
        actor: ActorContext,
        module: str,
        page: Optional[str] = None
    ) -> PermissionLevel:
        if actor.role == BuiltinRole.ADMIN.value:
            return PermissionLevel.FULL

        role = await self._role_repo.get_by_name(actor.role)
        if role is not None:
            return level_from_permissions(role.permissions, module, page)

        if actor.role in LEGACY_UNRESTRICTED_ROLES:
            logger.warning(
                f"Role '{actor.role}' has no role document; granting legacy unrestricted access "
                f"to {describe_target(module, page)}",
                extra={"user_id": actor.user_id, "role": actor.role, "target_module": module, "target_page": page}
            )
            return PermissionLevel.FULL

        logger.info(
            f"Role '{actor.role}' not found; denying {describe_target(module, page)}",
            extra={"user_id": actor.user_id, "role": actor.role, "target_module": module, "target_page": page}
        )
        return PermissionLevel.NONE

    async def authorize(
        self,
        actor: Optional[ActorContext],
        module: str,
        required_level: PermissionLevel = PermissionLevel.VIEW,
        page: Optional[str] = None
    ) -> AuthorizationDecision:
        """
        Compare the resolved level with ``required_level``.

        A missing actor is denied before any lookup.
        """
        if actor is None:
            return AuthorizationDecision(
                allowed=False,
                level=PermissionLevel.NONE,
                reason="Not authenticated",
            )

        required = PermissionLevel.parse(required_level)
        level = await self.resolve(actor, module, page)
        if level.satisfies(required):
            return AuthorizationDecision(allowed=True, level=level)

        return AuthorizationDecision(
            allowed=False,
            level=level,
            reason=f"Insufficient permission for {describe_target(module, page)}",
        )
