"""API Dependencies - Authentication, authorization and service wiring"""
from typing import Callable, Optional, Union
from fastapi import Depends, Header

from ..domain.enums import PermissionLevel
from ..domain.errors import AccountInactiveError, AuthenticationError, PermissionDeniedError
from ..domain.models import ActorContext
from ..engine.permission_resolver import PermissionResolver
from ..repositories.hr_records_repo import HrRecordsRepository
from ..repositories.role_repo import RoleRepository
from ..repositories.settings_repo import SystemSettingsRepository
from ..repositories.staff_repo import StaffRepository
from ..services.assistant_service import AssistantService
from ..services.role_service import RoleService
from ..utils.jwt import get_token_identity
from ..utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Repositories & services (overridable in tests)
# =============================================================================

def get_role_repository() -> RoleRepository:
    return RoleRepository()


def get_staff_repository() -> StaffRepository:
    return StaffRepository()


def get_hr_records_repository() -> HrRecordsRepository:
    return HrRecordsRepository()


def get_settings_repository() -> SystemSettingsRepository:
    return SystemSettingsRepository()


def get_permission_resolver(
    role_repo: RoleRepository = Depends(get_role_repository)
) -> PermissionResolver:
    return PermissionResolver(role_repo)


def get_role_service(
    role_repo: RoleRepository = Depends(get_role_repository)
) -> RoleService:
    return RoleService(role_repo)


def get_assistant_service(
    records: HrRecordsRepository = Depends(get_hr_records_repository),
    staff_repo: StaffRepository = Depends(get_staff_repository),
    settings_repo: SystemSettingsRepository = Depends(get_settings_repository),
) -> AssistantService:
    return AssistantService(records=records, staff_repo=staff_repo, settings_repo=settings_repo)


# =============================================================================
# Authentication
# =============================================================================

async def get_current_user_dep(
    authorization: Optional[str] = Header(None),
    staff_repo: StaffRepository = Depends(get_staff_repository),
) -> ActorContext:
    """
    Dependency to get current user from Authorization header

    Validates the JWT, loads the user and checks the account is active and
    belongs to the organization named in the token.

    Raises:
        AuthenticationError: 401 if token is invalid or the user is unknown
        AccountInactiveError: 403 if the account is not active
    """
    identity = get_token_identity(authorization)

    doc = await staff_repo.get_by_id(identity.user_id)
    if not doc:
        logger.warning(f"Token user not found: {identity.user_id}")
        raise AuthenticationError("User not found")

    actor = ActorContext.from_document(doc)

    if not actor.is_active:
        logger.warning(
            f"Inactive account attempted access: {actor.status}",
            extra={"user_id": actor.user_id}
        )
        raise AccountInactiveError(
            f"Account is {actor.status}. Please contact your administrator.",
            details={"status": actor.status}
        )

    if identity.organization_id and identity.organization_id != actor.organization_id:
        logger.warning(
            "Token organization does not match user organization",
            extra={"user_id": actor.user_id, "organization_id": identity.organization_id}
        )
        raise AuthenticationError("Invalid organization context")

    return actor


# =============================================================================
# Authorization
# =============================================================================

def require_permission(
    module: str,
    required_level: Union[PermissionLevel, str] = PermissionLevel.VIEW,
    page: Optional[str] = None,
) -> Callable:
    """
    Build a dependency that admits the current user only when their role
    grants at least ``required_level`` on ``module`` (and ``page``).
    A level that is not exactly "none", "view" or "full" raises ValueError
    when the route is declared.

    Usage:
        @router.get("/roles")
        async def list_roles(actor: ActorContext = Depends(require_permission("Role Management"))):
            ...
    """
    try:
        level = PermissionLevel(required_level)
    except ValueError:
        raise ValueError(f"Invalid permission level '{required_level}' for module '{module}'") from None

    async def dependency(
        actor: ActorContext = Depends(get_current_user_dep),
        resolver: PermissionResolver = Depends(get_permission_resolver),
    ) -> ActorContext:
        decision = await resolver.authorize(actor, module, level, page)
        if not decision.allowed:
            logger.warning(
                f"Permission denied: {decision.reason}",
                extra={
                    "user_id": actor.user_id,
                    "role": actor.role,
                    "target_module": module,
                    "target_page": page,
                }
            )
            raise PermissionDeniedError(
                decision.reason,
                details={
                    "module": module,
                    "page": page,
                    "required": level.value,
                    "granted": decision.level.value,
                }
            )
        return actor

    return dependency
