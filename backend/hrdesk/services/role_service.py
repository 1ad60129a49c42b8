"""Role Service - Business logic for custom role management"""
from typing import Any, Dict, List

from ..domain.enums import BuiltinRole
from ..domain.errors import RoleNotFoundError, ValidationError
from ..domain.models import ActorContext, Role, RoleCreateRequest, RoleUpdateRequest
from ..repositories.role_repo import RoleRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RoleService:
    """Service for role CRUD and the caller's own role"""

    def __init__(self, repo: RoleRepository):
        self.repo = repo

    @staticmethod
    def _check_not_reserved(name: str) -> None:
        """``admin`` is privileged outside the role store and cannot be defined"""
        if name.strip().lower() == BuiltinRole.ADMIN.value:
            raise ValidationError(
                f"Role name '{name}' is reserved",
                details={"name": name}
            )

    async def list_roles(self) -> List[Role]:
        return await self.repo.list_roles()

    async def create_role(self, request: RoleCreateRequest, actor: ActorContext) -> Role:
        self._check_not_reserved(request.name)
        role = await self.repo.create_role(request.name, request.permissions)
        logger.info(
            f"Role '{role.name}' created by {actor.email}",
            extra={"user_id": actor.user_id, "role": role.name}
        )
        return role

    async def update_role(self, role_id: str, request: RoleUpdateRequest, actor: ActorContext) -> Role:
        updates: Dict[str, Any] = {}
        if request.name is not None:
            if not request.name:
                raise ValidationError("Role name is required")
            self._check_not_reserved(request.name)
            updates["name"] = request.name
        if request.permissions is not None:
            updates["permissions"] = request.permissions

        if not updates:
            raise ValidationError("No changes provided")

        role = await self.repo.update_role(role_id, updates)
        logger.info(
            f"Role '{role.name}' updated by {actor.email}",
            extra={"user_id": actor.user_id, "role": role.name}
        )
        return role

    async def delete_role(self, role_id: str, actor: ActorContext) -> None:
        await self.repo.delete_role(role_id)
        logger.info(f"Role {role_id} deleted by {actor.email}", extra={"user_id": actor.user_id})

    async def get_my_role(self, actor: ActorContext) -> Role:
        """The actor's role document, matched case-insensitively by name"""
        role = await self.repo.get_by_name_insensitive(actor.role)
        if role is None:
            raise RoleNotFoundError(
                f"Role '{actor.role}' not found",
                details={"role": actor.role}
            )
        return role
