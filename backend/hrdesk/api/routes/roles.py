"""Role API Routes - Custom role management"""
from typing import List
from fastapi import APIRouter, Depends, Response, status

from ..deps import get_current_user_dep, get_role_service, require_permission
from ...domain.enums import PermissionLevel
from ...domain.models import ActorContext, RoleCreateRequest, RoleResponse, RoleUpdateRequest
from ...services.role_service import RoleService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/roles", tags=["Roles"])

ROLE_MODULE = "Role Management"
ROLE_PAGE = "Role Management"


@router.get("", response_model=List[RoleResponse])
async def list_roles(
    actor: ActorContext = Depends(require_permission(ROLE_MODULE, PermissionLevel.VIEW, ROLE_PAGE)),
    service: RoleService = Depends(get_role_service),
):
    """List all roles"""
    roles = await service.list_roles()
    return [RoleResponse.from_role(role) for role in roles]


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    request: RoleCreateRequest,
    actor: ActorContext = Depends(require_permission(ROLE_MODULE, PermissionLevel.FULL, ROLE_PAGE)),
    service: RoleService = Depends(get_role_service),
):
    """Create a role"""
    role = await service.create_role(request, actor)
    return RoleResponse.from_role(role)


@router.get("/my-role", response_model=RoleResponse)
async def get_my_role(
    actor: ActorContext = Depends(get_current_user_dep),
    service: RoleService = Depends(get_role_service),
):
    """
    Get the current user's role document.

    The name is matched case-insensitively. Users whose role has no
    document (including ``admin``) get 404.
    """
    role = await service.get_my_role(actor)
    return RoleResponse.from_role(role)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: str,
    request: RoleUpdateRequest,
    actor: ActorContext = Depends(require_permission(ROLE_MODULE, PermissionLevel.FULL, ROLE_PAGE)),
    service: RoleService = Depends(get_role_service),
):
    """Rename a role and/or replace its permission map"""
    role = await service.update_role(role_id, request, actor)
    return RoleResponse.from_role(role)


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: str,
    actor: ActorContext = Depends(require_permission(ROLE_MODULE, PermissionLevel.FULL, ROLE_PAGE)),
    service: RoleService = Depends(get_role_service),
):
    """Delete a role"""
    await service.delete_role(role_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
