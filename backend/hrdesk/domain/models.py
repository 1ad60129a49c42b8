"""Domain Models - Pydantic schemas for all entities"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .enums import BuiltinRole, PermissionLevel, StaffStatus


# ============================================================================
# Staff & Identity
# ============================================================================

class StaffMember(BaseModel):
    """A user of an organization as stored in the users collection"""
    model_config = ConfigDict(extra="ignore")

    user_id: str = Field(..., description="User document id")
    full_name: str = Field(..., description="Full display name")
    email: str = Field(..., description="Login email")
    role: str = Field(default=BuiltinRole.STAFF.value, description="Role name: admin, staff or a custom role")
    organization_id: Optional[str] = Field(None, description="Owning organization id")
    status: str = Field(default=StaffStatus.ACTIVE.value, description="Account status")
    department: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == BuiltinRole.ADMIN.value

    @property
    def is_active(self) -> bool:
        return self.status == StaffStatus.ACTIVE.value

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "StaffMember":
        """Build from a stringified users document (camelCase fields)"""
        return cls(
            user_id=str(doc.get("id") or doc.get("_id")),
            full_name=doc.get("fullName") or "",
            email=doc.get("email") or "",
            role=doc.get("role") or BuiltinRole.STAFF.value,
            organization_id=str(doc["organization"]) if doc.get("organization") else None,
            status=doc.get("status") or StaffStatus.ACTIVE.value,
            department=doc.get("department"),
        )


class ActorContext(StaffMember):
    """Authenticated staff member making the current request"""


# ============================================================================
# Roles & Permissions
# ============================================================================

PermissionMap = Dict[str, Union[str, Dict[str, str]]]


class Role(BaseModel):
    """Named permission bundle: module -> (page -> level) or module -> level"""
    model_config = ConfigDict(extra="ignore")

    role_id: Optional[str] = Field(None, description="Role document id")
    name: str = Field(..., description="Unique role name")
    permissions: PermissionMap = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Role":
        return cls(
            role_id=doc.get("id"),
            name=doc["name"],
            permissions=doc.get("permissions") or {},
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )


def _validate_permission_map(value: PermissionMap) -> PermissionMap:
    """Every level in the map must be one of none, view, full"""
    allowed = {level.value for level in PermissionLevel}
    for module, entry in value.items():
        pages = entry if isinstance(entry, dict) else {None: entry}
        for page, level in pages.items():
            if level not in allowed:
                where = f"{module} - {page}" if page else module
                raise ValueError(f"Invalid permission level '{level}' for {where}")
    return value


class RoleCreateRequest(BaseModel):
    """Request to create a role"""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100)
    permissions: PermissionMap = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Role name is required")
        return v

    @field_validator("permissions")
    @classmethod
    def check_levels(cls, v: PermissionMap) -> PermissionMap:
        return _validate_permission_map(v)


class RoleUpdateRequest(BaseModel):
    """Request to update a role (partial)"""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    permissions: Optional[PermissionMap] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("permissions")
    @classmethod
    def check_levels(cls, v: Optional[PermissionMap]) -> Optional[PermissionMap]:
        return _validate_permission_map(v) if v is not None else v


class RoleResponse(BaseModel):
    """Role as returned by the API"""
    id: Optional[str] = None
    name: str
    permissions: PermissionMap = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_role(cls, role: Role) -> "RoleResponse":
        return cls(
            id=role.role_id,
            name=role.name,
            permissions=role.permissions,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


# ============================================================================
# Assistant
# ============================================================================

class AssistantAction(BaseModel):
    """Suggested follow-up query offered to the caller"""
    label: str
    query: str


class AssistantReply(BaseModel):
    """Answer text plus follow-up actions"""
    answer: str
    actions: List[AssistantAction] = Field(default_factory=list)


class AssistantQueryRequest(BaseModel):
    """Free-text assistant query"""
    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1, max_length=2000)

    @field_validator("query")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Query is required")
        return v
