"""Service modules - Business logic layer"""
from .assistant_service import AssistantService
from .role_service import RoleService

__all__ = [
    "AssistantService",
    "RoleService",
]
