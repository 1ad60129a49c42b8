"""Repository modules - Data access layer"""
from .mongo_client import Collections, get_database, get_collection
from .role_repo import RoleRepository
from .staff_repo import StaffRepository
from .settings_repo import SystemSettingsRepository
from .hr_records_repo import HrRecordsRepository

__all__ = [
    "Collections",
    "get_database",
    "get_collection",
    "RoleRepository",
    "StaffRepository",
    "SystemSettingsRepository",
    "HrRecordsRepository",
]
