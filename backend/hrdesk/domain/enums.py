"""Domain Enumerations - All status and type definitions"""
from enum import Enum
from typing import Any


class PermissionLevel(str, Enum):
    """Access level granted by a role for a module or page"""
    NONE = "none"
    VIEW = "view"
    FULL = "full"

    @property
    def rank(self) -> int:
        """Position in the total order none < view < full"""
        return _LEVEL_RANK[self]

    @classmethod
    def parse(cls, value: Any) -> "PermissionLevel":
        """Stored level string to enum, compared exactly; anything else is NONE"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return cls.NONE
        return cls.NONE

    def satisfies(self, required: "PermissionLevel") -> bool:
        """True when this level is at least the required one"""
        return self.rank >= required.rank


_LEVEL_RANK = {
    PermissionLevel.NONE: 0,
    PermissionLevel.VIEW: 1,
    PermissionLevel.FULL: 2,
}


class StaffStatus(str, Enum):
    """Account status of a staff member"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    ARCHIVED = "archived"


class BuiltinRole(str, Enum):
    """Role names with meaning outside the role store"""
    ADMIN = "admin"
    STAFF = "staff"


class RecordStatus(str, Enum):
    """Approval status used by leave, training, expense and inventory records"""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveType(str, Enum):
    """Leave types counted against allowances"""
    ANNUAL = "Annual"
