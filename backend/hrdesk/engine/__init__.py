"""Decision engine - permission resolution and assistant intent dispatch"""
from .permission_resolver import (
    LEGACY_UNRESTRICTED_ROLES,
    AuthorizationDecision,
    PermissionResolver,
    level_from_permissions,
)
from .subject_resolver import SubjectResolution, SubjectResolver
from .intent_table import INTENT_TABLE, Intent
from .dispatcher import IntentDispatcher

__all__ = [
    "LEGACY_UNRESTRICTED_ROLES",
    "AuthorizationDecision",
    "PermissionResolver",
    "level_from_permissions",
    "SubjectResolution",
    "SubjectResolver",
    "INTENT_TABLE",
    "Intent",
    "IntentDispatcher",
]
