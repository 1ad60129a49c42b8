"""System Settings Repository - Per-organization display settings"""
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from .async_mongo import get_async_collection
from .mongo_client import Collections
from ..utils.idgen import to_object_id


class SystemSettingsRepository:
    """Repository for the systemsettings collection"""

    def __init__(self, database: Optional[AsyncIOMotorDatabase] = None):
        self._settings = get_async_collection(Collections.SYSTEM_SETTINGS, database)

    async def get_timezone(self, organization_id: Optional[str]) -> Optional[str]:
        """Configured IANA timezone name of an organization, if any"""
        if not organization_id:
            return None
        doc = await self._settings.find_one(
            {"organization": to_object_id(organization_id)},
            {"timezone": 1},
        )
        if doc and doc.get("timezone"):
            return doc["timezone"]
        return None
