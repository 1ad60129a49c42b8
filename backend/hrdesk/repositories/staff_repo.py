"""Staff Repository - Organization-scoped reads over the users collection"""
from typing import Any, Dict, Iterable, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from .async_mongo import get_async_collection
from .mongo_client import Collections
from ..domain.enums import StaffStatus
from ..utils.idgen import stringify_ids, to_object_id

# Fields the engine reads
_STAFF_PROJECTION = {
    "fullName": 1,
    "email": 1,
    "role": 1,
    "organization": 1,
    "status": 1,
    "department": 1,
}


class StaffRepository:
    """Repository for staff (user) documents"""

    def __init__(self, database: Optional[AsyncIOMotorDatabase] = None):
        self._users = get_async_collection(Collections.USERS, database)

    async def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        doc = await self._users.find_one({"_id": to_object_id(user_id)}, _STAFF_PROJECTION)
        return stringify_ids(doc) if doc else None

    async def get_by_email_in_org(self, email: str, organization_id: str) -> Optional[Dict[str, Any]]:
        """Exact email lookup within one organization"""
        doc = await self._users.find_one(
            {"email": email, "organization": to_object_id(organization_id)},
            _STAFF_PROJECTION,
        )
        return stringify_ids(doc) if doc else None

    async def find_by_name_pattern_in_org(self, pattern: str, organization_id: str) -> List[Dict[str, Any]]:
        """
        Staff whose full name matches a regular expression, case-insensitively.

        The caller owns sanitizing user text into ``pattern``.
        """
        cursor = self._users.find(
            {
                "fullName": {"$regex": pattern, "$options": "i"},
                "organization": to_object_id(organization_id),
            },
            _STAFF_PROJECTION,
        )
        return stringify_ids(await cursor.to_list(length=None))

    async def get_names_by_ids(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Map of user id to full name for the ids that exist"""
        ids = list({str(uid) for uid in user_ids if uid})
        if not ids:
            return {}
        cursor = self._users.find({"_id": {"$in": [to_object_id(uid) for uid in ids]}}, {"fullName": 1})
        docs = stringify_ids(await cursor.to_list(length=None))
        return {doc["id"]: doc.get("fullName", "") for doc in docs}

    async def list_unarchived_excluding(
        self,
        organization_id: str,
        exclude_ids: Iterable[str]
    ) -> List[Dict[str, Any]]:
        """Staff of an organization who are not archived and not in ``exclude_ids``"""
        cursor = self._users.find(
            {
                "_id": {"$nin": [to_object_id(uid) for uid in exclude_ids]},
                "organization": to_object_id(organization_id),
                "status": {"$ne": StaffStatus.ARCHIVED.value},
            },
            {"fullName": 1},
        )
        return stringify_ids(await cursor.to_list(length=None))
