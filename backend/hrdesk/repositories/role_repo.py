"""Role Repository - Data access for custom roles"""
import re
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from .async_mongo import get_async_collection
from .mongo_client import Collections
from ..domain.models import PermissionMap, Role
from ..domain.errors import AlreadyExistsError, RoleNotFoundError
from ..utils.idgen import stringify_ids, to_object_id
from ..utils.logger import get_logger
from ..utils.time import utc_now

logger = get_logger(__name__)


class RoleRepository:
    """Repository for role documents"""

    def __init__(self, database: Optional[AsyncIOMotorDatabase] = None):
        self._roles = get_async_collection(Collections.ROLES, database)

    @staticmethod
    def _to_role(doc: Optional[Dict[str, Any]]) -> Optional[Role]:
        if not doc:
            return None
        return Role.from_document(stringify_ids(doc))

    # =========================================================================
    # Lookups
    # =========================================================================

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Exact, case-sensitive lookup used by permission resolution"""
        return self._to_role(await self._roles.find_one({"name": name}))

    async def get_by_name_insensitive(self, name: str) -> Optional[Role]:
        """Case-insensitive lookup used for the caller's own role"""
        doc = await self._roles.find_one({
            "name": {"$regex": f"^{re.escape(name)}$", "$options": "i"}
        })
        return self._to_role(doc)

    async def get_by_id(self, role_id: str) -> Optional[Role]:
        return self._to_role(await self._roles.find_one({"_id": to_object_id(role_id)}))

    async def list_roles(self) -> List[Role]:
        """All roles sorted by name"""
        docs = await self._roles.find({}).sort("name", ASCENDING).to_list(length=None)
        return [self._to_role(doc) for doc in docs]

    # =========================================================================
    # Writes
    # =========================================================================

    async def create_role(self, name: str, permissions: PermissionMap) -> Role:
        now = utc_now()
        doc = {
            "name": name,
            "permissions": permissions,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = await self._roles.insert_one(doc)
        except DuplicateKeyError:
            raise AlreadyExistsError(f"Role '{name}' already exists", details={"name": name})

        doc["_id"] = result.inserted_id
        logger.info(f"Created role: {name}", extra={"role": name})
        return self._to_role(doc)

    async def update_role(self, role_id: str, updates: Dict[str, Any]) -> Role:
        """Apply a partial update ({name?, permissions?}) and return the new role"""
        fields = dict(updates)
        fields["updatedAt"] = utc_now()
        try:
            doc = await self._roles.find_one_and_update(
                {"_id": to_object_id(role_id)},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise AlreadyExistsError(
                f"Role '{updates.get('name')}' already exists",
                details={"name": updates.get("name")},
            )
        if not doc:
            raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": role_id})

        role = self._to_role(doc)
        logger.info(f"Updated role: {role.name}", extra={"role": role.name})
        return role

    async def delete_role(self, role_id: str) -> None:
        result = await self._roles.delete_one({"_id": to_object_id(role_id)})
        if result.deleted_count == 0:
            raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": role_id})
        logger.info(f"Deleted role: {role_id}")
