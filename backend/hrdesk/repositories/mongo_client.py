"""MongoDB Client - Connection, indexes and health check (sync, used at startup)"""
from typing import Any, Dict, Iterable, List, Optional
from pymongo import MongoClient as PyMongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ConnectionFailure

from ..config.settings import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Collections:
    """Collection names shared with the rest of the platform"""
    USERS = "users"
    ROLES = "roles"
    SYSTEM_SETTINGS = "systemsettings"
    ATTENDANCES = "attendances"
    LEAVE_REQUESTS = "leaverequests"
    TRAINING_REQUESTS = "trainingrequests"
    TASKS = "tasks"
    PAYROLLS = "payrolls"
    EXPENSE_CLAIMS = "expenseclaims"
    INVENTORY_ITEMS = "inventoryitems"
    INVENTORY_REQUESTS = "inventoryrequests"


# Global client instance
_client: Optional[PyMongoClient] = None
_database: Optional[Database] = None


def get_client() -> PyMongoClient:
    """Get or create MongoDB client"""
    global _client
    if _client is None:
        logger.info(f"Connecting to MongoDB database '{settings.mongo_db}'")
        _client = PyMongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
        )
        try:
            _client.admin.command("ping")
            logger.info("MongoDB connection successful")
        except ConnectionFailure as e:
            logger.error(f"MongoDB connection failed: {e}")
            raise
    return _client


def get_database() -> Database:
    """Get the application database"""
    global _database
    if _database is None:
        client = get_client()
        _database = client[settings.mongo_db]
        logger.info(f"Using database: {settings.mongo_db}")
    return _database


def get_collection(name: str) -> Collection:
    """Get a collection from the database"""
    return get_database()[name]


def close_connection() -> None:
    """Close MongoDB connection"""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


def create_indexes() -> None:
    """
    Create the indexes the permission and assistant reads rely on.

    The collections belong to the wider platform; only read-path indexes
    are added here, plus the unique role name.
    """
    db = get_database()
    logger.info("Creating MongoDB indexes...")

    # Roles: looked up by exact name on every authorized request
    db[Collections.ROLES].create_index("name", unique=True)

    # Users: subject resolution is organization scoped
    users = db[Collections.USERS]
    users.create_index([("organization", ASCENDING), ("email", ASCENDING)])
    users.create_index([("organization", ASCENDING), ("status", ASCENDING)])

    db[Collections.SYSTEM_SETTINGS].create_index("organization")

    attendances = db[Collections.ATTENDANCES]
    attendances.create_index([("user", ASCENDING), ("date", DESCENDING)])
    attendances.create_index([("organization", ASCENDING), ("date", DESCENDING)])

    leaves = db[Collections.LEAVE_REQUESTS]
    leaves.create_index([("user", ASCENDING), ("startDate", DESCENDING)])
    leaves.create_index([("user", ASCENDING), ("createdAt", DESCENDING)])

    trainings = db[Collections.TRAINING_REQUESTS]
    trainings.create_index([("staffId", ASCENDING), ("requestedDate", DESCENDING)])
    trainings.create_index([("organization", ASCENDING), ("status", ASCENDING)])

    db[Collections.TASKS].create_index([("organization", ASCENDING), ("assignedTo", ASCENDING), ("endDate", ASCENDING)])

    payrolls = db[Collections.PAYROLLS]
    payrolls.create_index([("organization", ASCENDING), ("staff", ASCENDING), ("payPeriod", DESCENDING)])
    payrolls.create_index([("organization", ASCENDING), ("netSalary", DESCENDING)])

    db[Collections.EXPENSE_CLAIMS].create_index(
        [("organization", ASCENDING), ("staffId", ASCENDING), ("status", ASCENDING), ("expenseDate", DESCENDING)]
    )

    db[Collections.INVENTORY_ITEMS].create_index([("organization", ASCENDING), ("assignedTo", ASCENDING)])
    db[Collections.INVENTORY_REQUESTS].create_index(
        [("organization", ASCENDING), ("status", ASCENDING), ("createdAt", DESCENDING)]
    )

    logger.info("MongoDB indexes created successfully")


def health_check() -> Dict[str, Any]:
    """Check MongoDB health"""
    try:
        client = get_client()
        client.admin.command("ping")
        return {
            "status": "healthy",
            "database": settings.mongo_db,
            "connection": "ok"
        }
    except Exception as e:
        logger.error(f"MongoDB health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": settings.mongo_db,
            "error": str(e)
        }


def roles_without_document(names: Iterable[str]) -> List[str]:
    """Names among ``names`` that have no role document"""
    wanted = sorted(set(names))
    found = {
        doc["name"]
        for doc in get_collection(Collections.ROLES).find({"name": {"$in": wanted}}, {"name": 1})
    }
    return [name for name in wanted if name not in found]
