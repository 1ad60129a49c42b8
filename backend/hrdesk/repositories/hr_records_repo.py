"""HR Records Repository - Read-only queries over attendance, leave, training,
task, payroll, expense and inventory records"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from .async_mongo import get_async_collection
from .mongo_client import Collections
from ..domain.enums import RecordStatus
from ..utils.idgen import stringify_ids, to_object_id


TRAINING_COST_FIELDS = [
    "registrationFee",
    "travelCost",
    "accommodationCost",
    "mealCost",
    "otherCost",
]


def _range(start: Optional[datetime] = None, before: Optional[datetime] = None) -> Dict[str, datetime]:
    condition: Dict[str, datetime] = {}
    if start is not None:
        condition["$gte"] = start
    if before is not None:
        condition["$lt"] = before
    return condition


class HrRecordsRepository:
    """
    Read access to the platform's HR collections.

    Every method returns plain dicts with ObjectIds stringified and ``_id``
    renamed to ``id``. Field names are the stored camelCase names.
    """

    def __init__(self, database: Optional[AsyncIOMotorDatabase] = None):
        self._attendances = get_async_collection(Collections.ATTENDANCES, database)
        self._leaves = get_async_collection(Collections.LEAVE_REQUESTS, database)
        self._trainings = get_async_collection(Collections.TRAINING_REQUESTS, database)
        self._tasks = get_async_collection(Collections.TASKS, database)
        self._payrolls = get_async_collection(Collections.PAYROLLS, database)
        self._expense_claims = get_async_collection(Collections.EXPENSE_CLAIMS, database)
        self._inventory_items = get_async_collection(Collections.INVENTORY_ITEMS, database)
        self._inventory_requests = get_async_collection(Collections.INVENTORY_REQUESTS, database)

    @staticmethod
    async def _find(
        collection: AsyncIOMotorCollection,
        query: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        cursor = collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return stringify_ids(await cursor.to_list(length=limit))

    @staticmethod
    async def _find_one(
        collection: AsyncIOMotorCollection,
        query: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
    ) -> Optional[Dict[str, Any]]:
        doc = await collection.find_one(query, sort=sort)
        return stringify_ids(doc) if doc else None

    # =========================================================================
    # Attendance
    # =========================================================================

    async def latest_check_in(self, user_id: str, start: datetime, before: datetime) -> Optional[Dict[str, Any]]:
        """Attendance record in [start, before) with the latest checkIn"""
        return await self._find_one(
            self._attendances,
            {"user": to_object_id(user_id), "date": _range(start, before)},
            sort=[("checkIn", DESCENDING)],
        )

    async def attendance_between(self, user_id: str, start: datetime, before: datetime) -> List[Dict[str, Any]]:
        return await self._find(
            self._attendances,
            {"user": to_object_id(user_id), "date": _range(start, before)},
        )

    async def attendance_user_ids(self, organization_id: str, start: datetime, before: datetime) -> List[str]:
        """Ids of users with an attendance record in [start, before), first-seen order"""
        records = await self._find(
            self._attendances,
            {"organization": to_object_id(organization_id), "date": _range(start, before)},
        )
        seen: List[str] = []
        for record in records:
            user_id = record.get("user")
            if user_id and user_id not in seen:
                seen.append(user_id)
        return seen

    # =========================================================================
    # Leave
    # =========================================================================

    async def leaves(
        self,
        user_id: str,
        statuses: Optional[Sequence[str]] = None,
        leave_type: Optional[str] = None,
        start_from: Optional[datetime] = None,
        start_before: Optional[datetime] = None,
        ascending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Leave requests of a user, sorted by startDate"""
        query: Dict[str, Any] = {"user": to_object_id(user_id)}
        if statuses:
            query["status"] = {"$in": list(statuses)}
        if leave_type:
            query["leaveType"] = leave_type
        date_range = _range(start_from, start_before)
        if date_range:
            query["startDate"] = date_range
        return await self._find(
            self._leaves,
            query,
            sort=[("startDate", ASCENDING if ascending else DESCENDING)],
            limit=limit,
        )

    async def latest_leave(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Most recently created leave request of a user"""
        return await self._find_one(
            self._leaves,
            {"user": to_object_id(user_id)},
            sort=[("createdAt", DESCENDING)],
        )

    # =========================================================================
    # Training
    # =========================================================================

    async def trainings(
        self,
        staff_id: str,
        statuses: Optional[Sequence[str]] = None,
        requested_from: Optional[datetime] = None,
        ascending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Training requests of a staff member, sorted by requestedDate"""
        query: Dict[str, Any] = {"staffId": to_object_id(staff_id)}
        if statuses:
            query["status"] = {"$in": list(statuses)}
        if requested_from is not None:
            query["requestedDate"] = {"$gte": requested_from}
        return await self._find(
            self._trainings,
            query,
            sort=[("requestedDate", ASCENDING if ascending else DESCENDING)],
            limit=limit,
        )

    async def approved_training_cost_totals(self, organization_id: str) -> Optional[Dict[str, Any]]:
        """
        Sum each cost field over approved trainings of an organization.

        Returns None when the organization has no approved trainings.
        Missing cost fields count as 0.
        """
        group: Dict[str, Any] = {"_id": None}
        for field in TRAINING_COST_FIELDS:
            group[field] = {"$sum": {"$ifNull": [f"$costBreakdown.{field}", 0]}}
        group["total"] = {
            "$sum": {
                "$add": [{"$ifNull": [f"$costBreakdown.{field}", 0]} for field in TRAINING_COST_FIELDS]
            }
        }

        pipeline = [
            {"$match": {
                "status": RecordStatus.APPROVED.value,
                "organization": to_object_id(organization_id),
            }},
            {"$group": group},
        ]
        results = await self._trainings.aggregate(pipeline).to_list(length=1)
        if not results:
            return None
        totals = results[0]
        totals.pop("_id", None)
        return totals

    # =========================================================================
    # Tasks
    # =========================================================================

    async def tasks(
        self,
        organization_id: str,
        assignee_id: Optional[str] = None,
        due_from: Optional[datetime] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Tasks of an organization, optionally for one assignee, sorted by endDate"""
        query: Dict[str, Any] = {"organization": to_object_id(organization_id)}
        if assignee_id:
            query["assignedTo"] = to_object_id(assignee_id)
        if due_from is not None:
            query["endDate"] = {"$gte": due_from}
        return await self._find(
            self._tasks,
            query,
            sort=[("endDate", ASCENDING if ascending else DESCENDING)],
            limit=limit,
        )

    # =========================================================================
    # Payroll
    # =========================================================================

    async def latest_payroll(
        self,
        staff_id: str,
        organization_id: str,
        pay_period: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Payroll of a staff member for a period, or the latest period when none is given"""
        query: Dict[str, Any] = {
            "staff": to_object_id(staff_id),
            "organization": to_object_id(organization_id),
        }
        if pay_period:
            query["payPeriod"] = pay_period
        return await self._find_one(self._payrolls, query, sort=[("payPeriod", DESCENDING)])

    async def payroll_by_net_salary(self, organization_id: str, highest: bool = True) -> Optional[Dict[str, Any]]:
        """Payroll record with the highest (or lowest) net salary in an organization"""
        return await self._find_one(
            self._payrolls,
            {"organization": to_object_id(organization_id)},
            sort=[("netSalary", DESCENDING if highest else ASCENDING)],
        )

    async def payrolls(self, organization_id: str, pay_period: Optional[str] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"organization": to_object_id(organization_id)}
        if pay_period:
            query["payPeriod"] = pay_period
        return await self._find(self._payrolls, query)

    # =========================================================================
    # Expense claims
    # =========================================================================

    async def expense_claims(
        self,
        staff_id: str,
        organization_id: str,
        statuses: Sequence[str],
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Expense claims of a staff member with one of ``statuses``, newest expense first"""
        return await self._find(
            self._expense_claims,
            {
                "staffId": to_object_id(staff_id),
                "organization": to_object_id(organization_id),
                "status": {"$in": list(statuses)},
            },
            sort=[("expenseDate", DESCENDING)],
            limit=limit,
        )

    # =========================================================================
    # Inventory
    # =========================================================================

    async def inventory_items(
        self,
        organization_id: str,
        assignee_id: Optional[str] = None,
        name_pattern: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Inventory items of an organization, by assignee and/or case-insensitive name pattern"""
        query: Dict[str, Any] = {"organization": to_object_id(organization_id)}
        if assignee_id:
            query["assignedTo"] = to_object_id(assignee_id)
        if name_pattern:
            query["name"] = {"$regex": name_pattern, "$options": "i"}
        return await self._find(self._inventory_items, query)

    async def pending_inventory_requests(self, organization_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Newest pending inventory requests of an organization"""
        return await self._find(
            self._inventory_requests,
            {
                "organization": to_object_id(organization_id),
                "status": RecordStatus.PENDING.value,
            },
            sort=[("createdAt", DESCENDING)],
            limit=limit,
        )
