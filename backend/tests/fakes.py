"""In-memory stand-ins for the Mongo repositories, same method names and signatures"""
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from hrdesk.domain.errors import AlreadyExistsError, RoleNotFoundError
from hrdesk.domain.models import Role
from hrdesk.repositories.hr_records_repo import TRAINING_COST_FIELDS

ORG_ID = "org-1"

# Wednesday
NOW = datetime(2025, 6, 18, 9, 30, tzinfo=timezone.utc)


def staff_doc(user_id, full_name, email, role="staff", status="active", organization=ORG_ID):
    return {
        "id": user_id,
        "fullName": full_name,
        "email": email,
        "role": role,
        "organization": organization,
        "status": status,
    }


def _in_range(value, start=None, before=None) -> bool:
    if value is None:
        return False
    if start is not None and value < start:
        return False
    if before is not None and value >= before:
        return False
    return True


class FakeRoleRepository:
    def __init__(self, roles: Optional[Dict[str, Dict]] = None):
        self.roles: Dict[str, Role] = {}
        self._next_id = 1
        for name, permissions in (roles or {}).items():
            self._insert(name, permissions)

    def _insert(self, name: str, permissions: Dict) -> Role:
        role = Role(role_id=f"role-{self._next_id}", name=name, permissions=permissions,
                    created_at=NOW, updated_at=NOW)
        self._next_id += 1
        self.roles[role.role_id] = role
        return role

    async def get_by_name(self, name: str) -> Optional[Role]:
        return next((r for r in self.roles.values() if r.name == name), None)

    async def get_by_name_insensitive(self, name: str) -> Optional[Role]:
        return next((r for r in self.roles.values() if r.name.lower() == name.lower()), None)

    async def get_by_id(self, role_id: str) -> Optional[Role]:
        return self.roles.get(role_id)

    async def list_roles(self) -> List[Role]:
        return sorted(self.roles.values(), key=lambda r: r.name)

    async def create_role(self, name: str, permissions: Dict) -> Role:
        if await self.get_by_name(name):
            raise AlreadyExistsError(f"Role '{name}' already exists", details={"name": name})
        return self._insert(name, permissions)

    async def update_role(self, role_id: str, updates: Dict[str, Any]) -> Role:
        role = self.roles.get(role_id)
        if role is None:
            raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": role_id})
        updated = role.model_copy(update=updates)
        self.roles[role_id] = updated
        return updated

    async def delete_role(self, role_id: str) -> None:
        if self.roles.pop(role_id, None) is None:
            raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": role_id})


class FakeStaffRepository:
    def __init__(self, docs: Iterable[Dict[str, Any]] = ()):
        self.docs: Dict[str, Dict[str, Any]] = {doc["id"]: doc for doc in docs}

    async def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.docs.get(user_id)

    async def get_by_email_in_org(self, email: str, organization_id: str) -> Optional[Dict[str, Any]]:
        return next(
            (d for d in self.docs.values() if d["email"] == email and d["organization"] == organization_id),
            None,
        )

    async def find_by_name_pattern_in_org(self, pattern: str, organization_id: str) -> List[Dict[str, Any]]:
        regex = re.compile(pattern, re.IGNORECASE)
        return [
            d for d in self.docs.values()
            if d["organization"] == organization_id and regex.search(d["fullName"])
        ]

    async def get_names_by_ids(self, user_ids: Iterable[str]) -> Dict[str, str]:
        return {uid: self.docs[uid]["fullName"] for uid in user_ids if uid in self.docs}

    async def list_unarchived_excluding(self, organization_id: str, exclude_ids: Iterable[str]) -> List[Dict[str, Any]]:
        excluded = set(exclude_ids)
        return [
            d for d in self.docs.values()
            if d["organization"] == organization_id
            and d["status"] != "archived"
            and d["id"] not in excluded
        ]


class FakeSettingsRepository:
    def __init__(self, timezones: Optional[Dict[str, str]] = None):
        self.timezones = dict(timezones or {})

    async def get_timezone(self, organization_id: Optional[str]) -> Optional[str]:
        return self.timezones.get(organization_id)


class FakeHrRecordsRepository:
    """Records are plain dicts kept per collection; add them in tests with ``add``"""

    def __init__(self):
        self.collections: Dict[str, List[Dict[str, Any]]] = {
            "attendances": [],
            "leaverequests": [],
            "trainingrequests": [],
            "tasks": [],
            "payrolls": [],
            "expenseclaims": [],
            "inventoryitems": [],
            "inventoryrequests": [],
        }

    def add(self, collection: str, **doc: Any) -> Dict[str, Any]:
        items = self.collections[collection]
        doc.setdefault("id", f"{collection}-{len(items) + 1}")
        items.append(doc)
        return doc

    @staticmethod
    def _sorted(docs: List[Dict], key: str, descending: bool, limit: Optional[int] = None) -> List[Dict]:
        ordered = sorted(docs, key=lambda d: d[key], reverse=descending)
        return ordered[:limit] if limit else ordered

    async def latest_check_in(self, user_id: str, start: datetime, before: datetime) -> Optional[Dict[str, Any]]:
        docs = await self.attendance_between(user_id, start, before)
        docs = [d for d in docs if d.get("checkIn")]
        return max(docs, key=lambda d: d["checkIn"]) if docs else None

    async def attendance_between(self, user_id: str, start: datetime, before: datetime) -> List[Dict[str, Any]]:
        return [
            d for d in self.collections["attendances"]
            if d.get("user") == user_id and _in_range(d.get("date"), start, before)
        ]

    async def attendance_user_ids(self, organization_id: str, start: datetime, before: datetime) -> List[str]:
        seen: List[str] = []
        for d in self.collections["attendances"]:
            if d.get("organization") == organization_id and _in_range(d.get("date"), start, before):
                if d.get("user") not in seen:
                    seen.append(d.get("user"))
        return seen

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
        docs = [
            d for d in self.collections["leaverequests"]
            if d.get("user") == user_id
            and (not statuses or d.get("status") in statuses)
            and (not leave_type or d.get("leaveType") == leave_type)
            and (start_from is None and start_before is None
                 or _in_range(d.get("startDate"), start_from, start_before))
        ]
        return self._sorted(docs, "startDate", not ascending, limit)

    async def latest_leave(self, user_id: str) -> Optional[Dict[str, Any]]:
        docs = [d for d in self.collections["leaverequests"] if d.get("user") == user_id]
        return self._sorted(docs, "createdAt", True)[0] if docs else None

    async def trainings(
        self,
        staff_id: str,
        statuses: Optional[Sequence[str]] = None,
        requested_from: Optional[datetime] = None,
        ascending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        docs = [
            d for d in self.collections["trainingrequests"]
            if d.get("staffId") == staff_id
            and (not statuses or d.get("status") in statuses)
            and (requested_from is None or _in_range(d.get("requestedDate"), requested_from))
        ]
        return self._sorted(docs, "requestedDate", not ascending, limit)

    async def approved_training_cost_totals(self, organization_id: str) -> Optional[Dict[str, Any]]:
        docs = [
            d for d in self.collections["trainingrequests"]
            if d.get("organization") == organization_id and d.get("status") == "Approved"
        ]
        if not docs:
            return None
        totals = {field: 0 for field in TRAINING_COST_FIELDS}
        for d in docs:
            costs = d.get("costBreakdown") or {}
            for field in TRAINING_COST_FIELDS:
                totals[field] += costs.get(field) or 0
        totals["total"] = sum(totals[field] for field in TRAINING_COST_FIELDS)
        return totals

    async def tasks(
        self,
        organization_id: str,
        assignee_id: Optional[str] = None,
        due_from: Optional[datetime] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        docs = [
            d for d in self.collections["tasks"]
            if d.get("organization") == organization_id
            and (not assignee_id or d.get("assignedTo") == assignee_id)
            and (due_from is None or _in_range(d.get("endDate"), due_from))
        ]
        return self._sorted(docs, "endDate", not ascending, limit)

    async def latest_payroll(
        self,
        staff_id: str,
        organization_id: str,
        pay_period: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        docs = [
            d for d in self.collections["payrolls"]
            if d.get("staff") == staff_id
            and d.get("organization") == organization_id
            and (not pay_period or d.get("payPeriod") == pay_period)
        ]
        return self._sorted(docs, "payPeriod", True)[0] if docs else None

    async def payroll_by_net_salary(self, organization_id: str, highest: bool = True) -> Optional[Dict[str, Any]]:
        docs = [d for d in self.collections["payrolls"] if d.get("organization") == organization_id]
        return self._sorted(docs, "netSalary", highest)[0] if docs else None

    async def payrolls(self, organization_id: str, pay_period: Optional[str] = None) -> List[Dict[str, Any]]:
        return [
            d for d in self.collections["payrolls"]
            if d.get("organization") == organization_id
            and (not pay_period or d.get("payPeriod") == pay_period)
        ]

    async def expense_claims(
        self,
        staff_id: str,
        organization_id: str,
        statuses: Sequence[str],
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        docs = [
            d for d in self.collections["expenseclaims"]
            if d.get("staffId") == staff_id
            and d.get("organization") == organization_id
            and d.get("status") in statuses
        ]
        return self._sorted(docs, "expenseDate", True, limit)

    async def inventory_items(
        self,
        organization_id: str,
        assignee_id: Optional[str] = None,
        name_pattern: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        regex = re.compile(name_pattern, re.IGNORECASE) if name_pattern else None
        return [
            d for d in self.collections["inventoryitems"]
            if d.get("organization") == organization_id
            and (not assignee_id or d.get("assignedTo") == assignee_id)
            and (regex is None or regex.search(d.get("name") or ""))
        ]

    async def pending_inventory_requests(self, organization_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        docs = [
            d for d in self.collections["inventoryrequests"]
            if d.get("organization") == organization_id and d.get("status") == "Pending"
        ]
        return self._sorted(docs, "createdAt", True, limit)
