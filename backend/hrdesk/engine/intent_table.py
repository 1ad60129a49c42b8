"""Intent Table - Ordered (pattern, handler) rules of the assistant

Rules are tried top to bottom and the first one that matches and admits
the actor's role wins. Order is precedence: specific inventory rules come
before the generic ``inventory ...`` rule, ``all my tasks`` before
``my tasks``.
"""
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from .intents import attendance, expenses, guide, inventory, leave, payroll, tasks, training
from .intents.context import IntentContext
from ..domain.models import ActorContext, AssistantReply

Handler = Callable[[IntentContext], Awaitable[AssistantReply]]


@dataclass(frozen=True)
class Intent:
    """
    One rule of the table.

    Attributes:
        name: Stable identifier used in logs and tests
        pattern: Case-insensitive regular expression searched in the query
        handler: Coroutine producing the reply
        admin_only: Non-admins never match this rule
        subject_override: An admin's ``for <staff>`` clause redirects the query
        append_suggestions: Admin suggestion actions are added after the reply
    """
    name: str
    pattern: "re.Pattern"
    handler: Handler
    admin_only: bool = False
    subject_override: bool = False
    append_suggestions: bool = True

    def search(self, query_text: str) -> Optional["re.Match"]:
        return self.pattern.search(query_text)

    def role_allowed(self, actor: ActorContext) -> bool:
        return actor.is_admin or not self.admin_only


def _intent(name: str, pattern: str, handler: Handler, **flags) -> Intent:
    return Intent(name=name, pattern=re.compile(pattern, re.IGNORECASE), handler=handler, **flags)


_PERIOD = r"(\d{4}[-/ ]?\d{1,2}|[A-Za-z]+\s*\d{4})"
_SALARY_FIELD = r"(basic|housing|utility|transport|bonus|reimbursements|deductions|taxes)"

INTENT_TABLE: List[Intent] = [
    # Guide
    _intent("guide.how_to", r"how to use ask ai", guide.how_to, append_suggestions=False),
    _intent("guide.examples", r"sample questions|example questions|\bhelp\b", guide.examples),

    # Attendance
    _intent("attendance.clock_in_today", r"clock in|check[- ]?in.*today", attendance.clock_in_today),
    _intent("attendance.last_7_days", r"last 7 days.*attendance", attendance.last_7_days),
    _intent("attendance.missed_check_ins", r"missed check[- ]?ins?", attendance.missed_check_ins),
    _intent("attendance.present_today", r"who.*present.*today|present staff.*today",
            attendance.present_today, admin_only=True),
    _intent("attendance.absent_today", r"who.*absent.*today|absent staff.*today",
            attendance.absent_today, admin_only=True),

    # Leave
    _intent("leave.balance", r"leave days.*left", leave.balance, subject_override=True),
    _intent("leave.history", r"leave history|my leave requests", leave.history, subject_override=True),
    _intent("leave.last_status", r"status.*last leave request", leave.last_status, subject_override=True),

    # Training
    _intent("training.upcoming", r"upcoming training", training.upcoming, subject_override=True),
    _intent("training.history", r"all.*training sessions|my training history",
            training.history, subject_override=True),

    # Tasks
    _intent("tasks.all_mine", r"all my tasks|show all my tasks", tasks.all_mine, subject_override=True),
    _intent("tasks.mine", r"my tasks|tasks assigned to me|what are my tasks", tasks.mine, subject_override=True),
    _intent("tasks.all_staff", r"all staff tasks|tasks for all staff", tasks.all_staff, admin_only=True),

    # Training
    _intent("training.approved", r"approved training", training.approved, subject_override=True),
    _intent("training.requests", r"training requests?", training.requests, subject_override=True),
    _intent("training.costs", r"training costs?", training.costs, admin_only=True),

    # Tasks
    _intent("tasks.active", r"view tasks|show tasks|list tasks", tasks.active, subject_override=True),

    # Leave
    _intent("leave.tracker", r"leave tracker|leave summary", leave.tracker, subject_override=True),
    _intent("leave.upcoming", r"upcoming leaves?", leave.upcoming, subject_override=True),

    # Payroll
    _intent("payroll.salary_breakdown", r"salary breakdown|salary details|show salary for|salary structure",
            payroll.salary_breakdown, subject_override=True),
    _intent("payroll.payslip", r"download.*payslip|payslip.*pdf", payroll.payslip, subject_override=True),
    _intent("payroll.highest_salary", r"highest salary|top salary|most paid",
            payroll.highest_salary, admin_only=True),
    _intent("payroll.lowest_salary", r"lowest salary|least paid|lowest paid",
            payroll.lowest_salary, admin_only=True),
    _intent("payroll.field_sum", rf"sum of {_SALARY_FIELD}", payroll.field_sum, admin_only=True),
    _intent("payroll.monthly_summary", rf"payroll (summary )?for {_PERIOD}",
            payroll.monthly_summary, admin_only=True),

    # Expenses
    _intent("expenses.pending", r"pending (expense )?claims?", expenses.pending, subject_override=True),
    _intent("expenses.approved", r"approved (expense )?claims?", expenses.approved, subject_override=True),
    _intent("expenses.rejected", r"rejected (expense )?claims?", expenses.rejected, subject_override=True),
    _intent("expenses.report", r"expense reports?|expense summary", expenses.report, subject_override=True),

    # Inventory
    _intent("inventory.assigned", r"inventory assigned( to)?", inventory.assigned, subject_override=True),
    _intent("inventory.total_available", r"total (items )?available for ([\w .'-]+)", inventory.total_available),
    _intent("inventory.new_requests", r"new inventory requests?", inventory.new_requests, admin_only=True),
    _intent("inventory.summary", r"inventory summary|inventory report", inventory.summary),

    # Leave by status
    _intent("leave.approved", r"approved leave", leave.approved, subject_override=True),
    _intent("leave.pending", r"pending leave", leave.pending, subject_override=True),
    _intent("leave.rejected", r"rejected leave", leave.rejected, subject_override=True),

    # Generic inventory rule, after the specific ones
    _intent("inventory.for_staff", r"inventory (for|of|assigned to)?", inventory.assigned, subject_override=True),
]


def find_intent(name: str) -> Intent:
    """Look up a rule by name"""
    for intent in INTENT_TABLE:
        if intent.name == name:
            return intent
    raise KeyError(name)
