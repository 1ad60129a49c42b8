"""Intent Context - Everything a handler needs to answer one query"""
import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, List, Optional, TYPE_CHECKING

from ...config.settings import Settings
from ...domain.models import ActorContext, AssistantAction, AssistantReply, StaffMember
from ...utils.time import format_short_date, local_date

if TYPE_CHECKING:
    from ...repositories.hr_records_repo import HrRecordsRepository
    from ...repositories.staff_repo import StaffRepository


def format_amount(value: Any) -> str:
    """Render a number, dropping the fraction when it is whole (5000.0 -> 5000)"""
    if value is None or isinstance(value, bool):
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def action(label: str, query: Optional[str] = None) -> AssistantAction:
    """Follow-up action; the query defaults to the label"""
    return AssistantAction(label=label, query=label if query is None else query)


def reply(answer: str, actions: Optional[List[AssistantAction]] = None) -> AssistantReply:
    return AssistantReply(answer=answer, actions=list(actions or []))


@dataclass
class IntentContext:
    """
    Inputs of an intent handler.

    ``subject`` is the staff member the query is about: the actor, or the
    staff member an admin named with a ``for`` clause.
    """
    actor: ActorContext
    subject: StaffMember
    query: str
    match: "re.Match"
    zone: tzinfo
    now: datetime
    records: "HrRecordsRepository"
    staff: "StaffRepository"
    settings: Settings

    @property
    def organization_id(self) -> Optional[str]:
        return self.actor.organization_id

    @property
    def is_redirected(self) -> bool:
        """True when an admin is asking about someone else"""
        return self.actor.is_admin and self.subject.user_id != self.actor.user_id

    @property
    def today(self) -> date:
        """Today's date in the organization timezone"""
        return local_date(self.now, self.zone)

    def has(self) -> str:
        """'You have' or '<Full Name> has'"""
        return f"{self.subject.full_name} has" if self.is_redirected else "You have"

    def possessive(self, own: str = "Your") -> str:
        """'Your' (or ``own``), or the subject's name with 's"""
        return f"{self.subject.full_name}'s" if self.is_redirected else own

    def short_date(self, value: Optional[datetime]) -> str:
        if value is None:
            return "-"
        return format_short_date(value, self.zone)
