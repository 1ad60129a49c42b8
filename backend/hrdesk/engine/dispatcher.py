"""Intent Dispatcher - Answers free-text assistant queries

Stateless: each call scans the intent table, resolves the subject when the
rule allows it, runs the handler and post-processes the actions. Nothing is
kept between calls.
"""
import re
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .intent_table import INTENT_TABLE, Intent
from .intents.context import IntentContext, action, reply
from .subject_resolver import SubjectResolver
from .suggestions import admin_suggestions, show_examples
from ..config.settings import Settings, settings as default_settings
from ..domain.models import ActorContext, AssistantReply
from ..utils.logger import get_logger
from ..utils.time import resolve_timezone, utc_now

if TYPE_CHECKING:
    from ..repositories.hr_records_repo import HrRecordsRepository
    from ..repositories.settings_repo import SystemSettingsRepository
    from ..repositories.staff_repo import StaffRepository

logger = get_logger(__name__)

DEFAULT_ANSWER = (
    "Sorry, I'm not sure how to help with that yet. "
    "Try asking about attendance, leave, payroll, or training."
)
DEFAULT_ACTIONS = [
    action("What time did I clock in today?"),
    action("How many leave days do I have left?"),
]


class IntentDispatcher:
    """
    Routes a query to the first matching intent.

    Admin-only intents do not match for other roles, so the scan moves on
    to later rules and finally the default reply.
    """

    def __init__(
        self,
        records: "HrRecordsRepository",
        staff_repo: "StaffRepository",
        settings_repo: "SystemSettingsRepository",
        app_settings: Optional[Settings] = None,
        table: Optional[Sequence[Intent]] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._records = records
        self._staff_repo = staff_repo
        self._settings_repo = settings_repo
        self._settings = app_settings or default_settings
        self._table = list(table) if table is not None else INTENT_TABLE
        self._subjects = SubjectResolver(staff_repo)
        self._clock = clock

    def select(self, actor: ActorContext, query_text: str) -> Optional[Tuple[Intent, "re.Match"]]:
        """First intent whose pattern matches and whose role guard admits the actor"""
        for intent in self._table:
            match = intent.search(query_text)
            if match and intent.role_allowed(actor):
                return intent, match
        return None

    async def dispatch(self, actor: ActorContext, query_text: str) -> AssistantReply:
        selected = self.select(actor, query_text)
        if selected is None:
            logger.info(
                "No intent matched",
                extra={"user_id": actor.user_id, "organization_id": actor.organization_id}
            )
            return self._default_reply(actor, query_text)

        intent, match = selected
        logger.info(
            f"Intent matched: {intent.name}",
            extra={"intent": intent.name, "user_id": actor.user_id, "organization_id": actor.organization_id}
        )

        subject = actor
        if intent.subject_override and actor.is_admin:
            resolution = await self._subjects.resolve(actor, query_text)
            if resolution.is_terminal:
                return reply(resolution.message)
            subject = resolution.subject

        zone = resolve_timezone(await self._settings_repo.get_timezone(actor.organization_id))
        ctx = IntentContext(
            actor=actor,
            subject=subject,
            query=query_text,
            match=match,
            zone=zone,
            now=self._clock(),
            records=self._records,
            staff=self._staff_repo,
            settings=self._settings,
        )
        result = await intent.handler(ctx)

        if intent.append_suggestions and actor.is_admin:
            result.actions.extend(admin_suggestions(query_text))
        return result

    def _default_reply(self, actor: ActorContext, query_text: str) -> AssistantReply:
        actions: List = list(DEFAULT_ACTIONS)
        if actor.is_admin:
            actions.extend(admin_suggestions(query_text))
        actions.append(show_examples())
        return reply(DEFAULT_ANSWER, actions)
