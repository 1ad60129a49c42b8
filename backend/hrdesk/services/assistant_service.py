"""Assistant Service - Entry point for Ask AI queries"""
from typing import Optional

from ..config.settings import Settings
from ..domain.models import ActorContext, AssistantReply
from ..engine.dispatcher import IntentDispatcher
from ..repositories.hr_records_repo import HrRecordsRepository
from ..repositories.settings_repo import SystemSettingsRepository
from ..repositories.staff_repo import StaffRepository
from ..utils.logger import get_context_logger


class AssistantService:
    """Service answering free-text HR questions for the current actor"""

    def __init__(
        self,
        records: HrRecordsRepository,
        staff_repo: StaffRepository,
        settings_repo: SystemSettingsRepository,
        app_settings: Optional[Settings] = None,
    ):
        self.dispatcher = IntentDispatcher(
            records=records,
            staff_repo=staff_repo,
            settings_repo=settings_repo,
            app_settings=app_settings,
        )

    async def ask(self, actor: ActorContext, query: str) -> AssistantReply:
        """
        Answer a query.

        Every business outcome (no match, ambiguous or unknown staff,
        unparseable period) is a normal reply. Data store failures propagate.
        """
        log = get_context_logger(__name__, user_id=actor.user_id, organization_id=actor.organization_id)
        log.info(f"Ask AI query from {actor.role} ({len(query)} chars)")

        result = await self.dispatcher.dispatch(actor, query.strip())

        log.info(f"Ask AI answered with {len(result.actions)} actions")
        return result
