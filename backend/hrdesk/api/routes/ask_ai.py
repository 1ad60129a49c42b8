"""
Ask AI API Routes - Free-text HR assistant

Provides:
- Query endpoint answering attendance, leave, training, task, payroll,
  expense and inventory questions for the current user (or, for admins,
  for a named staff member)
"""
from fastapi import APIRouter, Depends

from ..deps import get_assistant_service, get_current_user_dep
from ...domain.models import ActorContext, AssistantQueryRequest, AssistantReply
from ...services.assistant_service import AssistantService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/ask-ai", tags=["Ask AI"])


@router.post("/query", response_model=AssistantReply)
async def ask_ai_query(
    request: AssistantQueryRequest,
    actor: ActorContext = Depends(get_current_user_dep),
    service: AssistantService = Depends(get_assistant_service),
):
    """
    Answer a free-text question.

    Always 200 for business outcomes: unrecognised questions, unknown or
    ambiguous staff names and unparseable periods come back as answers.
    """
    return await service.ask(actor, request.query)
