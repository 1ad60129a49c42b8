"""Training intents"""
from typing import Dict

from .context import IntentContext, format_amount, reply
from ...domain.enums import RecordStatus
from ...domain.models import AssistantReply

COST_LABELS = [
    ("registrationFee", "Registration"),
    ("travelCost", "Travel"),
    ("accommodationCost", "Accommodation"),
    ("mealCost", "Meals"),
    ("otherCost", "Other"),
    ("total", "Total"),
]


def _with_status(ctx: IntentContext, training: Dict) -> str:
    return (
        f"{training.get('trainingTitle')} ({training.get('status')}) "
        f"on {ctx.short_date(training.get('requestedDate'))}"
    )


async def upcoming(ctx: IntentContext) -> AssistantReply:
    trainings = await ctx.records.trainings(
        ctx.subject.user_id,
        statuses=[RecordStatus.APPROVED.value, RecordStatus.PENDING.value],
        requested_from=ctx.now,
        ascending=True,
        limit=1,
    )
    if not trainings:
        return reply(f"{ctx.has()} no upcoming training sessions.")

    nxt = trainings[0]
    return reply(
        f"{ctx.possessive()} next training session is \"{nxt.get('trainingTitle')}\" "
        f"on {ctx.short_date(nxt.get('requestedDate'))}."
    )


async def history(ctx: IntentContext) -> AssistantReply:
    trainings = await ctx.records.trainings(ctx.subject.user_id, limit=5)
    if not trainings:
        return reply(f"{ctx.has()} no training sessions.")
    lines = "\n".join(_with_status(ctx, t) for t in trainings)
    return reply(f"{ctx.possessive()} recent training sessions:\n{lines}")


async def approved(ctx: IntentContext) -> AssistantReply:
    trainings = await ctx.records.trainings(
        ctx.subject.user_id, statuses=[RecordStatus.APPROVED.value], limit=5
    )
    if not trainings:
        return reply(f"{ctx.has()} no approved training sessions.")
    lines = "\n".join(
        f"{t.get('trainingTitle')} on {ctx.short_date(t.get('requestedDate'))}" for t in trainings
    )
    return reply(f"{ctx.possessive()} approved training sessions:\n{lines}")


async def requests(ctx: IntentContext) -> AssistantReply:
    trainings = await ctx.records.trainings(ctx.subject.user_id, limit=10)
    if not trainings:
        return reply(f"{ctx.has()} no training requests.")
    lines = "\n".join(_with_status(ctx, t) for t in trainings)
    return reply(f"{ctx.possessive()} training requests:\n{lines}")


async def costs(ctx: IntentContext) -> AssistantReply:
    """Organization-wide cost totals of approved trainings"""
    totals = await ctx.records.approved_training_cost_totals(ctx.organization_id)
    if not totals:
        return reply("No approved training costs found.")
    lines = "\n".join(f"{label}: {format_amount(totals.get(key, 0))}" for key, label in COST_LABELS)
    return reply(f"Total training costs (approved):\n{lines}")
