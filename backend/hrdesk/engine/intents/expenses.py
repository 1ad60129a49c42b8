"""Expense claim intents"""
from typing import Dict

from .context import IntentContext, format_amount, reply
from ...domain.enums import RecordStatus
from ...domain.models import AssistantReply

REPORT_STATUSES = [
    RecordStatus.APPROVED.value,
    RecordStatus.REJECTED.value,
    RecordStatus.PENDING.value,
]


def _claim_line(ctx: IntentContext, claim: Dict) -> str:
    return (
        f"{claim.get('title')} ({claim.get('category')}) - {format_amount(claim.get('totalAmount'))} "
        f"on {ctx.short_date(claim.get('expenseDate'))}"
    )


def _by_status(status: RecordStatus):
    word = status.value.lower()

    async def handler(ctx: IntentContext) -> AssistantReply:
        claims = await ctx.records.expense_claims(
            ctx.subject.user_id, ctx.organization_id, [status.value], limit=10
        )
        if not claims:
            return reply(f"{ctx.has()} no {word} expense claims.")
        lines = "\n".join(_claim_line(ctx, claim) for claim in claims)
        return reply(f"{ctx.possessive()} {word} expense claims:\n{lines}")

    handler.__name__ = f"{word}_claims"
    return handler


pending = _by_status(RecordStatus.PENDING)
approved = _by_status(RecordStatus.APPROVED)
rejected = _by_status(RecordStatus.REJECTED)


async def report(ctx: IntentContext) -> AssistantReply:
    """Claim count and amounts per status for the subject"""
    claims = await ctx.records.expense_claims(ctx.subject.user_id, ctx.organization_id, REPORT_STATUSES)
    if not claims:
        return reply(f"{ctx.has()} no expense claims.")

    by_status = {status: 0 for status in REPORT_STATUSES}
    for claim in claims:
        status = claim.get("status")
        by_status[status] = by_status.get(status, 0) + (claim.get("totalAmount") or 0)
    total = sum(claim.get("totalAmount") or 0 for claim in claims)

    return reply(
        f"{ctx.possessive()} expense report:\n"
        f"Total claims: {len(claims)}\n"
        f"Total amount: {format_amount(total)}\n"
        f"Approved: {format_amount(by_status[RecordStatus.APPROVED.value])}\n"
        f"Pending: {format_amount(by_status[RecordStatus.PENDING.value])}\n"
        f"Rejected: {format_amount(by_status[RecordStatus.REJECTED.value])}"
    )
