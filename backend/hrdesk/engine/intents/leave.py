"""Leave intents"""
from typing import Dict, List

from .context import IntentContext, action, reply
from ...domain.enums import LeaveType, RecordStatus
from ...domain.models import AssistantReply
from ...utils.time import inclusive_day_count, year_bounds

# Older leave records store the status in lower case
APPROVED = [RecordStatus.APPROVED.value, "approved"]
PENDING = [RecordStatus.PENDING.value, "pending"]
REJECTED = [RecordStatus.REJECTED.value, "rejected"]


def _leave_range(ctx: IntentContext, leave: Dict) -> str:
    return f"{ctx.short_date(leave.get('startDate'))} to {ctx.short_date(leave.get('endDate'))}"


def _leave_lines(ctx: IntentContext, leaves: List[Dict], with_status: bool = False) -> str:
    lines = []
    for leave in leaves:
        line = f"{leave.get('leaveType')} leave: {_leave_range(ctx, leave)}"
        if with_status:
            line += f" ({leave.get('status')})"
        lines.append(line)
    return "\n".join(lines)


def _days(leave: Dict) -> int:
    if not leave.get("startDate") or not leave.get("endDate"):
        return 0
    return inclusive_day_count(leave["startDate"], leave["endDate"])


async def balance(ctx: IntentContext) -> AssistantReply:
    """Yearly allowance minus approved annual leave days starting this year"""
    start, before = year_bounds(ctx.today.year, ctx.zone)
    leaves = await ctx.records.leaves(
        ctx.subject.user_id,
        statuses=APPROVED,
        leave_type=LeaveType.ANNUAL.value,
        start_from=start,
        start_before=before,
    )
    used = sum(_days(leave) for leave in leaves)
    left = max(0, ctx.settings.annual_leave_allowance_days - used)

    answer = f"{ctx.has()} {left} annual leave day{'' if left == 1 else 's'} left this year."
    return reply(answer, [action("Show leave history", f"Show leave history for {ctx.subject.full_name}")])


async def history(ctx: IntentContext) -> AssistantReply:
    leaves = await ctx.records.leaves(ctx.subject.user_id, limit=5)
    if not leaves:
        return reply(f"{ctx.has()} no leave requests.")
    return reply(f"{ctx.possessive()} recent leave requests:\n{_leave_lines(ctx, leaves, with_status=True)}")


async def last_status(ctx: IntentContext) -> AssistantReply:
    last = await ctx.records.latest_leave(ctx.subject.user_id)
    if not last:
        return reply(f"{ctx.has()} not submitted any leave requests.")
    return reply(f"{ctx.possessive()} last leave request ({_leave_range(ctx, last)}) is {last.get('status')}.")


async def tracker(ctx: IntentContext) -> AssistantReply:
    """Days taken this year per leave type, any status"""
    start, before = year_bounds(ctx.today.year, ctx.zone)
    leaves = await ctx.records.leaves(ctx.subject.user_id, start_from=start, start_before=before)
    if not leaves:
        return reply(f"{ctx.has()} no leave records this year.")

    per_type: Dict[str, int] = {}
    for leave in leaves:
        leave_type = leave.get("leaveType")
        per_type[leave_type] = per_type.get(leave_type, 0) + _days(leave)

    summary = "\n".join(f"{leave_type}: {days} days" for leave_type, days in per_type.items())
    return reply(f"{ctx.possessive()} leave tracker for this year:\n{summary}")


async def upcoming(ctx: IntentContext) -> AssistantReply:
    leaves = await ctx.records.leaves(
        ctx.subject.user_id,
        statuses=APPROVED,
        start_from=ctx.now,
        ascending=True,
        limit=5,
    )
    if not leaves:
        return reply(f"{ctx.has()} no upcoming approved leaves.")
    return reply(f"{ctx.possessive()} upcoming approved leaves:\n{_leave_lines(ctx, leaves)}")


def _by_status(word: str, statuses: List[str]):
    async def handler(ctx: IntentContext) -> AssistantReply:
        leaves = await ctx.records.leaves(ctx.subject.user_id, statuses=statuses, limit=5)
        if not leaves:
            return reply(f"{ctx.has()} no {word} leave records.")
        return reply(f"{ctx.possessive()} {word} leaves:\n{_leave_lines(ctx, leaves)}")

    handler.__name__ = f"{word}_leaves"
    return handler


approved = _by_status("approved", APPROVED)
pending = _by_status("pending", PENDING)
rejected = _by_status("rejected", REJECTED)
