"""Attendance intents"""
from datetime import timedelta

from .context import IntentContext, action, reply
from ...domain.models import AssistantReply
from ...utils.time import day_bounds, format_clock_time, format_weekday, local_date, start_of_day, week_start

LAST_7_DAYS = action("Show my last 7 days' attendance", "Show me my last 7 days' attendance.")
MISSED_CHECK_INS = action("Do I have any missed check-ins this week?")


async def clock_in_today(ctx: IntentContext) -> AssistantReply:
    start, before = day_bounds(ctx.today, ctx.zone)
    record = await ctx.records.latest_check_in(ctx.subject.user_id, start, before)

    if record and record.get("checkIn"):
        answer = f"You clocked in today at {format_clock_time(record['checkIn'], ctx.zone)}."
    else:
        answer = "You have not clocked in today."
    return reply(answer, [LAST_7_DAYS, MISSED_CHECK_INS])


async def last_7_days(ctx: IntentContext) -> AssistantReply:
    today = ctx.today
    days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
    records = await ctx.records.attendance_between(
        ctx.subject.user_id,
        start_of_day(days[0], ctx.zone),
        start_of_day(today + timedelta(days=1), ctx.zone),
    )
    present = {local_date(r["date"], ctx.zone) for r in records if r.get("date")}

    week = " ".join(
        f"{format_weekday(day)}: {'Present' if day in present else 'Absent'}" for day in days
    )
    return reply(f"Here's your attendance for the last 7 days:\n{week}", [MISSED_CHECK_INS])


async def missed_check_ins(ctx: IntentContext) -> AssistantReply:
    """Days from Monday of this week through today with no attendance record"""
    today = ctx.today
    monday = week_start(today)
    records = await ctx.records.attendance_between(
        ctx.subject.user_id,
        start_of_day(monday, ctx.zone),
        start_of_day(today + timedelta(days=1), ctx.zone),
    )
    checked_in = {local_date(r["date"], ctx.zone) for r in records if r.get("date")}

    missed = 0
    day = monday
    while day <= today:
        if day not in checked_in:
            missed += 1
        day += timedelta(days=1)

    if missed == 0:
        answer = "You have no missed check-ins this week!"
    else:
        answer = f"You have {missed} missed check-in{'s' if missed > 1 else ''} this week."
    return reply(answer, [LAST_7_DAYS])


async def present_today(ctx: IntentContext) -> AssistantReply:
    start, before = day_bounds(ctx.today, ctx.zone)
    user_ids = await ctx.records.attendance_user_ids(ctx.organization_id, start, before)
    names = await ctx.staff.get_names_by_ids(user_ids)

    present = [names[user_id] for user_id in user_ids if user_id in names]
    if not present:
        return reply("No staff present today.")
    return reply(f"Present today: {', '.join(present)}")


async def absent_today(ctx: IntentContext) -> AssistantReply:
    start, before = day_bounds(ctx.today, ctx.zone)
    user_ids = await ctx.records.attendance_user_ids(ctx.organization_id, start, before)
    absent = await ctx.staff.list_unarchived_excluding(ctx.organization_id, user_ids)

    if not absent:
        return reply("No staff absent today.")
    return reply(f"Absent today: {', '.join(doc.get('fullName', '') for doc in absent)}")
