"""Task intents"""
from typing import Dict, List

from .context import IntentContext, reply
from ...domain.models import AssistantReply


def _task_line(ctx: IntentContext, task: Dict) -> str:
    return f"{task.get('title')} (Due: {ctx.short_date(task.get('endDate'))}, Status: {task.get('status')})"


def _lines(ctx: IntentContext, tasks: List[Dict]) -> str:
    return "\n".join(_task_line(ctx, task) for task in tasks)


async def mine(ctx: IntentContext) -> AssistantReply:
    """Next five tasks of the subject that are not yet due"""
    tasks = await ctx.records.tasks(
        ctx.organization_id, assignee_id=ctx.subject.user_id, due_from=ctx.now, limit=5
    )
    if not tasks:
        return reply(f"{ctx.has()} no active tasks.")
    return reply(f"{ctx.possessive()} current tasks:\n{_lines(ctx, tasks)}")


async def all_mine(ctx: IntentContext) -> AssistantReply:
    """Ten most recently due tasks of the subject, including past ones"""
    tasks = await ctx.records.tasks(
        ctx.organization_id, assignee_id=ctx.subject.user_id, ascending=False, limit=10
    )
    if not tasks:
        return reply(f"{ctx.has()} no tasks.")
    return reply(f"{ctx.possessive('All your')} tasks:\n{_lines(ctx, tasks)}")


async def active(ctx: IntentContext) -> AssistantReply:
    tasks = await ctx.records.tasks(
        ctx.organization_id, assignee_id=ctx.subject.user_id, due_from=ctx.now, limit=10
    )
    if not tasks:
        return reply(f"{ctx.has()} no active tasks.")
    return reply(f"{ctx.possessive()} active tasks:\n{_lines(ctx, tasks)}")


def _assignees(task: Dict) -> List[str]:
    assigned = task.get("assignedTo") or []
    return [assigned] if isinstance(assigned, str) else list(assigned)


async def all_staff(ctx: IntentContext) -> AssistantReply:
    tasks = await ctx.records.tasks(ctx.organization_id, due_from=ctx.now, limit=10)
    if not tasks:
        return reply("No active tasks for any staff.")

    names = await ctx.staff.get_names_by_ids(uid for task in tasks for uid in _assignees(task))

    lines = []
    for task in tasks:
        assigned = ", ".join(names.get(uid, "Unknown") for uid in _assignees(task))
        lines.append(
            f"{task.get('title')} (Due: {ctx.short_date(task.get('endDate'))}, "
            f"Status: {task.get('status')}, Assigned to: {assigned})"
        )
    return reply("Active tasks for staff:\n" + "\n".join(lines))
