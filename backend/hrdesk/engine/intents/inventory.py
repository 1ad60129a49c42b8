"""Inventory intents"""
from typing import Dict

from .context import IntentContext, format_amount, reply
from ..subject_resolver import build_name_pattern
from ...domain.models import AssistantReply


async def assigned(ctx: IntentContext) -> AssistantReply:
    items = await ctx.records.inventory_items(ctx.organization_id, assignee_id=ctx.subject.user_id)
    if not items:
        return reply(f"{ctx.has()} no inventory assigned.")
    lines = "\n".join(
        f"{item.get('name')} (Code: {item.get('itemCode')}, Serial: {item.get('serialNumber')})"
        for item in items
    )
    return reply(f"{ctx.possessive()} assigned inventory:\n{lines}")


async def total_available(ctx: IntentContext) -> AssistantReply:
    """Quantity summed over items whose name matches the requested item"""
    item_name = ctx.match.group(2).strip(" .")
    items = await ctx.records.inventory_items(ctx.organization_id, name_pattern=build_name_pattern(item_name))
    if not items:
        return reply(f"No inventory items found matching '{item_name}'.")
    total = sum(item.get("quantity") or 0 for item in items)
    return reply(f"Total available for '{item_name}': {format_amount(total)}")


async def new_requests(ctx: IntentContext) -> AssistantReply:
    requests = await ctx.records.pending_inventory_requests(ctx.organization_id, limit=10)
    if not requests:
        return reply("No new inventory requests.")

    names = await ctx.staff.get_names_by_ids(r.get("staff") for r in requests)
    lines = "\n".join(
        f"{r.get('itemName')} ({r.get('quantity')}) by {names.get(r.get('staff'), 'Unknown')}"
        for r in requests
    )
    return reply(f"New inventory requests:\n{lines}")


async def summary(ctx: IntentContext) -> AssistantReply:
    """Quantity per item name across the organization"""
    items = await ctx.records.inventory_items(ctx.organization_id)
    if not items:
        return reply("No inventory items found.")

    by_name: Dict[str, float] = {}
    for item in items:
        name = item.get("name")
        by_name[name] = by_name.get(name, 0) + (item.get("quantity") or 0)
    lines = "\n".join(f"{name}: {format_amount(qty)}" for name, qty in by_name.items())
    return reply(f"Inventory summary:\n{lines}")
