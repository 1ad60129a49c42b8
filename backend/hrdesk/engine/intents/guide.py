"""Guide intents - usage help and sample questions"""
from .context import IntentContext, action, reply
from ...domain.models import AssistantReply

SHOW_EXAMPLES = action("Show Examples", "Show me example questions")

HOW_TO_TEXT = (
    "**How to use Ask AI (Admin Guide)**\n\n"
    "- You can ask about any staff by name or email, e.g. 'Show approved leave for John Doe'.\n"
    "- Use keywords like 'approved leave', 'pending leave', 'inventory', 'payslip', "
    "'payroll summary', 'expense claims', 'tasks', 'training', etc.\n"
    "- Use [staff] and [month] placeholders in your queries.\n"
    "- Click on suggestion chips below the chat to auto-fill queries.\n"
    "- Click 'Show Examples' for more sample questions.\n\n"
    "**Sample Queries:**\n"
    "- Show approved leave for John Doe\n"
    "- Download payslip PDF for Jane Smith for June 2025\n"
    "- Show inventory for Ahmed Ali\n"
    "- Show pending expense claims for Amira Aldass\n"
    "- Show tasks for Ana Russo\n"
    "- Show approved training for Ahmed Ali"
)

EXAMPLES_TEXT = (
    "Sample questions you can ask:\n"
    "- Show my pending expense claims\n"
    "- Show approved expense claims for John Doe\n"
    "- Show rejected expense claims for Jane Smith\n"
    "- Show my expense report\n"
    "- Show inventory assigned to me\n"
    "- Show inventory for John Doe\n"
    "- Total items available for Laptop\n"
    "- Any new inventory requests?\n"
    "- Show inventory summary\n"
    "- Show inventory report"
)


async def how_to(ctx: IntentContext) -> AssistantReply:
    return reply(HOW_TO_TEXT, [SHOW_EXAMPLES])


async def examples(ctx: IntentContext) -> AssistantReply:
    return reply(EXAMPLES_TEXT)
