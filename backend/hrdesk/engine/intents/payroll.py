"""Payroll intents"""
from numbers import Number

from .context import IntentContext, format_amount, reply
from ...domain.models import AssistantReply
from ...utils.logger import get_logger
from ...utils.periods import PeriodParseError, parse_pay_period

logger = get_logger(__name__)

SALARY_FIELDS = [
    ("basic", "Basic"),
    ("housing", "Housing"),
    ("utility", "Utility"),
    ("transport", "Transport"),
    ("bonus", "Bonus"),
    ("reimbursements", "Reimbursements"),
    ("deductions", "Deductions"),
    ("taxes", "Taxes"),
]


def _is_amount(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


async def salary_breakdown(ctx: IntentContext) -> AssistantReply:
    payroll = await ctx.records.latest_payroll(ctx.subject.user_id, ctx.organization_id)
    if not payroll:
        return reply(f"{ctx.has()} no payroll records.")

    structure = payroll.get("salaryStructure") or {}
    lines = [f"{label}: {format_amount(structure.get(key, 0))}" for key, label in SALARY_FIELDS]
    lines.append(f"Net Salary: {format_amount(payroll.get('netSalary'))}")
    return reply(f"{ctx.possessive()} latest salary breakdown:\n" + "\n".join(lines))


async def payslip(ctx: IntentContext) -> AssistantReply:
    """Link to the payslip PDF for a named period, or the latest one"""
    try:
        pay_period = parse_pay_period(ctx.query)
    except PeriodParseError as e:
        logger.info(f"Payslip period not understood: {e}", extra={"user_id": ctx.actor.user_id})
        return reply("Could not determine payslip period.")

    payroll = await ctx.records.latest_payroll(ctx.subject.user_id, ctx.organization_id, pay_period)
    if not payroll:
        return reply(f"No payroll found for {pay_period or 'the latest period'}.")
    return reply(f"[Download PDF](/api/payroll/{payroll['id']}/payslip/pdf)")


def _net_salary_extreme(highest: bool):
    title = "Highest" if highest else "Lowest"

    async def handler(ctx: IntentContext) -> AssistantReply:
        payroll = await ctx.records.payroll_by_net_salary(ctx.organization_id, highest=highest)
        if not payroll:
            return reply("No payroll records found.")
        names = await ctx.staff.get_names_by_ids([payroll.get("staff")])
        name = names.get(payroll.get("staff"), "Unknown")
        return reply(f"{title} salary: {name} (Net: {format_amount(payroll.get('netSalary'))})")

    handler.__name__ = f"{title.lower()}_salary"
    return handler


highest_salary = _net_salary_extreme(highest=True)
lowest_salary = _net_salary_extreme(highest=False)


async def field_sum(ctx: IntentContext) -> AssistantReply:
    """Sum one salary structure field over every payroll of the organization"""
    field = ctx.match.group(1).lower()
    payrolls = await ctx.records.payrolls(ctx.organization_id)

    total = 0
    for payroll in payrolls:
        value = (payroll.get("salaryStructure") or {}).get(field)
        if _is_amount(value):
            total += value
    return reply(f"Sum of {field} for all staff: {format_amount(total)}")


async def monthly_summary(ctx: IntentContext) -> AssistantReply:
    try:
        pay_period = parse_pay_period(ctx.match.group(2))
    except PeriodParseError as e:
        logger.info(f"Payroll month not understood: {e}", extra={"user_id": ctx.actor.user_id})
        pay_period = None
    if not pay_period:
        return reply("Could not determine payroll month.")

    payrolls = await ctx.records.payrolls(ctx.organization_id, pay_period)
    if not payrolls:
        return reply(f"No payroll records found for {pay_period}.")

    names = await ctx.staff.get_names_by_ids(p.get("staff") for p in payrolls)
    total_net = sum(p.get("netSalary") or 0 for p in payrolls)
    lines = [
        f"{names.get(p.get('staff'), 'Unknown')}: Net {format_amount(p.get('netSalary'))}"
        for p in payrolls
    ]
    return reply(
        f"Payroll summary for {pay_period}:\n"
        f"Total staff: {len(payrolls)}\n"
        f"Total net paid: {format_amount(total_net)}\n" + "\n".join(lines)
    )
