"""Admin follow-up suggestions keyed on words in the query"""
import re
from typing import List, Tuple

from .intents.context import action
from .intents.guide import SHOW_EXAMPLES
from ..domain.models import AssistantAction

ADMIN_SUGGESTIONS: List[Tuple["re.Pattern", List[AssistantAction]]] = [
    (re.compile(r"leave", re.IGNORECASE), [
        action("Show approved leave for [staff]", "Show approved leave for "),
        action("Show pending leave for [staff]", "Show pending leave for "),
        action("Show leave tracker for [staff]", "Show leave tracker for "),
    ]),
    (re.compile(r"payroll|salary|payslip", re.IGNORECASE), [
        action("Download payslip PDF for [staff] for [month]", "Download payslip PDF for  for "),
        action("Show payroll summary for [month]", "Payroll summary for "),
        action("Who has the highest salary?"),
    ]),
    (re.compile(r"inventory", re.IGNORECASE), [
        action("Show inventory for [staff]", "Show inventory for "),
        action("Total items available for [item]", "Total items available for "),
        action("Any new inventory requests?"),
    ]),
    (re.compile(r"expense|claim", re.IGNORECASE), [
        action("Show pending expense claims for [staff]", "Show pending expense claims for "),
        action("Show approved expense claims for [staff]", "Show approved expense claims for "),
        action("Show expense report for [staff]", "Show expense report for "),
    ]),
    (re.compile(r"task", re.IGNORECASE), [
        action("Show tasks for [staff]", "Show tasks for "),
        action("Show all staff tasks"),
    ]),
    (re.compile(r"training", re.IGNORECASE), [
        action("Show approved training for [staff]", "Show approved training for "),
        action("Show training requests for [staff]", "Show training requests for "),
    ]),
]


def admin_suggestions(query_text: str) -> List[AssistantAction]:
    """Suggestions of every keyword group mentioned in the query, in group order"""
    suggestions: List[AssistantAction] = []
    for pattern, group in ADMIN_SUGGESTIONS:
        if pattern.search(query_text):
            suggestions.extend(group)
    return suggestions


def show_examples() -> AssistantAction:
    return SHOW_EXAMPLES
