"""Intent handlers for the assistant, one module per HR area"""
from .context import IntentContext, action, format_amount, reply

__all__ = [
    "IntentContext",
    "action",
    "format_amount",
    "reply",
]
