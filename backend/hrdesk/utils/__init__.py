"""Utility modules"""
from .logger import get_logger, setup_logging
from .jwt import JWTValidator, get_token_identity
from .idgen import generate_correlation_id, stringify_ids, to_object_id
from .time import utc_now, format_iso, parse_iso, resolve_timezone
from .periods import parse_pay_period

__all__ = [
    "get_logger",
    "setup_logging",
    "JWTValidator",
    "get_token_identity",
    "generate_correlation_id",
    "stringify_ids",
    "to_object_id",
    "utc_now",
    "format_iso",
    "parse_iso",
    "resolve_timezone",
    "parse_pay_period",
]
