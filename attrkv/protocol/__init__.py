"""Protocol module for attrkv."""

from .commands import Command, CommandType, Response, ResponseStatus
from .formatting import format_entry, format_value
from .parser import ProtocolParser

__all__ = [
    "Command",
    "CommandType",
    "Response",
    "ResponseStatus",
    "ProtocolParser",
    "format_entry",
    "format_value",
]
