"""
Protocol Command and Response Definitions

This module defines the data structures for shell commands and responses.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Mapping, Optional, Sequence, Tuple

from ..config.settings import settings
from ..store.values import AttributeValue
from .formatting import format_entry

HELP_TEXT = """\
Commands:
  put <key> <name> <value> [<name> <value> ...]  Store attributes for a key
  get <key>                                      Show a key's attributes
  delete <key>                                   Remove a key
  search <name> <value>                          List keys with name == value
  keys                                           List all keys
  help                                           Show this message
  exit                                           Leave the shell

Values are typed on input: true/false are booleans, anything that parses
as a number is a number, everything else is a string. An attribute keeps
the type of its first value for the lifetime of the store."""


class CommandType(Enum):
    """Enumeration of supported command types."""
    PUT = auto()
    GET = auto()
    DELETE = auto()
    SEARCH = auto()
    KEYS = auto()
    HELP = auto()
    EXIT = auto()
    EMPTY = auto()
    UNKNOWN = auto()


class ResponseStatus(Enum):
    """Enumeration of response statuses."""
    OK = "OK"
    ERROR = "ERROR"


@dataclass
class Command:
    """
    Represents a parsed shell command.

    Attributes:
        type: The type of command
        key: The key for PUT/GET/DELETE
        pairs: (attribute name, raw value) pairs for PUT
        attribute: The attribute name for SEARCH
        value: The raw value text for SEARCH
        error: Diagnostic for a malformed command
        raw: The original raw command string
    """
    type: CommandType
    key: str = ""
    pairs: List[Tuple[str, str]] = field(default_factory=list)
    attribute: str = ""
    value: str = ""
    error: Optional[str] = None
    raw: str = ""

    @property
    def is_valid(self) -> bool:
        """Check if the command can be executed."""
        return self.type != CommandType.UNKNOWN and self.error is None


@dataclass
class Response:
    """
    Represents a shell response.

    Attributes:
        status: OK or ERROR
        message: The text written back (may span several lines)
    """
    status: ResponseStatus
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> "Response":
        """Create a successful response."""
        return cls(status=ResponseStatus.OK, message=message)

    @classmethod
    def error(cls, message: str) -> "Response":
        """Create an error response."""
        return cls(status=ResponseStatus.ERROR, message=message)

    @classmethod
    def stored(cls) -> "Response":
        """Create the response for a successful PUT."""
        return cls.ok(message="Put is done")

    @classmethod
    def deleted(cls) -> "Response":
        """Create the response for DELETE (always succeeds)."""
        return cls.ok(message="Delete is done")

    @classmethod
    def data_type_error(cls) -> "Response":
        """Create the response for a PUT rejected by the type lock."""
        return cls.error(message="Data Type Error")

    @classmethod
    def key_not_found(cls, key: str) -> "Response":
        """Create the response for GET on a missing key."""
        return cls.error(message=f"No entry found for {key}")

    @classmethod
    def help(cls) -> "Response":
        """Create the HELP response."""
        return cls.ok(message=HELP_TEXT)

    @classmethod
    def entry_response(cls, entry: Mapping[str, AttributeValue]) -> "Response":
        """Create a GET response listing an entry's attributes."""
        return cls.ok(message=format_entry(entry))

    @classmethod
    def keys_response(cls, keys: Sequence[str]) -> "Response":
        """Create a SEARCH/KEYS response; no keys gives an empty line."""
        return cls.ok(message=settings.KEY_SEPARATOR.join(keys))
