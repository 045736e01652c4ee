"""
Attribute Value Module

Typed attribute values and the inference rule that turns a raw text token
into one.

Inference order (first match wins):
    1. ``true`` / ``false`` (exact, case-sensitive)  -> BOOLEAN
    2. anything ``float()`` accepts as base-10       -> NUMBER
    3. everything else, verbatim                     -> STRING
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class AttributeType(Enum):
    """Enumeration of attribute value types."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class AttributeValue:
    """
    A typed attribute value.

    The ``type`` tag is fixed at construction and always matches the
    Python type of ``value``: ``str`` for STRING, ``float`` for NUMBER,
    ``bool`` for BOOLEAN. Use the ``string()``, ``number()`` and
    ``boolean()`` constructors rather than building one by hand.

    Attributes:
        type: The AttributeType tag
        value: The payload for that tag
    """
    type: AttributeType
    value: Union[str, float, bool]

    @classmethod
    def string(cls, text: str) -> "AttributeValue":
        """Create a STRING value."""
        return cls(type=AttributeType.STRING, value=str(text))

    @classmethod
    def number(cls, number: float) -> "AttributeValue":
        """Create a NUMBER value."""
        return cls(type=AttributeType.NUMBER, value=float(number))

    @classmethod
    def boolean(cls, flag: bool) -> "AttributeValue":
        """Create a BOOLEAN value."""
        return cls(type=AttributeType.BOOLEAN, value=bool(flag))

    def matches(self, other: "AttributeValue") -> bool:
        """
        Check value equality within a single type.

        Values of different types never match, so ``true`` does not match
        ``1.0``. Numbers compare numerically (``nan`` matches nothing),
        strings compare exactly.
        """
        if self.type is not other.type:
            return False
        if self.type is AttributeType.NUMBER:
            return self.value == other.value
        if self.type is AttributeType.BOOLEAN:
            return self.value is other.value
        if self.type is AttributeType.STRING:
            return self.value == other.value
        raise TypeError(f"unhandled attribute type: {self.type!r}")


def _parse_number(token: str):
    """
    Parse a base-10 float, or return None.

    ``float()`` is more lenient than we want: it strips surrounding
    whitespace, allows ``_`` digit separators and accepts non-ASCII digits.
    Those tokens stay strings, as do finite spellings that overflow a
    double (``1e400``); only an explicit ``inf``/``infinity`` is infinite.
    """
    if not token or not token.isascii() or "_" in token:
        return None
    if token != token.strip():
        return None
    try:
        number = float(token)
    except ValueError:
        return None
    if math.isinf(number) and token.lstrip("+-").lower() not in ("inf", "infinity"):
        return None
    return number


def infer_value(token: str) -> AttributeValue:
    """
    Classify a raw text token into a typed AttributeValue.

    Args:
        token: Raw value text, exactly as it appeared on the command line

    Returns:
        The inferred AttributeValue. This never fails; anything that is
        neither a boolean literal nor a number is a string.

    Examples:
        >>> infer_value("true").type
        <AttributeType.BOOLEAN: 'boolean'>
        >>> infer_value("30").value
        30.0
        >>> infer_value("True").type
        <AttributeType.STRING: 'string'>
    """
    if token == "true" or token == "false":
        return AttributeValue.boolean(token == "true")

    number = _parse_number(token)
    if number is not None:
        return AttributeValue.number(number)

    return AttributeValue.string(token)


def is_whole_number(number: float) -> bool:
    """Return True for finite floats with no fractional part."""
    return math.isfinite(number) and number.is_integer()
