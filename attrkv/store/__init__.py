"""Store module for attrkv."""

from .lock import ReadWriteLock
from .store import AttributeStore, DataTypeError
from .values import AttributeType, AttributeValue, infer_value

__all__ = [
    "AttributeStore",
    "AttributeType",
    "AttributeValue",
    "DataTypeError",
    "ReadWriteLock",
    "infer_value",
]
