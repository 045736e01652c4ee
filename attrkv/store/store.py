"""
Attribute Store Module

This module implements the core typed attribute store.

Each key maps to an Entry (attribute name -> AttributeValue). Attribute
types are locked store-wide: the first value seen for a name fixes its
type, and every later Put must agree with it.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .lock import ReadWriteLock
from .values import AttributeType, AttributeValue, infer_value

logger = logging.getLogger(__name__)

Entry = Dict[str, AttributeValue]


class DataTypeError(ValueError):
    """
    Raised when a Put would change an attribute's locked type.

    Attributes:
        attribute: The attribute name that conflicted
        expected: The type the attribute is locked to
        actual: The type inferred from the rejected value
    """

    def __init__(self, attribute: str, expected: AttributeType, actual: AttributeType):
        self.attribute = attribute
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Data Type Error: attribute '{attribute}' is {expected.value}, "
            f"got {actual.value}"
        )


class AttributeStore:
    """
    Thread-safe in-memory attribute store.

    Operations:
    - put: Replace a key's Entry, enforcing the type lock (all-or-nothing)
    - get: Retrieve a copy of a key's Entry
    - delete: Remove a key (idempotent)
    - search: Keys whose attribute equals a value, sorted
    - keys: All keys, sorted

    Concurrency:
        One ReadWriteLock guards both the entries and the type registry.
        get/search/keys share it; put/delete take it exclusively, so a
        reader never sees an entry that disagrees with the registry.

    Internal Storage:
        _entries: key -> {attribute name -> AttributeValue}
        _types: attribute name -> AttributeType (grow-only)
    """

    def __init__(self):
        """Initialize an empty store with an empty type registry."""
        self._entries: Dict[str, Entry] = {}
        self._types: Dict[str, AttributeType] = {}
        self._lock = ReadWriteLock()

    def put(self, key: str, pairs: Iterable[Tuple[str, str]]) -> None:
        """
        Replace the Entry for a key.

        Args:
            key: The key to store
            pairs: Ordered (attribute name, raw value text) pairs. When a
                name repeats, the last value wins; repeats must still agree
                on type.

        Raises:
            DataTypeError: If any value's inferred type differs from the
                attribute's locked type (or from an earlier repeat in the
                same call). The store is left untouched.
        """
        typed = [(name, infer_value(raw)) for name, raw in pairs]

        with self._lock.write_locked():
            entry: Entry = {}
            staged: Dict[str, AttributeType] = {}

            for name, value in typed:
                expected = self._types.get(name, staged.get(name))
                if expected is not None and expected is not value.type:
                    logger.debug(
                        f"Rejected PUT {key}: {name} is {expected.value}, got {value.type.value}"
                    )
                    raise DataTypeError(name, expected, value.type)
                if name not in self._types:
                    staged[name] = value.type
                entry[name] = value

            # Validation passed; registry growth and the write land together
            self._types.update(staged)
            self._entries[key] = entry

        if staged:
            logger.debug(f"Registered attribute types: {sorted(staged)}")
        logger.debug(f"PUT {key} ({len(entry)} attributes)")

    def get(self, key: str) -> Optional[Entry]:
        """
        Retrieve the Entry for a key.

        Args:
            key: The key to look up

        Returns:
            A copy of the Entry (attribute order is unspecified), or None
            if the key is absent
        """
        with self._lock.read_locked():
            entry = self._entries.get(key)
            return dict(entry) if entry is not None else None

    def delete(self, key: str) -> bool:
        """
        Delete a key. Deleting a missing key is a no-op.

        Attribute type locks are not released, even when no remaining
        key uses the attribute.

        Returns:
            True if a key was removed, False if it didn't exist
        """
        with self._lock.write_locked():
            removed = self._entries.pop(key, None) is not None

        logger.debug(f"DELETE {key} ({'removed' if removed else 'absent'})")
        return removed

    def search(self, attribute: str, raw_value: str) -> List[str]:
        """
        Find keys whose attribute equals a value.

        The query's type is inferred from ``raw_value`` on its own; the
        registry is not consulted. A query of the wrong type simply
        matches nothing.

        Args:
            attribute: Attribute name to test
            raw_value: Raw value text to compare against

        Returns:
            Matching keys, sorted ascending
        """
        expected = infer_value(raw_value)

        with self._lock.read_locked():
            results = [
                key
                for key, entry in self._entries.items()
                if attribute in entry and entry[attribute].matches(expected)
            ]

        return sorted(results)

    def keys(self) -> List[str]:
        """Return all keys, sorted ascending."""
        with self._lock.read_locked():
            return sorted(self._entries)

    def attribute_types(self) -> Dict[str, AttributeType]:
        """Return a copy of the attribute type registry."""
        with self._lock.read_locked():
            return dict(self._types)

    def size(self) -> int:
        """Get the current number of keys in the store."""
        with self._lock.read_locked():
            return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Number of stored keys
            - registered_attributes: Number of locked attribute names
            - attribute_types: attribute name -> type name
        """
        with self._lock.read_locked():
            return {
                "total_keys": len(self._entries),
                "registered_attributes": len(self._types),
                "attribute_types": {name: t.value for name, t in sorted(self._types.items())},
            }
