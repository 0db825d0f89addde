"""Structural equality and hashing for JSON values.

Python's own ``==`` is close to what JSON Schema wants but not quite: ``True``
compares equal to ``1`` and ``{"a": True} == {"a": 1}``. The functions here
compare by JSON variant first, so booleans never match numbers, while integer
and floating encodings of the same number still compare equal. Object
comparison and hashing are independent of key order.
"""

from typing import Any, Iterable

_MASK = (1 << 64) - 1


def is_number(value: Any) -> bool:
    """Returns True for JSON numbers (``int`` or ``float`` but never ``bool``)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_kind(value: Any) -> str:
    """Gets the JSON variant name of a native Python value.

    Args:
        value: A value as produced by ``json.load``

    Returns:
        One of 'null', 'boolean', 'number', 'string', 'array', 'object' or
        'unknown' for values outside the JSON data model.
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, (list, tuple)):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return 'unknown'


def values_equal(left: Any, right: Any) -> bool:
    """Compares two JSON values structurally.

    Args:
        left: The first value
        right: The second value

    Returns:
        True if both values have the same JSON variant and equal content
    """
    kind = json_kind(left)
    if kind != json_kind(right):
        return False
    if kind == 'array':
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    if kind == 'object':
        if len(left) != len(right):
            return False
        for key, value in left.items():
            if key not in right or not values_equal(value, right[key]):
                return False
        return True
    return left == right


def value_hash(value: Any) -> int:
    """Hashes a JSON value consistently with :func:`values_equal`.

    Object members are combined by addition so that the result does not
    depend on key order, while each member hash still binds key to value.

    Args:
        value: The value to hash

    Returns:
        An integer hash
    """
    kind = json_kind(value)
    if kind == 'array':
        return hash((kind, tuple(value_hash(item) for item in value)))
    if kind == 'object':
        accumulated = 0
        for key, member in value.items():
            accumulated = (accumulated + hash((key, value_hash(member)))) & _MASK
        return hash((kind, len(value), accumulated))
    if kind == 'unknown':
        return hash((kind, id(value)))
    # int and float hash alike when numerically equal
    return hash((kind, value))


class HashableValue:
    """Wraps a JSON value so it can live in a set or be used as a dict key."""

    __slots__ = ('value', '_hash')

    def __init__(self, value: Any):
        self.value = value
        self._hash = value_hash(value)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other) -> bool:
        if not isinstance(other, HashableValue):
            return NotImplemented
        return self._hash == other._hash and values_equal(self.value, other.value)

    def __repr__(self) -> str:
        return f"HashableValue({self.value!r})"


def has_unique_elements(values: Iterable[Any]) -> bool:
    """Checks that no two values in the iterable are structurally equal."""
    seen = set()
    for value in values:
        wrapped = HashableValue(value)
        if wrapped in seen:
            return False
        seen.add(wrapped)
    return True
