# tests/objects/equality.py
# Targets for EqualsVerifier. Each class breaks (or honours) one part of
# the equality contract.

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, final


class NoEqualsObject:

    def __init__(self) -> None:
        self._value = None


class UnhashableObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value == other._value


class NonReflexiveObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return False

    def __hash__(self) -> int:
        return 0


class IdentityHashObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value == other._value

    def __hash__(self) -> int:
        return id(self)


class EqualsNoneObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        if other is None:
            return True
        return type(other) is type(self) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class NoneUnsafeObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class NullFieldUnsafeObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value.lower() == other._value.lower()

    def __hash__(self) -> int:
        return hash(self._value.lower())


class HashIgnoresFieldObject:
    _first:  Optional[str]
    _second: Optional[str]

    def __eq__(self, other: object) -> bool:
        return (type(other) is type(self)
                and self._first == other._first
                and self._second == other._second)

    def __hash__(self) -> int:
        return hash(self._first)


class HashExtraFieldObject:
    _first:  Optional[str]
    _second: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._first == other._first

    def __hash__(self) -> int:
        return hash((self._first, self._second))


class ValueObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class FinalValueObject:
    _value: Final[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class IsinstanceEqualityObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IsinstanceEqualityObject) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


@final
class FinalIsinstanceEqualityObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FinalIsinstanceEqualityObject) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


@dataclass(frozen=True)
class FrozenRecord:
    name:  str
    count: int


class Millimetres:
    """Value type without a no-argument constructor."""

    def __init__(self, amount: int) -> None:
        self.amount = amount

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)


class ShelfObject:
    _width: Millimetres

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._width == other._width

    def __hash__(self) -> int:
        return hash(self._width)


class AsymmetricObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value <= other._value

    def __hash__(self) -> int:
        return 0


class InconsistentNotEqualObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._value == other._value

    def __ne__(self, other: object) -> bool:
        return False

    def __hash__(self) -> int:
        return hash(self._value)


class EqualsUnrelatedObject:
    _value: Optional[str]

    def __eq__(self, other: object) -> bool:
        if other is None:
            return False
        if type(other) is not type(self):
            return True
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
