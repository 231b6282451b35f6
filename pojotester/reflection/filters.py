# pojotester/reflection/filters.py
# Discovery filters applied by get_pojo_classes_recursively().

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pojotester.reflection.pojo_class import PojoClass


class PojoClassFilter(Protocol):
    def include(self, pojo_class: "PojoClass") -> bool:
        ...


class FilterBasedOnInheritance:
    """Includes strict subclasses of base; base itself is excluded."""

    def __init__(self, base: type) -> None:
        self.base = base

    def include(self, pojo_class: "PojoClass") -> bool:
        clazz = pojo_class.clazz
        return clazz is not self.base and issubclass(clazz, self.base)

    def __repr__(self) -> str:
        return f"FilterBasedOnInheritance(base={self.base.__qualname__})"
