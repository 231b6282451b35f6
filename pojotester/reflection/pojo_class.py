# pojotester/reflection/pojo_class.py
# Structural descriptors of a class under test: its fields and the
# accessors (getters / setters) that expose them.
#
# Canonical import:
#   from pojotester.reflection import PojoClass, PojoField
#
# Descriptors are immutable and built on demand by
# pojotester.reflection.factory.get_pojo_class(). Nothing here is cached.

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from pojotester.serializable import Serializable


# ===========================================================================
# SECTION 1 -- HELPERS
# ===========================================================================

def _binds(func: Any, argument_count: int) -> bool:
    """True if func accepts exactly argument_count positional arguments."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(*([None] * argument_count))
    except TypeError:
        return False
    return True


def _mangling_prefix(cls: type) -> str:
    return "_" + cls.__name__.lstrip("_") + "__"


# ===========================================================================
# SECTION 2 -- PojoField
# ===========================================================================

@dataclass(frozen=True)
class PojoField:
    """
    A field declared by a class.

    Fields
    ------
    name            : Attribute name as stored on the instance. Private
                      "__x" names are stored mangled ("_Owner__x").
    declaring_class : Class whose body (or __init__) declares the field.
    annotation      : Declared annotation, or None when undeclared.
    is_static       : Class attribute rather than instance attribute.
    is_final        : Declared Final, or an UPPER_CASE class constant.
    """
    name:            str
    declaring_class: type
    annotation:      Any  = None
    is_static:       bool = False
    is_final:        bool = False

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")

    @property
    def property_name(self) -> str:
        """Name the accessors are expected under: "_test" -> "test"."""
        name = self.name
        prefix = _mangling_prefix(self.declaring_class)
        if name.startswith(prefix):
            name = name[len(prefix):]
        return name.lstrip("_")

    def get(self, instance: object) -> Any:
        """Read the field directly, bypassing any accessor."""
        owner = self.declaring_class if self.is_static else instance
        return getattr(owner, self.name)

    def set(self, instance: object, value: Any) -> None:
        """
        Write the field directly, bypassing any accessor.

        object.__setattr__ is used so that frozen dataclasses and classes
        overriding __setattr__ can still be populated.
        """
        if self.is_static:
            setattr(self.declaring_class, self.name, value)
        else:
            object.__setattr__(instance, self.name, value)


# ===========================================================================
# SECTION 3 -- PojoClass
# ===========================================================================

@dataclass(frozen=True)
class PojoClass:
    """
    A class under test together with its declared fields.

    Fields
    ------
    clazz  : The class itself.
    fields : Fields declared by clazz (not by its ancestors), in
             declaration order.
    """
    clazz:  type
    fields: Tuple[PojoField, ...]

    @property
    def name(self) -> str:
        return f"{self.clazz.__module__}.{self.clazz.__qualname__}"

    @property
    def instance_fields(self) -> Tuple[PojoField, ...]:
        return tuple(f for f in self.fields if not f.is_static)

    @property
    def is_serializable(self) -> bool:
        return issubclass(self.clazz, Serializable)

    @property
    def is_nested(self) -> bool:
        return "." in self.clazz.__qualname__

    @property
    def is_abstract(self) -> bool:
        return inspect.isabstract(self.clazz)

    @property
    def is_enum(self) -> bool:
        return issubclass(self.clazz, enum.Enum)

    def declares(self, attribute: str) -> bool:
        """True if the class body itself (not an ancestor) defines attribute."""
        return attribute in self.clazz.__dict__

    def getter_for(self, field: PojoField) -> Optional[Callable[[object], Any]]:
        """
        Return the getter exposing field, or None.

        Accepted forms, in order: a property named field.property_name with
        an fget; a get_<name>() method; an is_<name>() method.
        """
        name = field.property_name
        candidate = inspect.getattr_static(self.clazz, name, None)
        if isinstance(candidate, property) and candidate.fget is not None:
            return candidate.fget
        for prefix in ("get_", "is_"):
            method = inspect.getattr_static(self.clazz, prefix + name, None)
            if inspect.isfunction(method) and _binds(method, 1):
                return method
        return None

    def setter_for(self, field: PojoField) -> Optional[Callable[[object, Any], None]]:
        """
        Return the setter exposing field, or None.

        Accepted forms, in order: a property named field.property_name with
        an fset; a set_<name>(value) method.
        """
        name = field.property_name
        candidate = inspect.getattr_static(self.clazz, name, None)
        if isinstance(candidate, property) and candidate.fset is not None:
            return candidate.fset
        method = inspect.getattr_static(self.clazz, "set_" + name, None)
        if inspect.isfunction(method) and _binds(method, 2):
            return method
        return None

    def __str__(self) -> str:
        return f"PojoClass [{self.name}]"
