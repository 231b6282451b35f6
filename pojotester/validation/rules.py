# =============================================================================
# pojotester -- STRUCTURAL RULES
# File:   pojotester/validation/rules.py
# =============================================================================
#
# SCOPE
# -----
# Rules inspect the shape of a class (fields, accessors, declared members)
# without running any of its behaviour. A rule raises VerificationFailure on
# its first violation and returns None otherwise.
#
# RULES
# -----
#   GetterMustExistRule                      -- every instance field has a getter
#   SetterMustExistRule                      -- every non-final instance field has a setter
#   SerializableMustHaveSerialVersionUIDRule -- Serializable declares __serial_version_uid__
#   NoFieldShadowingRule                     -- no redeclared ancestor field, no self-assignment
#   NoPublicFieldsExceptStaticFinalRule      -- public fields must be static final
#
# =============================================================================

from __future__ import annotations

import ast
import inspect
from typing import Any, Iterator, List, Optional, Protocol, Tuple

from pojotester.exceptions import VerificationFailure
from pojotester.reflection.factory import parse_function, get_pojo_class
from pojotester.reflection.pojo_class import PojoClass
from pojotester.utils.constants import SERIAL_VERSION_UID_ATTRIBUTE


class Rule(Protocol):
    def evaluate(self, pojo_class: PojoClass) -> None:
        ...


# =============================================================================
# SECTION 1 -- ACCESSOR RULES
# =============================================================================

class GetterMustExistRule:

    def evaluate(self, pojo_class: PojoClass) -> None:
        for field in pojo_class.instance_fields:
            if pojo_class.getter_for(field) is None:
                raise VerificationFailure(
                    f"[{pojo_class.name}] is missing a getter for field [{field.name}]."
                )


class SetterMustExistRule:

    def evaluate(self, pojo_class: PojoClass) -> None:
        for field in pojo_class.instance_fields:
            if field.is_final:
                continue
            if pojo_class.setter_for(field) is None:
                raise VerificationFailure(
                    f"[{pojo_class.name}] is missing a setter for field [{field.name}]."
                )


# =============================================================================
# SECTION 2 -- SERIALIZATION RULE
# =============================================================================

class SerializableMustHaveSerialVersionUIDRule:
    """
    A Serializable subclass must declare __serial_version_uid__ as an int in
    its own class body. Inheriting the value from an ancestor does not count.
    """

    def evaluate(self, pojo_class: PojoClass) -> None:
        if not pojo_class.is_serializable:
            return
        if not pojo_class.declares(SERIAL_VERSION_UID_ATTRIBUTE):
            raise VerificationFailure(
                f"[{pojo_class.name}] is Serializable but does not declare "
                f"{SERIAL_VERSION_UID_ATTRIBUTE}."
            )
        value = pojo_class.clazz.__dict__[SERIAL_VERSION_UID_ATTRIBUTE]
        if isinstance(value, bool) or not isinstance(value, int):
            raise VerificationFailure(
                f"[{pojo_class.name}] declares {SERIAL_VERSION_UID_ATTRIBUTE} "
                f"but it is not an int: {value!r}."
            )


# =============================================================================
# SECTION 3 -- SHADOWING RULE
# =============================================================================

def _own_functions(cls: type) -> Iterator[Tuple[str, Any]]:
    for name, value in cls.__dict__.items():
        if isinstance(value, (staticmethod, classmethod)):
            yield name, value.__func__
        elif isinstance(value, property):
            for accessor in (value.fget, value.fset, value.fdel):
                if accessor is not None:
                    yield name, accessor
        elif inspect.isfunction(value):
            yield name, value


def _self_assignment(func: Any) -> Optional[str]:
    """Return the first name assigned to itself in func, e.g. "name = name"."""
    tree = parse_function(inspect.unwrap(func))
    if tree is None:
        return None
    for node in ast.walk(tree):
        if not isinstance(node, ast.Assign) or len(node.targets) != 1:
            continue
        target, value = node.targets[0], node.value
        if isinstance(target, ast.Name) and isinstance(value, ast.Name):
            if target.id == value.id:
                return target.id
        if (isinstance(target, ast.Attribute) and isinstance(value, ast.Attribute)
                and isinstance(target.value, ast.Name) and isinstance(value.value, ast.Name)
                and target.value.id == value.value.id and target.attr == value.attr):
            return f"{target.value.id}.{target.attr}"
    return None


class NoFieldShadowingRule:
    """
    Fails when a field redeclares a field of an ancestor class, or when a
    method assigns a name to itself ("name = name") instead of to the
    receiver ("self._name = name").
    """

    def evaluate(self, pojo_class: PojoClass) -> None:
        clazz = pojo_class.clazz

        for base in clazz.__mro__[1:]:
            if base.__module__ == "builtins":
                continue
            inherited = {f.name for f in get_pojo_class(base).fields}
            for field in pojo_class.fields:
                if field.name in inherited:
                    raise VerificationFailure(
                        f"Field [{field.name}] on [{pojo_class.name}] shadows the field "
                        f"declared on [{base.__module__}.{base.__qualname__}]."
                    )

        for name, func in _own_functions(clazz):
            assigned = _self_assignment(func)
            if assigned is not None:
                raise VerificationFailure(
                    f"Method [{name}] on [{pojo_class.name}] assigns [{assigned}] to "
                    f"itself instead of to a field of the receiver."
                )


# =============================================================================
# SECTION 4 -- VISIBILITY RULE
# =============================================================================

class NoPublicFieldsExceptStaticFinalRule:

    def evaluate(self, pojo_class: PojoClass) -> None:
        for field in pojo_class.fields:
            if field.is_public and not (field.is_static and field.is_final):
                raise VerificationFailure(
                    f"Field [{field.name}] on [{pojo_class.name}] is public and not "
                    f"static final."
                )


def default_rules() -> List[Rule]:
    return [
        GetterMustExistRule(),
        SetterMustExistRule(),
        SerializableMustHaveSerialVersionUIDRule(),
        NoFieldShadowingRule(),
        NoPublicFieldsExceptStaticFinalRule(),
    ]
