# =============================================================================
# pojotester -- TYPE INTROSPECTION HELPER
# File:   pojotester/class_util.py
# Version: 1.0.0
# =============================================================================
#
# SCOPE
# -----
# Assertion-oriented wrappers over dynamic class and member resolution.
# Every failure mode is converted into VerificationFailure so that callers
# never see ImportError, TypeError or AttributeError from introspection.
#
# Canonical import:
#   from pojotester.class_util import (
#       resolve_type,
#       instantiate,
#       resolve_zero_arg_behavior,
#       verify_private_no_arg_construction_throws,
#   )
#
# No module-level mutable state. No I/O beyond module imports.
# =============================================================================

from __future__ import annotations

import importlib
import inspect
from dataclasses import dataclass
from typing import Any

from pojotester.exceptions import (
    UnsupportedOperationException,
    VerificationFailure,
)
from pojotester.utils.constants import (
    CLASS_NOT_FOUND_TEMPLATE,
    CLASS_NOT_INSTANTIABLE_TEMPLATE,
    CONSTRUCTOR_NOT_FOUND_TEMPLATE,
    EXCEPTION_NOT_THROWN_TEMPLATE,
    METHOD_NOT_FOUND_TEMPLATE,
    NOT_INSTANTIABLE_MESSAGE,
    WRONG_EXCEPTION_MESSAGE_TEMPLATE,
)


# =============================================================================
# SECTION 1 -- BEHAVIOR HANDLE
# =============================================================================

@dataclass(frozen=True)
class BehaviorHandle:
    """
    A resolved zero-argument method.

    Fields
    ------
    name            : Attribute name the method was resolved under.
    declaring_class : First class along the MRO whose body defines the name.
    function        : The raw class attribute (function, slot wrapper,
                      staticmethod or classmethod object).
    """
    name:            str
    declaring_class: type
    function:        Any

    def invoke(self, instance: object) -> Any:
        """Call the method bound to instance and return its result."""
        binder = getattr(type(self.function), "__get__", None)
        if binder is None:
            return self.function()
        return binder(self.function, instance, type(instance))()


# =============================================================================
# SECTION 2 -- INTERNAL HELPERS
# =============================================================================

def qualified_name(cls: type) -> str:
    """Return the dotted name used in every failure message."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_private(name: str) -> bool:
    is_dunder = name.startswith("__") and name.endswith("__")
    return name.startswith("_") and not is_dunder


def _accepts_receiver_only(raw: Any) -> bool:
    """
    True if raw can be called with nothing but its receiver.

    Signatures that cannot be determined (some C callables) are accepted.
    """
    if isinstance(raw, staticmethod):
        func, bound = raw.__func__, ()
    elif isinstance(raw, classmethod):
        func, bound = raw.__func__, (None,)
    else:
        func, bound = raw, (None,)

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind(*bound)
    except TypeError:
        return False
    return True


def _has_no_arg_construction_path(cls: type) -> bool:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind()
    except TypeError:
        return False
    return True


# =============================================================================
# SECTION 3 -- PUBLIC API
# =============================================================================

def resolve_type(class_name: str) -> type:
    """
    Resolve a class from its dotted qualified name.

    The longest importable module prefix is imported and the remaining
    components are resolved as attributes, so nested classes
    ("pkg.module.Outer.Inner") are supported.

    Raises:
        VerificationFailure: "Class <class_name> cannot be found."
    """
    parts = class_name.split(".") if isinstance(class_name, str) else []

    for index in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:index])
        try:
            target: Any = importlib.import_module(module_name)
        except (ImportError, ValueError):
            continue
        except Exception as exc:
            raise VerificationFailure(
                CLASS_NOT_FOUND_TEMPLATE.format(name=class_name)
            ) from exc
        for attribute in parts[index:]:
            target = getattr(target, attribute, None)
            if target is None:
                break
        if isinstance(target, type):
            return target

    raise VerificationFailure(CLASS_NOT_FOUND_TEMPLATE.format(name=class_name))


def instantiate(cls: type) -> object:
    """
    Construct an instance through the ordinary zero-argument call cls().

    Raises:
        VerificationFailure: "Class <name> cannot be instantiated." when
        construction raises for any reason.
    """
    try:
        return cls()
    except Exception as exc:
        raise VerificationFailure(
            CLASS_NOT_INSTANTIABLE_TEMPLATE.format(name=qualified_name(cls))
        ) from exc


def resolve_zero_arg_behavior(cls: type, name: str) -> BehaviorHandle:
    """
    Locate a public method callable with no arguments besides the receiver.

    The name is looked up along cls.__mro__; inherited methods are found.
    Names with a single leading underscore count as inaccessible.

    Raises:
        VerificationFailure: "Method <name> not found or inaccessible."
    """
    failure = VerificationFailure(METHOD_NOT_FOUND_TEMPLATE.format(name=name))

    if not isinstance(name, str) or not name or _is_private(name):
        raise failure

    for klass in cls.__mro__:
        if name not in klass.__dict__:
            continue
        raw = klass.__dict__[name]
        if not (callable(raw) or isinstance(raw, (staticmethod, classmethod))):
            raise failure
        if not _accepts_receiver_only(raw):
            raise failure
        return BehaviorHandle(name=name, declaring_class=klass, function=raw)

    raise failure


def verify_private_no_arg_construction_throws(cls: type) -> None:
    """
    Verify that cls cannot be instantiated.

    The class must define a zero-argument construction path that raises
    UnsupportedOperationException with the message
    "This class should not be instantiated.", for example:

        class Helpers:
            def __init__(self) -> None:
                raise UnsupportedOperationException(
                    "This class should not be instantiated."
                )

    Meant for top-level classes only.

    Raises:
        VerificationFailure: when the construction path is missing, completes
        normally, raises another exception type, or raises with another
        message.
    """
    name = qualified_name(cls)

    if not _has_no_arg_construction_path(cls):
        raise VerificationFailure(CONSTRUCTOR_NOT_FOUND_TEMPLATE.format(name=name))

    try:
        cls()
    except Exception as exc:
        if type(exc) is not UnsupportedOperationException:
            raise VerificationFailure(
                EXCEPTION_NOT_THROWN_TEMPLATE.format(name=name)
            ) from exc
        if str(exc) != NOT_INSTANTIABLE_MESSAGE:
            raise VerificationFailure(
                WRONG_EXCEPTION_MESSAGE_TEMPLATE.format(name=name)
            ) from exc
        return

    raise VerificationFailure(EXCEPTION_NOT_THROWN_TEMPLATE.format(name=name))


__all__ = [
    "BehaviorHandle",
    "qualified_name",
    "resolve_type",
    "instantiate",
    "resolve_zero_arg_behavior",
    "verify_private_no_arg_construction_throws",
]
