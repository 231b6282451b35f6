# =============================================================================
# pojotester -- VALUE FACTORY
# File:   pojotester/reflection/value_factory.py
# =============================================================================
#
# SCOPE
# -----
# Produces sample values for fields from their annotations, and basic
# instances of classes whose constructors require arguments.
#
# DETERMINISM
# -----------
# No random module. Every value is derived from (annotation, seed) only.
# Different seeds yield unequal values for every supported annotation that
# admits more than one value, which the equality verifier relies on.
#
# SUPPORTED ANNOTATIONS
# ---------------------
#   bool, int, float, complex, str, bytes, bytearray, Decimal, Fraction,
#   datetime / date / time / timedelta, UUID, Enum, pathlib paths,
#   numpy.ndarray (and numpy.typing.NDArray), numpy scalar types,
#   Optional / Union, Literal, Annotated, ClassVar, Final, NewType,
#   list / tuple / set / frozenset / dict and their typing / abc aliases,
#   any other class (via new_instance).
# Missing or unresolvable annotations yield strings.
#
# =============================================================================

from __future__ import annotations

import collections.abc
import datetime
import enum
import inspect
import pathlib
import types
import typing
import uuid
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple

import numpy as np

from pojotester.class_util import instantiate, qualified_name
from pojotester.exceptions import VerificationFailure
from pojotester.reflection.pojo_class import PojoField
from pojotester.utils.constants import (
    CLASS_NOT_INSTANTIABLE_TEMPLATE,
    RED_SEED,
)

_SEQUENCE_ORIGINS = frozenset({
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
})
_SET_ORIGINS = frozenset({
    set,
    collections.abc.Set,
    collections.abc.MutableSet,
})
_MAPPING_ORIGINS = frozenset({
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
})
_QUALIFIER_ORIGINS = (typing.ClassVar, typing.Final, typing.Annotated)

_EPOCH = datetime.datetime(2000, 1, 1)


def values_equal(expected: Any, actual: Any) -> bool:
    """
    Compare a written value with the value read back.

    numpy arrays are compared element-wise with numpy.array_equal; a
    comparison that raises counts as unequal.
    """
    if expected is actual:
        return True
    if isinstance(expected, np.ndarray) or isinstance(actual, np.ndarray):
        return bool(np.array_equal(expected, actual))
    try:
        return bool(expected == actual)
    except Exception:
        return False


def _constructor_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls.__init__)
    except Exception:
        return {}


class ValueFactory:
    """
    Deterministic sample-value factory.

    Prefab values registered with register() take precedence over the
    built-in rules: the red value is returned for odd seeds, the blue value
    for even seeds.
    """

    def __init__(self) -> None:
        self._prefab: Dict[Any, Tuple[Any, Any]] = {}

    def register(self, value_type: Any, red: Any, blue: Any) -> "ValueFactory":
        if values_equal(red, blue):
            raise ValueError(
                f"ValueFactory: red and blue values for {value_type!r} must differ"
            )
        self._prefab[value_type] = (red, blue)
        return self

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def value_for_field(
        self,
        field: PojoField,
        seed: int,
        sample: Optional[object] = None,
    ) -> Any:
        """
        Sample value for field.

        Unannotated fields take the type of their current value on sample,
        when one is given and the value is not None.
        """
        if field.annotation is not None:
            return self.value_for(field.annotation, seed)
        if sample is not None:
            current = getattr(sample, field.name, None)
            if current is not None:
                return self.value_for(type(current), seed)
        return self.value_for(None, seed)

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def value_for(self, annotation: Any, seed: int, _stack: Tuple[type, ...] = ()) -> Any:
        if annotation is None or annotation is typing.Any or annotation is object:
            return f"value-{seed}"
        if isinstance(annotation, (str, typing.ForwardRef, typing.TypeVar)):
            return f"value-{seed}"
        if annotation is type(None):
            return None

        if annotation in self._prefab:
            red, blue = self._prefab[annotation]
            return red if seed % 2 == 1 else blue

        supertype = getattr(annotation, "__supertype__", None)
        if supertype is not None:
            return self.value_for(supertype, seed, _stack)

        origin = typing.get_origin(annotation)
        if origin is not None:
            return self._value_for_generic(annotation, origin, seed, _stack)
        if annotation is typing.ClassVar or annotation is typing.Final:
            return f"value-{seed}"
        if isinstance(annotation, type):
            return self._value_for_class(annotation, seed, _stack)

        raise VerificationFailure(f"Cannot create a sample value for {annotation!r}.")

    def _value_for_generic(
        self, annotation: Any, origin: Any, seed: int, stack: Tuple[type, ...],
    ) -> Any:
        args = typing.get_args(annotation)

        if origin in _QUALIFIER_ORIGINS:
            return self.value_for(args[0] if args else None, seed, stack)
        if origin is typing.Union or origin is types.UnionType:
            candidates = [a for a in args if a is not type(None)]
            return self.value_for(candidates[0], seed, stack) if candidates else None
        if origin is typing.Literal:
            return args[(seed - 1) % len(args)]
        if origin is np.ndarray:
            return self._value_for_class(np.ndarray, seed, stack)

        element = args[0] if args else None
        if origin in _SEQUENCE_ORIGINS:
            return [self.value_for(element, seed, stack)]
        if origin in _SET_ORIGINS:
            return {self.value_for(element, seed, stack)}
        if origin is frozenset:
            return frozenset({self.value_for(element, seed, stack)})
        if origin in _MAPPING_ORIGINS:
            value_type = args[1] if len(args) > 1 else None
            return {self.value_for(element, seed, stack): self.value_for(value_type, seed, stack)}
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return (self.value_for(args[0], seed, stack),)
            if not args:
                return (seed,)
            return tuple(self.value_for(a, seed, stack) for a in args)
        if isinstance(origin, type):
            return self._value_for_class(origin, seed, stack)

        raise VerificationFailure(f"Cannot create a sample value for {annotation!r}.")

    def _value_for_class(self, cls: type, seed: int, stack: Tuple[type, ...]) -> Any:
        if cls is bool:
            return seed % 2 == 1
        if issubclass(cls, enum.Enum):
            members = list(cls)
            if not members:
                raise VerificationFailure(
                    f"Cannot create a sample value for empty enum {qualified_name(cls)}."
                )
            return members[(seed - 1) % len(members)]
        if issubclass(cls, np.ndarray):
            return np.arange(seed, seed + 3, dtype=np.float64)
        if issubclass(cls, np.generic):
            if issubclass(cls, np.bool_):
                return cls(seed % 2 == 1)
            return cls(seed)
        if issubclass(cls, int):
            return cls(seed)
        if cls is float:
            return seed + 0.5
        if cls is complex:
            return complex(seed, 1)
        if cls is str:
            return f"value-{seed}"
        if cls is bytes:
            return f"value-{seed}".encode("ascii")
        if cls is bytearray:
            return bytearray(f"value-{seed}".encode("ascii"))
        if cls is Decimal:
            return Decimal(seed) / Decimal(4)
        if cls is Fraction:
            return Fraction(seed, 3)
        if cls is datetime.datetime:
            return _EPOCH + datetime.timedelta(days=seed)
        if cls is datetime.date:
            return (_EPOCH + datetime.timedelta(days=seed)).date()
        if cls is datetime.time:
            return datetime.time(hour=seed % 24, minute=seed % 60)
        if cls is datetime.timedelta:
            return datetime.timedelta(seconds=seed)
        if cls is uuid.UUID:
            return uuid.UUID(int=seed)
        if issubclass(cls, pathlib.PurePath):
            return cls(f"value-{seed}")
        if cls in (list, tuple, set, frozenset):
            return cls([seed])
        if cls is dict:
            return {f"key-{seed}": seed}
        return self.new_instance(cls, seed, stack)

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def new_instance(
        self,
        cls: type,
        seed: int = RED_SEED,
        _stack: Tuple[type, ...] = (),
    ) -> object:
        """
        Construct a basic instance of cls.

        Required constructor parameters are filled with sample values built
        from their annotations; parameters with defaults are left out.

        Raises:
            VerificationFailure: "Class <name> cannot be instantiated."
        """
        failure = CLASS_NOT_INSTANTIABLE_TEMPLATE.format(name=qualified_name(cls))
        if cls in _stack:
            raise VerificationFailure(failure)

        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            return instantiate(cls)

        hints = _constructor_hints(cls)
        args = []
        kwargs = {}
        for parameter in signature.parameters.values():
            if parameter.default is not inspect.Parameter.empty:
                continue
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            annotation = hints.get(parameter.name, parameter.annotation)
            if annotation is inspect.Parameter.empty:
                annotation = None
            value = self.value_for(annotation, seed, _stack + (cls,))
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        if not args and not kwargs:
            return instantiate(cls)
        try:
            return cls(*args, **kwargs)
        except Exception as exc:
            raise VerificationFailure(failure) from exc
