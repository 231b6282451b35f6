# =============================================================================
# pojotester -- EQUALITY CONTRACT VERIFIER
# File:   pojotester/equality/equals_verifier.py
# =============================================================================
#
# SCOPE
# -----
# Verifies that __eq__ and __hash__ of a class honour the equality contract.
# Instances are created with cls.__new__(cls) and populated field by field
# with object.__setattr__, so __init__ never runs.
#
# CHECK ORDER (first failure wins)
# --------------------------------
#   1. Overridden    -- __eq__ is not object.__eq__
#   2. Hashable      -- __hash__ is not None
#   3. Reflexivity   -- x == x
#   4. Equal copies  -- instances with identical field values are equal
#   5. __ne__        -- != agrees with ==
#   6. Symmetry      -- x == y  <=>  y == x
#   7. Transitivity  -- x == y and y == z  =>  x == z
#   8. Hash          -- equal objects have equal, stable hashes
#   9. Non-nullity   -- x == None is falsy and does not raise
#  10. Type check    -- comparing with an unrelated object is falsy
#  11. Significant   -- __eq__ and __hash__ rely on the same fields
#  12. Null fields   -- None-able fields do not make __eq__/__hash__ raise
#  13. Subclass      -- behaviour against a trivial subclass
#
# SUPPRESSIONS
# ------------
#   NONFINAL_FIELDS    -- allow __eq__ to depend on mutable fields
#   NULL_FIELDS        -- skip check 12
#   STRICT_INHERITANCE -- allow non-final classes that accept subclasses
#   STRICT_HASHCODE    -- allow __hash__ to ignore fields __eq__ uses
#
# =============================================================================

from __future__ import annotations

import enum
import logging
import types
import typing
from typing import Any, Dict, List, Optional, Set, Tuple

from pojotester.class_util import qualified_name
from pojotester.exceptions import VerificationFailure
from pojotester.reflection.factory import get_pojo_class
from pojotester.reflection.pojo_class import PojoField
from pojotester.reflection.value_factory import ValueFactory, values_equal
from pojotester.utils.constants import BLUE_SEED, RED_SEED

logger = logging.getLogger(__name__)

_FRAMEWORK_MODULES = frozenset({"builtins", "typing", "abc"})


class EqualsWarning(enum.Enum):
    NONFINAL_FIELDS = "nonfinal_fields"
    NULL_FIELDS = "null_fields"
    STRICT_INHERITANCE = "strict_inheritance"
    STRICT_HASHCODE = "strict_hashcode"


# =============================================================================
# SECTION 1 -- HELPERS
# =============================================================================

def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception as exc:
        return f"<{type(value).__name__} instance; repr raised {type(exc).__name__}>"


def _admits_none(annotation: Any) -> bool:
    """True for unannotated, Any, and Optional / Union[..., None] fields."""
    if annotation is None or annotation is typing.Any or isinstance(annotation, str):
        return True
    origin = typing.get_origin(annotation)
    if origin in (typing.ClassVar, typing.Final, typing.Annotated):
        args = typing.get_args(annotation)
        return _admits_none(args[0]) if args else True
    if origin is typing.Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


def _is_frozen_dataclass(cls: type) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def _all_instance_fields(cls: type) -> List[PojoField]:
    """Instance fields of cls and its ancestors, base classes first."""
    fields: Dict[str, PojoField] = {}
    for klass in reversed(cls.__mro__):
        if klass.__module__ in _FRAMEWORK_MODULES:
            continue
        for field in get_pojo_class(klass).instance_fields:
            fields.setdefault(field.name, field)
    return list(fields.values())


# =============================================================================
# SECTION 2 -- VERIFIER
# =============================================================================

class EqualsVerifier:
    """
    Fluent equality-contract verifier.

        EqualsVerifier.for_class(Account) \\
            .suppress(EqualsWarning.NONFINAL_FIELDS) \\
            .using_get_class() \\
            .verify()

    verify() raises VerificationFailure describing the first broken check.
    """

    def __init__(self, cls: type) -> None:
        if not isinstance(cls, type):
            raise VerificationFailure(f"Expected a class but received {_safe_repr(cls)}.")
        self._cls = cls
        self._name = qualified_name(cls)
        self._suppressed: Set[EqualsWarning] = set()
        self._using_get_class = False
        self._values = ValueFactory()

    @classmethod
    def for_class(cls, target: type) -> "EqualsVerifier":
        return cls(target)

    def suppress(self, *warnings: EqualsWarning) -> "EqualsVerifier":
        self._suppressed.update(warnings)
        return self

    def using_get_class(self) -> "EqualsVerifier":
        """Require __eq__ to reject instances of subclasses."""
        self._using_get_class = True
        return self

    def with_prefab_values(self, value_type: Any, red: Any, blue: Any) -> "EqualsVerifier":
        try:
            self._values.register(value_type, red, blue)
        except ValueError as exc:
            raise VerificationFailure(
                f"Precondition: red and blue prefab values for {_safe_repr(value_type)} "
                f"are equal."
            ) from exc
        return self

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def verify(self) -> None:
        cls = self._cls
        if issubclass(cls, enum.Enum):
            raise VerificationFailure(
                f"Precondition: [{self._name}] is an enum; its members compare by identity."
            )

        self._check_overridden()
        self._check_hashable()

        fields = _all_instance_fields(cls)
        logger.debug("Verifying equality contract of %s (%d field(s))", self._name, len(fields))
        probe = self._probe()
        red = [(f, self._values.value_for_field(f, RED_SEED, probe)) for f in fields]
        blue = [(f, self._values.value_for_field(f, BLUE_SEED, probe)) for f in fields]

        self._check_contract(red, blue)
        self._check_significant_fields(red, blue)
        if EqualsWarning.NULL_FIELDS not in self._suppressed:
            self._check_null_fields(red)
        self._check_subclass(red)

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def _probe(self) -> Optional[object]:
        """A constructed instance, used to type unannotated fields."""
        try:
            return self._values.new_instance(self._cls)
        except VerificationFailure:
            logger.debug("No probe instance for %s; unannotated fields use strings", self._name)
            return None

    def _build(self, values: List[Tuple[PojoField, Any]], target: Optional[type] = None) -> object:
        target = target or self._cls
        try:
            instance = target.__new__(target)
        except Exception as exc:
            raise VerificationFailure(
                f"Precondition: [{self._name}] cannot be created without running "
                f"__init__: {type(exc).__name__}: {exc}"
            ) from exc
        for field, value in values:
            field.set(instance, value)
        return instance

    def _replace(
        self, values: List[Tuple[PojoField, Any]], field: PojoField, value: Any,
    ) -> List[Tuple[PojoField, Any]]:
        return [(f, value if f is field else v) for f, v in values]

    def _equals(self, left: object, right: object, check: str) -> bool:
        try:
            return bool(left == right)
        except Exception as exc:
            raise VerificationFailure(
                f"{check}: __eq__ of [{self._name}] raised {type(exc).__name__}: {exc}"
            ) from exc

    def _hash(self, instance: object, check: str) -> int:
        try:
            return hash(instance)
        except Exception as exc:
            raise VerificationFailure(
                f"{check}: __hash__ of [{self._name}] raised {type(exc).__name__}: {exc}"
            ) from exc

    def _fail(self, check: str, detail: str) -> None:
        raise VerificationFailure(f"{check}: {detail} [{self._name}]")

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_overridden(self) -> None:
        if self._cls.__eq__ is object.__eq__:
            self._fail("Equals", "__eq__ is inherited directly from object.")

    def _check_hashable(self) -> None:
        if self._cls.__hash__ is None:
            self._fail("Hash", "__eq__ is defined but __hash__ is None.")

    def _check_contract(
        self, red_values: List[Tuple[PojoField, Any]], blue_values: List[Tuple[PojoField, Any]],
    ) -> None:
        red = self._build(red_values)
        red_copy = self._build(red_values)
        red_copy2 = self._build(red_values)
        blue = self._build(blue_values)

        if not self._equals(red, red, "Reflexivity"):
            self._fail("Reflexivity", "object does not equal itself.")
        if not self._equals(red, red_copy, "Equal copies"):
            self._fail(
                "Equal copies",
                f"instances with identical field values are not equal: "
                f"{_safe_repr(red)} != {_safe_repr(red_copy)}.",
            )

        try:
            ne_copy = bool(red != red_copy)
            ne_blue = bool(red != blue)
        except Exception as exc:
            raise VerificationFailure(
                f"__ne__: __ne__ of [{self._name}] raised {type(exc).__name__}: {exc}"
            ) from exc
        if ne_copy or ne_blue == self._equals(red, blue, "__ne__"):
            self._fail("__ne__", "!= is inconsistent with ==.")

        if self._equals(red, blue, "Symmetry") != self._equals(blue, red, "Symmetry"):
            self._fail("Symmetry", f"{_safe_repr(red)} and {_safe_repr(blue)} disagree.")
        if not self._equals(red_copy, red, "Symmetry"):
            self._fail("Symmetry", "equal copies are not equal in reverse.")

        if not self._equals(red_copy, red_copy2, "Transitivity"):
            self._fail("Transitivity", "x == y and y == z, but not x == z.")

        first = self._hash(red, "Hash")
        if first != self._hash(red, "Hash"):
            self._fail("Hash", "__hash__ is not consistent between calls.")
        if first != self._hash(red_copy, "Hash"):
            self._fail(
                "Hash",
                f"equal objects have different hashes: {_safe_repr(red)} and "
                f"{_safe_repr(red_copy)}.",
            )

        try:
            is_equal_to_none = bool(red == None)  # noqa: E711
        except Exception as exc:
            raise VerificationFailure(
                f"Non-nullity: __eq__ of [{self._name}] raises {type(exc).__name__} "
                f"when compared with None."
            ) from exc
        if is_equal_to_none:
            self._fail("Non-nullity", "object is equal to None.")

        try:
            is_equal_to_unrelated = bool(red == object())
        except Exception as exc:
            raise VerificationFailure(
                f"Type check: __eq__ of [{self._name}] raises {type(exc).__name__} "
                f"when compared with an unrelated object."
            ) from exc
        if is_equal_to_unrelated:
            self._fail("Type check", "object is equal to an unrelated object.")

    def _check_significant_fields(
        self, red_values: List[Tuple[PojoField, Any]], blue_values: List[Tuple[PojoField, Any]],
    ) -> None:
        red = self._build(red_values)
        red_hash = self._hash(red, "Significant fields")
        immutable = _is_frozen_dataclass(self._cls)

        for (field, red_value), (_, blue_value) in zip(red_values, blue_values):
            if values_equal(red_value, blue_value):
                continue
            changed = self._build(self._replace(red_values, field, blue_value))
            eq_relies = not self._equals(red, changed, "Significant fields")
            hash_relies = red_hash != self._hash(changed, "Significant fields")

            if hash_relies and not eq_relies:
                self._fail(
                    "Significant fields",
                    f"__hash__ relies on [{field.name}], but __eq__ does not.",
                )
            if (eq_relies and not hash_relies
                    and EqualsWarning.STRICT_HASHCODE not in self._suppressed):
                self._fail(
                    "Significant fields",
                    f"__eq__ relies on [{field.name}], but __hash__ does not.",
                )
            if (eq_relies and not (field.is_final or immutable)
                    and EqualsWarning.NONFINAL_FIELDS not in self._suppressed):
                self._fail(
                    "Mutability",
                    f"__eq__ depends on mutable field [{field.name}]. Declare it Final, "
                    f"freeze the dataclass, or suppress NONFINAL_FIELDS.",
                )

    def _check_null_fields(self, red_values: List[Tuple[PojoField, Any]]) -> None:
        red = self._build(red_values)
        for field, _ in red_values:
            if not _admits_none(field.annotation):
                continue
            nulled = self._build(self._replace(red_values, field, None))
            check = f"Non-nullity (field [{field.name}] is None)"
            self._equals(red, nulled, check)
            self._equals(nulled, red, check)
            self._equals(nulled, nulled, check)
            self._hash(nulled, check)

    def _check_subclass(self, red_values: List[Tuple[PojoField, Any]]) -> None:
        cls = self._cls
        if getattr(cls, "__final__", False) and not self._using_get_class:
            return
        try:
            subclass = type(cls.__name__ + "Subclass", (cls,), {"__module__": cls.__module__})
        except TypeError:
            logger.debug("%s cannot be subclassed; subclass check skipped", self._name)
            return

        red = self._build(red_values)
        red_sub = self._build(red_values, subclass)
        forward = self._equals(red, red_sub, "Subclass")
        backward = self._equals(red_sub, red, "Subclass")

        if self._using_get_class:
            if forward or backward:
                self._fail(
                    "Subclass",
                    "object is equal to an instance of a trivial subclass with equal "
                    "fields. __eq__ should compare exact types.",
                )
            return

        if EqualsWarning.STRICT_INHERITANCE not in self._suppressed:
            self._fail(
                "Subclass",
                "class is not final. Decorate it with @typing.final, use "
                "using_get_class(), or suppress STRICT_INHERITANCE.",
            )
        if not (forward and backward):
            self._fail(
                "Subclass",
                "object is not equal to an instance of a trivial subclass with equal "
                "fields. Consider using_get_class().",
            )
