# =============================================================================
# pojotester -- CONTRACT VERIFIER
# File:   pojotester/pojo_util.py
# Version: 1.0.0
# =============================================================================
#
# SCOPE
# -----
# One-call verification of data-holder classes:
#   1. Getters and setters exist and round-trip values.
#   2. Serializable classes declare __serial_version_uid__.
#   3. No field shadowing ("name = name" rather than "self._name = name").
#   4. No public fields except static final ones.
#   5. __eq__ and __hash__ honour the equality contract.
#   6. The display string (__str__, else __repr__) is declared by the class
#      itself and returns a str.
#
# Canonical import:
#   from pojotester.pojo_util import verify_all, verify_to_string
#
# Fail-fast: the first violation raises VerificationFailure. A package scan
# stops at the first failing class.
# =============================================================================

from __future__ import annotations

import logging
from typing import Optional, Sequence

from pojotester.class_util import (
    instantiate,
    qualified_name,
    resolve_type,
    resolve_zero_arg_behavior,
)
from pojotester.equality.equals_verifier import EqualsVerifier, EqualsWarning
from pojotester.exceptions import VerificationFailure
from pojotester.reflection.factory import get_pojo_class, get_pojo_classes_recursively
from pojotester.reflection.filters import FilterBasedOnInheritance
from pojotester.serializable import Serializable
from pojotester.utils.constants import (
    REPR_BEHAVIOR,
    STR_BEHAVIOR,
    TO_STRING_NOT_INVOKABLE_MESSAGE,
    TO_STRING_NULL_MESSAGE,
    TO_STRING_UNDEFINED_MESSAGE,
)
from pojotester.validation.rules import Rule, default_rules
from pojotester.validation.testers import Tester, default_testers
from pojotester.validation.validator import Validator, ValidatorBuilder

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 1 -- INTERNAL HELPERS
# =============================================================================

def _build_validator(
    rules: Optional[Sequence[Rule]],
    testers: Optional[Sequence[Tester]],
) -> Validator:
    rules = default_rules() if rules is None else rules
    testers = default_testers() if testers is None else testers
    return ValidatorBuilder.create().with_rules(*rules).with_testers(*testers).build()


def _verify_class(cls: type, validator: Validator) -> None:
    logger.info("Verifying %s", qualified_name(cls))
    validator.validate(get_pojo_class(cls))
    verify_equals_and_hash_code(cls)
    verify_to_string(cls)


# =============================================================================
# SECTION 2 -- PUBLIC API
# =============================================================================

def verify_all(
    target: object,
    rules: Optional[Sequence[Rule]] = None,
    testers: Optional[Sequence[Tester]] = None,
) -> None:
    """
    Verify a class, or every Serializable class under a package.

    Args:
        target:  A class, or the dotted name of a package. Packages are
                 scanned recursively and only Serializable subclasses are
                 verified, in discovery order.
        rules:   Rules to run; None selects default_rules().
        testers: Testers to run; None selects default_testers().

    Raises:
        VerificationFailure: on the first violation, or when target is
        neither a str nor a class.
    """
    validator = _build_validator(rules, testers)

    if isinstance(target, str):
        pojo_classes = get_pojo_classes_recursively(
            target, FilterBasedOnInheritance(Serializable),
        )
        logger.info("Verifying %d Serializable class(es) in %s", len(pojo_classes), target)
        for pojo_class in pojo_classes:
            _verify_class(resolve_type(pojo_class.name), validator)
        return

    if isinstance(target, type):
        _verify_class(target, validator)
        return

    raise VerificationFailure(
        f"Expected a package name or a class but received {type(target).__name__}."
    )


def verify_all_from_instance(
    instance: object,
    rules: Optional[Sequence[Rule]] = None,
    testers: Optional[Sequence[Tester]] = None,
) -> None:
    """As verify_all(type(instance)), with the display string taken from instance."""
    cls = type(instance)
    logger.info("Verifying %s from instance", qualified_name(cls))
    _build_validator(rules, testers).validate(get_pojo_class(cls))
    verify_equals_and_hash_code(cls)
    verify_to_string_from_instance(instance)


def verify_equals_and_hash_code(cls: type) -> None:
    """
    Verify __eq__ and __hash__ of cls.

    Mutable fields are allowed to take part in equality, and instances of
    subclasses must never compare equal.
    """
    EqualsVerifier.for_class(cls) \
        .suppress(EqualsWarning.NONFINAL_FIELDS) \
        .using_get_class() \
        .verify()


def verify_to_string(cls: type) -> None:
    """Instantiate cls with no arguments and verify its display string."""
    verify_to_string_from_instance(instantiate(cls))


def verify_to_string_from_instance(instance: object) -> None:
    """
    Verify that the display string is declared by the instance's own class.

    The display behaviour is __str__, or __repr__ when __str__ is the one
    inherited from object.

    Raises:
        VerificationFailure:
            "toString method is undefined."      declared by an ancestor
            "toString method cannot be invoked." raised, or returned a non-str
            "toString is null."                  returned None
    """
    cls = type(instance)

    behavior = resolve_zero_arg_behavior(cls, STR_BEHAVIOR)
    if behavior.declaring_class is object:
        behavior = resolve_zero_arg_behavior(cls, REPR_BEHAVIOR)

    if behavior.declaring_class is not cls:
        raise VerificationFailure(TO_STRING_UNDEFINED_MESSAGE)

    try:
        text = behavior.invoke(instance)
    except Exception as exc:
        raise VerificationFailure(TO_STRING_NOT_INVOKABLE_MESSAGE) from exc

    if text is None:
        raise VerificationFailure(TO_STRING_NULL_MESSAGE)
    if not isinstance(text, str):
        raise VerificationFailure(TO_STRING_NOT_INVOKABLE_MESSAGE)


__all__ = [
    "verify_all",
    "verify_all_from_instance",
    "verify_equals_and_hash_code",
    "verify_to_string",
    "verify_to_string_from_instance",
]
