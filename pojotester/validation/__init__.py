# pojotester/validation/__init__.py
# Structural rules, accessor testers and the Validator that runs them.

from pojotester.validation.rules import (
    GetterMustExistRule,
    NoFieldShadowingRule,
    NoPublicFieldsExceptStaticFinalRule,
    Rule,
    SerializableMustHaveSerialVersionUIDRule,
    SetterMustExistRule,
    default_rules,
)
from pojotester.validation.testers import (
    GetterTester,
    SetterTester,
    Tester,
    default_testers,
)
from pojotester.validation.validator import Validator, ValidatorBuilder

__all__ = [
    # Rules
    "Rule",
    "GetterMustExistRule",
    "SetterMustExistRule",
    "SerializableMustHaveSerialVersionUIDRule",
    "NoFieldShadowingRule",
    "NoPublicFieldsExceptStaticFinalRule",
    "default_rules",
    # Testers
    "Tester",
    "SetterTester",
    "GetterTester",
    "default_testers",
    # Orchestration
    "Validator",
    "ValidatorBuilder",
]
