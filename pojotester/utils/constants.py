# pojotester/utils/constants.py
# Version: 1.0.0
# Canonical messages and names shared across the package.
# The message strings are part of the observable contract: test suites
# compare them byte for byte. Do not reword.
#
# Standard import pattern:
#   from pojotester.utils.constants import (
#       NOT_INSTANTIABLE_MESSAGE,
#       SERIAL_VERSION_UID_ATTRIBUTE,
#   )


# ---------------------------------------------------------------------------
# NON-INSTANTIABILITY
# ---------------------------------------------------------------------------

NOT_INSTANTIABLE_MESSAGE: str = "This class should not be instantiated."

CONSTRUCTOR_NOT_FOUND_TEMPLATE: str = "Constructor not found for class: {name}"

EXCEPTION_NOT_THROWN_TEMPLATE: str = (
    "UnsupportedOperationException should be thrown from constructor "
    "for class: {name}"
)

WRONG_EXCEPTION_MESSAGE_TEMPLATE: str = (
    "UnsupportedOperationException should contain message: "
    '"' + NOT_INSTANTIABLE_MESSAGE + '" for class: {name}'
)


# ---------------------------------------------------------------------------
# INTROSPECTION
# ---------------------------------------------------------------------------

CLASS_NOT_FOUND_TEMPLATE: str = "Class {name} cannot be found."
CLASS_NOT_INSTANTIABLE_TEMPLATE: str = "Class {name} cannot be instantiated."
METHOD_NOT_FOUND_TEMPLATE: str = "Method {name} not found or inaccessible."
PACKAGE_NOT_FOUND_TEMPLATE: str = "Package {name} cannot be found."
MODULE_NOT_IMPORTABLE_TEMPLATE: str = "Module {name} cannot be imported."


# ---------------------------------------------------------------------------
# DISPLAY STRING
# ---------------------------------------------------------------------------

TO_STRING_UNDEFINED_MESSAGE: str = "toString method is undefined."
TO_STRING_NOT_INVOKABLE_MESSAGE: str = "toString method cannot be invoked."
TO_STRING_NULL_MESSAGE: str = "toString is null."

# __str__ falls back to __repr__ when it is object.__str__.
STR_BEHAVIOR: str = "__str__"
REPR_BEHAVIOR: str = "__repr__"


# ---------------------------------------------------------------------------
# SERIALIZATION
# ---------------------------------------------------------------------------

# Must be declared in the class body of every Serializable subclass.
SERIAL_VERSION_UID_ATTRIBUTE: str = "__serial_version_uid__"


# ---------------------------------------------------------------------------
# SAMPLE VALUE SEEDS
# ---------------------------------------------------------------------------
# Deterministic seeds for ValueFactory. RED and BLUE must differ so that the
# equality verifier obtains two unequal values for every field.

RED_SEED: int    = 1
BLUE_SEED: int   = 2
TESTER_SEED: int = 3
