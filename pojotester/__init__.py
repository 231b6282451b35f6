# pojotester/__init__.py
# Reflection-driven contract checks for data-holder classes.
# Version: 1.0.0
#
# ENTRY POINTS:
#   verify_all("my.package")        -- every Serializable class in a package
#   verify_all(Account)             -- a single class
#   verify_all_from_instance(obj)   -- a single class, display string from obj
#
# CI GATE:
#   python -m pojotester my.package

from .exceptions import UnsupportedOperationException, VerificationFailure
from .serializable import Serializable
from .class_util import (
    BehaviorHandle,
    instantiate,
    qualified_name,
    resolve_type,
    resolve_zero_arg_behavior,
    verify_private_no_arg_construction_throws,
)
from .pojo_util import (
    verify_all,
    verify_all_from_instance,
    verify_equals_and_hash_code,
    verify_to_string,
    verify_to_string_from_instance,
)

__version__ = "1.0.0"

__all__ = [
    # Errors
    "VerificationFailure",
    "UnsupportedOperationException",
    # Marker
    "Serializable",
    # Introspection helper
    "BehaviorHandle",
    "qualified_name",
    "resolve_type",
    "instantiate",
    "resolve_zero_arg_behavior",
    "verify_private_no_arg_construction_throws",
    # Contract verifier
    "verify_all",
    "verify_all_from_instance",
    "verify_equals_and_hash_code",
    "verify_to_string",
    "verify_to_string_from_instance",
]
