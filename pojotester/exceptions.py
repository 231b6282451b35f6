# =============================================================================
# pojotester -- EXCEPTIONS
# File:   pojotester/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Defines the single failure signal raised by every verification in the
# package, plus the designated error a non-instantiable class must raise.
#
# EXCEPTION HIERARCHY
# -------------------
#   VerificationFailure(AssertionError)                -- every verification
#   UnsupportedOperationException(NotImplementedError) -- raised by user code
#
# MESSAGE CONTRACT
# ----------------
# Callers (test frameworks) tell failures apart by message text only.
# Every message is deterministic and non-empty.
#
# =============================================================================

from __future__ import annotations


class VerificationFailure(AssertionError):
    """
    Raised when a class or instance violates a verified contract.

    Subclasses AssertionError so that test runners report it as a failed
    assertion rather than as an error.

    Attributes:
        message:  Human-readable description of the violated contract.
                  Always non-empty.
    """

    def __init__(self, message: str) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "VerificationFailure: message must be a non-empty string"
            )
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return self.__class__.__name__ + "(message=" + repr(self.message) + ")"


class UnsupportedOperationException(NotImplementedError):
    """
    Raised from the constructor of a class that must never be instantiated.

    Usage:
        class Helpers:
            def __init__(self) -> None:
                raise UnsupportedOperationException(
                    "This class should not be instantiated."
                )

    See pojotester.class_util.verify_private_no_arg_construction_throws().
    """
