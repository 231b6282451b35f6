# pojotester/equality/__init__.py
# Equality-contract verification for __eq__ / __hash__.

from pojotester.equality.equals_verifier import EqualsVerifier, EqualsWarning

__all__ = [
    "EqualsVerifier",
    "EqualsWarning",
]
