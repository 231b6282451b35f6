# =============================================================================
# pojotester -- EQUALITY CONTRACT VERIFIER TESTS
# File:   tests/unit/equality/test_equals_verifier.py
# =============================================================================

import pytest

from pojotester.equality import EqualsVerifier, EqualsWarning
from pojotester.exceptions import VerificationFailure
from tests.objects import equality
from tests.objects.pojo.measurement_pojo_test_object import MeasurementPojoTestObject
from tests.objects.pojo.positive_pojo_test_object import PositivePojoTestObject


def _lenient(cls):
    """Configuration used by verify_equals_and_hash_code()."""
    return EqualsVerifier.for_class(cls).suppress(EqualsWarning.NONFINAL_FIELDS).using_get_class()


# =============================================================================
# SECTION 1 -- Passing classes
# =============================================================================

class TestPassingClasses:

    @pytest.mark.parametrize("target", [
        PositivePojoTestObject,
        MeasurementPojoTestObject,
        equality.ValueObject,
        equality.ShelfObject,
        equality.FrozenRecord,
    ])
    def test_lenient_configuration(self, target):
        _lenient(target).verify()

    def test_frozen_dataclass_needs_no_suppression(self):
        EqualsVerifier.for_class(equality.FrozenRecord).using_get_class().verify()

    def test_final_field_needs_no_suppression(self):
        EqualsVerifier.for_class(equality.FinalValueObject).using_get_class().verify()

    def test_final_class_may_accept_subclasses(self):
        EqualsVerifier.for_class(equality.FinalIsinstanceEqualityObject) \
            .suppress(EqualsWarning.NONFINAL_FIELDS) \
            .verify()

    def test_fluent_methods_return_verifier(self):
        verifier = EqualsVerifier.for_class(equality.ValueObject)
        assert verifier.suppress(EqualsWarning.NULL_FIELDS) is verifier
        assert verifier.using_get_class() is verifier
        assert verifier.with_prefab_values(str, "left", "right") is verifier


# =============================================================================
# SECTION 2 -- Preconditions and basic contract
# =============================================================================

class TestBasicContract:

    def test_eq_not_overridden(self):
        with pytest.raises(VerificationFailure) as info:
            _lenient(equality.NoEqualsObject).verify()
        assert info.value.message == (
            "Equals: __eq__ is inherited directly from object. "
            "[tests.objects.equality.NoEqualsObject]"
        )

    def test_unhashable(self):
        with pytest.raises(VerificationFailure, match="^Hash: __eq__ is defined but __hash__ is None"):
            _lenient(equality.UnhashableObject).verify()

    def test_reflexivity(self):
        with pytest.raises(VerificationFailure, match="^Reflexivity"):
            _lenient(equality.NonReflexiveObject).verify()

    def test_equal_objects_with_different_hashes(self):
        with pytest.raises(VerificationFailure, match="^Hash: equal objects have different hashes"):
            _lenient(equality.IdentityHashObject).verify()

    def test_equal_to_none(self):
        with pytest.raises(VerificationFailure, match="^Non-nullity: object is equal to None"):
            _lenient(equality.EqualsNoneObject).verify()

    def test_comparison_with_none_raises(self):
        with pytest.raises(VerificationFailure) as info:
            _lenient(equality.NoneUnsafeObject).verify()
        assert info.value.message.startswith("Non-nullity")
        assert "AttributeError" in info.value.message
        assert isinstance(info.value.__cause__, AttributeError)

    def test_ne_inconsistent_with_eq(self):
        with pytest.raises(VerificationFailure) as info:
            _lenient(equality.InconsistentNotEqualObject).verify()
        assert info.value.message == (
            "__ne__: != is inconsistent with ==. "
            "[tests.objects.equality.InconsistentNotEqualObject]"
        )

    def test_symmetry(self):
        with pytest.raises(VerificationFailure, match="^Symmetry: .* disagree"):
            _lenient(equality.AsymmetricObject).verify()

    def test_equal_to_unrelated_object(self):
        with pytest.raises(VerificationFailure, match="^Type check: object is equal to an unrelated object"):
            _lenient(equality.EqualsUnrelatedObject).verify()

    def test_non_class_rejected(self):
        with pytest.raises(VerificationFailure, match="Expected a class"):
            EqualsVerifier.for_class(equality.ValueObject())

    def test_equal_prefab_values_rejected(self):
        with pytest.raises(VerificationFailure, match="^Precondition"):
            EqualsVerifier.for_class(equality.ValueObject).with_prefab_values(str, "x", "x")


# =============================================================================
# SECTION 3 -- Significant fields
# =============================================================================

class TestSignificantFields:

    def test_hash_ignores_field_used_by_eq(self):
        with pytest.raises(VerificationFailure) as info:
            _lenient(equality.HashIgnoresFieldObject).verify()
        assert info.value.message == (
            "Significant fields: __eq__ relies on [_second], but __hash__ does not. "
            "[tests.objects.equality.HashIgnoresFieldObject]"
        )

    def test_strict_hashcode_suppressed(self):
        _lenient(equality.HashIgnoresFieldObject).suppress(EqualsWarning.STRICT_HASHCODE).verify()

    def test_hash_uses_field_ignored_by_eq(self):
        with pytest.raises(VerificationFailure, match="__hash__ relies on \\[_second\\], but __eq__ does not"):
            _lenient(equality.HashExtraFieldObject).verify()

    def test_mutable_field(self):
        with pytest.raises(VerificationFailure, match="^Mutability: __eq__ depends on mutable field \\[_value\\]"):
            EqualsVerifier.for_class(equality.ValueObject).using_get_class().verify()


# =============================================================================
# SECTION 4 -- Null fields
# =============================================================================

class TestNullFields:

    def test_none_field_makes_eq_raise(self):
        with pytest.raises(VerificationFailure) as info:
            _lenient(equality.NullFieldUnsafeObject).verify()
        assert info.value.message.startswith("Non-nullity (field [_value] is None)")

    def test_null_fields_suppressed(self):
        _lenient(equality.NullFieldUnsafeObject).suppress(EqualsWarning.NULL_FIELDS).verify()


# =============================================================================
# SECTION 5 -- Subclasses
# =============================================================================

class TestSubclass:

    def test_get_class_rejects_isinstance_equality(self):
        with pytest.raises(VerificationFailure, match="^Subclass: object is equal to an instance"):
            _lenient(equality.IsinstanceEqualityObject).verify()

    def test_non_final_class_without_get_class(self):
        with pytest.raises(VerificationFailure, match="^Subclass: class is not final"):
            EqualsVerifier.for_class(equality.IsinstanceEqualityObject) \
                .suppress(EqualsWarning.NONFINAL_FIELDS) \
                .verify()

    def test_strict_inheritance_suppressed(self):
        EqualsVerifier.for_class(equality.IsinstanceEqualityObject) \
            .suppress(EqualsWarning.NONFINAL_FIELDS, EqualsWarning.STRICT_INHERITANCE) \
            .verify()

    def test_exact_type_equality_with_strict_inheritance_suppressed(self):
        with pytest.raises(VerificationFailure, match="^Subclass: object is not equal"):
            EqualsVerifier.for_class(equality.ValueObject) \
                .suppress(EqualsWarning.NONFINAL_FIELDS, EqualsWarning.STRICT_INHERITANCE) \
                .verify()
