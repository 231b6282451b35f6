# =============================================================================
# pojotester -- STRUCTURAL RULE TESTS
# File:   tests/unit/validation/test_rules.py
# =============================================================================

import pytest

from pojotester.exceptions import VerificationFailure
from pojotester.reflection import get_pojo_class
from pojotester.validation import (
    GetterMustExistRule,
    NoFieldShadowingRule,
    NoPublicFieldsExceptStaticFinalRule,
    SerializableMustHaveSerialVersionUIDRule,
    SetterMustExistRule,
    default_rules,
)
from tests.objects import structure


# =============================================================================
# SECTION 1 -- Accessor rules
# =============================================================================

class TestGetterMustExistRule:

    def test_property_getter_passes(self, property_pojo_class):
        GetterMustExistRule().evaluate(property_pojo_class)

    def test_method_getters_pass(self):
        GetterMustExistRule().evaluate(get_pojo_class(structure.MethodAccessorRecord))

    def test_missing_getter(self):
        with pytest.raises(VerificationFailure) as info:
            GetterMustExistRule().evaluate(get_pojo_class(structure.MissingGetterRecord))
        assert info.value.message == (
            "[tests.objects.structure.MissingGetterRecord] is missing a getter "
            "for field [_name]."
        )

    def test_static_fields_are_ignored(self):
        GetterMustExistRule().evaluate(get_pojo_class(structure.PublicConstantRecord))


class TestSetterMustExistRule:

    def test_property_setter_passes(self, property_pojo_class):
        SetterMustExistRule().evaluate(property_pojo_class)

    def test_missing_setter(self):
        with pytest.raises(VerificationFailure, match="missing a setter for field \\[_name\\]"):
            SetterMustExistRule().evaluate(get_pojo_class(structure.MissingSetterRecord))

    def test_final_field_needs_no_setter(self):
        SetterMustExistRule().evaluate(get_pojo_class(structure.FinalFieldRecord))

    def test_mangled_field(self):
        SetterMustExistRule().evaluate(get_pojo_class(structure.MangledRecord))


# =============================================================================
# SECTION 2 -- Serialization rule
# =============================================================================

class TestSerializableMustHaveSerialVersionUIDRule:

    def test_declared_uid_passes(self, positive_pojo_class):
        SerializableMustHaveSerialVersionUIDRule().evaluate(positive_pojo_class)

    def test_non_serializable_is_ignored(self, property_pojo_class):
        SerializableMustHaveSerialVersionUIDRule().evaluate(property_pojo_class)

    def test_missing_uid(self):
        with pytest.raises(VerificationFailure) as info:
            SerializableMustHaveSerialVersionUIDRule().evaluate(
                get_pojo_class(structure.MissingSerialRecord)
            )
        assert info.value.message == (
            "[tests.objects.structure.MissingSerialRecord] is Serializable but does "
            "not declare __serial_version_uid__."
        )

    def test_inherited_uid_does_not_count(self):
        with pytest.raises(VerificationFailure, match="does not declare"):
            SerializableMustHaveSerialVersionUIDRule().evaluate(
                get_pojo_class(structure.InheritedSerialRecord)
            )

    def test_non_int_uid(self):
        with pytest.raises(VerificationFailure, match="is not an int"):
            SerializableMustHaveSerialVersionUIDRule().evaluate(
                get_pojo_class(structure.NonIntSerialRecord)
            )


# =============================================================================
# SECTION 3 -- Shadowing rule
# =============================================================================

class TestNoFieldShadowingRule:

    def test_clean_class_passes(self, positive_pojo_class):
        NoFieldShadowingRule().evaluate(positive_pojo_class)

    def test_redeclared_ancestor_field(self):
        with pytest.raises(VerificationFailure) as info:
            NoFieldShadowingRule().evaluate(get_pojo_class(structure.ShadowingChild))
        assert info.value.message == (
            "Field [_name] on [tests.objects.structure.ShadowingChild] shadows the field "
            "declared on [tests.objects.structure.ShadowingParent]."
        )

    def test_parameter_assigned_to_itself(self):
        with pytest.raises(VerificationFailure) as info:
            NoFieldShadowingRule().evaluate(get_pojo_class(structure.SelfAssignmentRecord))
        assert "Method [set_name]" in info.value.message
        assert "assigns [name] to itself" in info.value.message

    def test_receiver_attribute_assigned_to_itself(self):
        with pytest.raises(VerificationFailure, match="assigns \\[self._name\\] to itself"):
            NoFieldShadowingRule().evaluate(
                get_pojo_class(structure.ReceiverSelfAssignmentRecord)
            )

    def test_reassigning_inherited_field_is_not_shadowing(self):
        NoFieldShadowingRule().evaluate(get_pojo_class(structure.ReassigningChild))


# =============================================================================
# SECTION 4 -- Visibility rule
# =============================================================================

class TestNoPublicFieldsExceptStaticFinalRule:

    def test_private_fields_pass(self, positive_pojo_class):
        NoPublicFieldsExceptStaticFinalRule().evaluate(positive_pojo_class)

    def test_public_constants_pass(self):
        NoPublicFieldsExceptStaticFinalRule().evaluate(
            get_pojo_class(structure.PublicConstantRecord)
        )

    def test_public_instance_field(self):
        with pytest.raises(VerificationFailure) as info:
            NoPublicFieldsExceptStaticFinalRule().evaluate(
                get_pojo_class(structure.PublicFieldRecord)
            )
        assert info.value.message == (
            "Field [name] on [tests.objects.structure.PublicFieldRecord] is public and "
            "not static final."
        )

    def test_public_mutable_class_attribute(self):
        with pytest.raises(VerificationFailure, match="\\[counter\\]"):
            NoPublicFieldsExceptStaticFinalRule().evaluate(
                get_pojo_class(structure.PublicStaticFieldRecord)
            )


class TestDefaultRules:

    def test_default_rule_order(self):
        assert [type(rule) for rule in default_rules()] == [
            GetterMustExistRule,
            SetterMustExistRule,
            SerializableMustHaveSerialVersionUIDRule,
            NoFieldShadowingRule,
            NoPublicFieldsExceptStaticFinalRule,
        ]

    def test_fresh_list_per_call(self):
        assert default_rules() is not default_rules()
