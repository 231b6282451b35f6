# pojotester/validation/testers.py
# Testers exercise the accessors of a live instance. Instances come from
# ValueFactory.new_instance(), so classes whose constructors take arguments
# are supported. Abstract classes and enums are skipped.
#
# Fields without the relevant accessor are skipped here; reporting them is
# the job of GetterMustExistRule / SetterMustExistRule.

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from pojotester.exceptions import VerificationFailure
from pojotester.reflection.pojo_class import PojoClass, PojoField
from pojotester.reflection.value_factory import ValueFactory, values_equal
from pojotester.utils.constants import TESTER_SEED

logger = logging.getLogger(__name__)


class Tester(Protocol):
    def run(self, pojo_class: PojoClass) -> None:
        ...


def _read(pojo_class: PojoClass, field: PojoField, instance: object) -> Any:
    try:
        return field.get(instance)
    except AttributeError as exc:
        raise VerificationFailure(
            f"Field [{field.name}] on [{pojo_class.name}] cannot be read."
        ) from exc


def _testable_instance(pojo_class: PojoClass, factory: ValueFactory) -> Optional[object]:
    if pojo_class.is_abstract or pojo_class.is_enum:
        logger.debug("Skipping accessor tests for %s", pojo_class.name)
        return None
    return factory.new_instance(pojo_class.clazz)


class SetterTester:
    """Write through the setter, read the field directly, compare."""

    def __init__(self, value_factory: Optional[ValueFactory] = None) -> None:
        self.value_factory = value_factory or ValueFactory()

    def run(self, pojo_class: PojoClass) -> None:
        instance = _testable_instance(pojo_class, self.value_factory)
        if instance is None:
            return

        for field in pojo_class.instance_fields:
            setter = pojo_class.setter_for(field)
            if setter is None:
                continue
            expected = self.value_factory.value_for_field(field, TESTER_SEED, instance)
            try:
                setter(instance, expected)
            except Exception as exc:
                raise VerificationFailure(
                    f"Setter for field [{field.name}] on [{pojo_class.name}] raised "
                    f"{type(exc).__name__}: {exc}"
                ) from exc
            actual = _read(pojo_class, field, instance)
            if not values_equal(expected, actual):
                raise VerificationFailure(
                    f"Setter test failed for field [{field.name}] on [{pojo_class.name}]: "
                    f"expected [{expected!r}] but found [{actual!r}]."
                )


class GetterTester:
    """Write the field directly, read through the getter, compare."""

    def __init__(self, value_factory: Optional[ValueFactory] = None) -> None:
        self.value_factory = value_factory or ValueFactory()

    def run(self, pojo_class: PojoClass) -> None:
        instance = _testable_instance(pojo_class, self.value_factory)
        if instance is None:
            return

        for field in pojo_class.instance_fields:
            getter = pojo_class.getter_for(field)
            if getter is None:
                continue
            expected = self.value_factory.value_for_field(field, TESTER_SEED, instance)
            field.set(instance, expected)
            try:
                actual = getter(instance)
            except Exception as exc:
                raise VerificationFailure(
                    f"Getter for field [{field.name}] on [{pojo_class.name}] raised "
                    f"{type(exc).__name__}: {exc}"
                ) from exc
            if not values_equal(expected, actual):
                raise VerificationFailure(
                    f"Getter test failed for field [{field.name}] on [{pojo_class.name}]: "
                    f"expected [{expected!r}] but found [{actual!r}]."
                )


def default_testers() -> List[Tester]:
    return [SetterTester(), GetterTester()]
