import pytest

from pojotester.reflection import PojoClass, get_pojo_class
from tests.objects.pojo.positive_pojo_test_object import PositivePojoTestObject
from tests.objects.structure import PropertyRecord


@pytest.fixture
def positive_pojo_class() -> PojoClass:
    """Descriptor of a class that satisfies every rule and tester."""
    return get_pojo_class(PositivePojoTestObject)


@pytest.fixture
def property_pojo_class() -> PojoClass:
    """Non-serializable class with one property-backed field."""
    return get_pojo_class(PropertyRecord)
