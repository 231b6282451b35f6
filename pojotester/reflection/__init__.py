# pojotester/reflection/__init__.py
# Structural model of classes under test and package discovery.

from pojotester.reflection.pojo_class import PojoClass, PojoField
from pojotester.reflection.filters import FilterBasedOnInheritance, PojoClassFilter
from pojotester.reflection.factory import (
    get_pojo_class,
    get_pojo_classes,
    get_pojo_classes_recursively,
)
from pojotester.reflection.value_factory import ValueFactory, values_equal

__all__ = [
    # Descriptors
    "PojoClass",
    "PojoField",
    # Discovery
    "PojoClassFilter",
    "FilterBasedOnInheritance",
    "get_pojo_class",
    "get_pojo_classes",
    "get_pojo_classes_recursively",
    # Sample values
    "ValueFactory",
    "values_equal",
]
