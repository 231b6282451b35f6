# tests/objects/tostring/invalid_to_string_test_object.py
# __serial_version_uid__ is intentionally left out.

from pojotester.serializable import Serializable


class InvalidToStringTestObject(Serializable):

    def __str__(self) -> str:
        raise RuntimeError()
