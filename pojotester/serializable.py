# pojotester/serializable.py
# Marker base class for classes intended for serialization (pickle, wire
# formats). verify_all(<package>) only inspects subclasses of Serializable,
# and SerializableMustHaveSerialVersionUIDRule requires each of them to
# declare __serial_version_uid__ in its own class body.


class Serializable:
    """
    Marker base class. Carries no state and no behaviour.

    Example:
        class Account(Serializable):
            __serial_version_uid__ = 1
    """

    __slots__ = ()
