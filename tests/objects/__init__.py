# tests/objects/__init__.py
# Importable classes used as verification targets by the unit tests.
# Package scans resolve these by dotted name (e.g. "tests.objects.pojo").
