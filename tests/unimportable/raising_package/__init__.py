# tests/unimportable/raising_package/__init__.py

raise RuntimeError("package failed during import")
