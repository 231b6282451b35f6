# tests/unimportable/__init__.py
# Modules that fail while being imported. Kept outside tests/objects so
# that package scans of tests.objects never reach them.
