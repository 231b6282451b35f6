# tests/objects/pojo/__init__.py
# Serializable classes that pass every check of verify_all().
