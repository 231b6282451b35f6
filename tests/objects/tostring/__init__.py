# tests/objects/tostring/__init__.py
# Serializable classes with a broken display string.
