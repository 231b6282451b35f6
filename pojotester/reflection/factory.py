# =============================================================================
# pojotester -- POJO CLASS FACTORY
# File:   pojotester/reflection/factory.py
# =============================================================================
#
# SCOPE
# -----
# Builds PojoClass descriptors for a single class, and discovers every class
# defined under a package.
#
# FIELD DISCOVERY ORDER
# ---------------------
#   1. Annotations of the class body (dunders excluded).
#   2. Names listed in the class's own __slots__.
#   3. Attributes assigned on the receiver inside the class's own __init__
#      (found by parsing its source; skipped when source is unavailable).
#   4. Unannotated class-level data attributes (static fields).
#
# DISCOVERY ORDER
# ---------------
# Modules are visited in sorted dotted-name order. Inside a module, classes
# are listed in definition order, each followed by its nested classes.
# Identical package contents always yield the identical sequence.
#
# =============================================================================

from __future__ import annotations

import ast
import enum
import importlib
import inspect
import logging
import pkgutil
import textwrap
import typing
from types import ModuleType
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from pojotester.exceptions import VerificationFailure
from pojotester.reflection.filters import PojoClassFilter
from pojotester.reflection.pojo_class import PojoClass, PojoField
from pojotester.utils.constants import (
    MODULE_NOT_IMPORTABLE_TEMPLATE,
    PACKAGE_NOT_FOUND_TEMPLATE,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 1 -- ANNOTATION HELPERS
# =============================================================================

def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _own_annotations(cls: type) -> Dict[str, Any]:
    """
    Annotations of the class body only, evaluated where possible.

    String annotations that cannot be evaluated (undefined forward
    references) are kept as strings.
    """
    try:
        return dict(inspect.get_annotations(cls, eval_str=True))
    except Exception:
        return dict(inspect.get_annotations(cls))


def _classify(annotation: Any) -> Tuple[bool, bool]:
    """Return (is_class_var, is_final) for a field annotation."""
    if isinstance(annotation, str):
        text = annotation.replace(" ", "")
        head = text.split("[", 1)[0].rsplit(".", 1)[-1]
        is_class_var = head == "ClassVar"
        is_final = head == "Final" or (is_class_var and "Final" in text)
        return is_class_var, is_final

    origin = typing.get_origin(annotation)
    if annotation is typing.ClassVar or origin is typing.ClassVar:
        args = typing.get_args(annotation)
        inner = args[0] if args else None
        return True, inner is typing.Final or typing.get_origin(inner) is typing.Final
    if annotation is typing.Final or origin is typing.Final:
        return False, True
    if origin is typing.Annotated:
        return _classify(typing.get_args(annotation)[0])
    return False, False


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return "_" + cls.__name__.lstrip("_") + name
    return name


# =============================================================================
# SECTION 2 -- SOURCE HELPERS
# =============================================================================

def parse_function(func: Any) -> Optional[ast.AST]:
    """Parse the source of func, or return None when it is unavailable."""
    try:
        source = textwrap.dedent(inspect.getsource(func))
        return ast.parse(source)
    except (OSError, TypeError, SyntaxError):
        return None


def _assignment_targets(node: ast.AST) -> List[ast.AST]:
    if isinstance(node, ast.Assign):
        targets = list(node.targets)
    elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        targets = [node.target]
    else:
        return []
    flat: List[ast.AST] = []
    while targets:
        target = targets.pop(0)
        if isinstance(target, (ast.Tuple, ast.List)):
            targets[:0] = list(target.elts)
        else:
            flat.append(target)
    return flat


def _init_assigned_names(cls: type) -> List[str]:
    """Receiver attributes assigned in cls.__init__, in source order."""
    init = cls.__dict__.get("__init__")
    if not inspect.isfunction(init):
        return []
    tree = parse_function(init)
    if tree is None or not tree.body:
        return []
    func = tree.body[0]
    if not isinstance(func, (ast.FunctionDef, ast.AsyncFunctionDef)) or not func.args.args:
        return []
    receiver = func.args.args[0].arg

    found: List[Tuple[int, int, str]] = []
    for node in ast.walk(func):
        for target in _assignment_targets(node):
            if (isinstance(target, ast.Attribute)
                    and isinstance(target.value, ast.Name)
                    and target.value.id == receiver):
                found.append((target.lineno, target.col_offset, _mangle(cls, target.attr)))

    names: List[str] = []
    for _, _, name in sorted(found):
        if name not in names:
            names.append(name)
    return names


def _own_slots(cls: type) -> List[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [_mangle(cls, name) for name in slots]


# =============================================================================
# SECTION 3 -- SINGLE CLASS
# =============================================================================

def _inherited_field_names(cls: type) -> Set[str]:
    names: Set[str] = set()
    for base in cls.__mro__[1:]:
        if base.__module__ != "builtins":
            names.update(f.name for f in _collect_fields(base))
    return names


def _collect_fields(cls: type) -> Tuple[PojoField, ...]:
    if issubclass(cls, enum.Enum):
        return ()

    own = cls.__dict__
    fields: Dict[str, PojoField] = {}

    for name, annotation in _own_annotations(cls).items():
        if _is_dunder(name):
            continue
        is_class_var, is_final = _classify(annotation)
        # PEP 591: a Final annotation with a value in the class body is a
        # class variable.
        is_static = is_class_var or (is_final and name in own)
        fields[name] = PojoField(name, cls, annotation, is_static, is_final)

    for name in _own_slots(cls):
        if name not in fields and not _is_dunder(name):
            fields[name] = PojoField(name, cls)

    # Receiver assignments to an inherited field reuse that field.
    inherited = _inherited_field_names(cls)
    for name in _init_assigned_names(cls):
        if name not in fields and name not in inherited and not _is_dunder(name):
            fields[name] = PojoField(name, cls)

    for name, value in own.items():
        if name in fields or _is_dunder(name) or name.startswith("_abc_"):
            continue
        # Methods, properties, slot members and nested classes are not fields.
        if isinstance(value, type) or hasattr(type(value), "__get__"):
            continue
        fields[name] = PojoField(name, cls, None, True, name.isupper())

    return tuple(fields.values())


def get_pojo_class(cls: type) -> PojoClass:
    """Build the PojoClass descriptor for cls."""
    if not isinstance(cls, type):
        raise VerificationFailure(f"Expected a class but received {cls!r}.")
    return PojoClass(clazz=cls, fields=_collect_fields(cls))


# =============================================================================
# SECTION 4 -- PACKAGE DISCOVERY
# =============================================================================

def _on_walk_error(module_name: str) -> None:
    raise VerificationFailure(MODULE_NOT_IMPORTABLE_TEMPLATE.format(name=module_name))


def _nested_classes(cls: type) -> Iterator[type]:
    yield cls
    for value in list(vars(cls).values()):
        if (isinstance(value, type)
                and value.__module__ == cls.__module__
                and value.__qualname__ == f"{cls.__qualname__}.{value.__name__}"):
            yield from _nested_classes(value)


def _classes_defined_in(module: ModuleType) -> Iterator[type]:
    seen: Set[int] = set()
    for value in list(vars(module).values()):
        if not isinstance(value, type) or id(value) in seen:
            continue
        # Skip imports and aliases of classes defined elsewhere.
        if value.__module__ != module.__name__ or value.__qualname__ != value.__name__:
            continue
        seen.add(id(value))
        yield from _nested_classes(value)


def _import_package(package_name: str) -> ModuleType:
    try:
        return importlib.import_module(package_name)
    except Exception as exc:
        raise VerificationFailure(
            PACKAGE_NOT_FOUND_TEMPLATE.format(name=package_name)
        ) from exc


def _import_submodule(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        raise VerificationFailure(
            MODULE_NOT_IMPORTABLE_TEMPLATE.format(name=module_name)
        ) from exc


def get_pojo_classes(
    package_name: str,
    pojo_filter: Optional[PojoClassFilter] = None,
) -> List[PojoClass]:
    """Classes defined directly in package_name (no sub-modules)."""
    module = _import_package(package_name)
    return _select(_classes_defined_in(module), pojo_filter)


def get_pojo_classes_recursively(
    package_name: str,
    pojo_filter: Optional[PojoClassFilter] = None,
) -> List[PojoClass]:
    """
    Classes defined in package_name and in every module below it.

    Args:
        package_name: Dotted name of a package (or a plain module).
        pojo_filter:  Optional filter; only classes it includes are returned.

    Returns:
        PojoClass descriptors in discovery order (see module header).

    Raises:
        VerificationFailure: "Package <name> cannot be found." when the
        package itself cannot be imported, "Module <name> cannot be
        imported." when one of its sub-modules fails to import.
    """
    package = _import_package(package_name)
    modules = [package]

    search_path = getattr(package, "__path__", None)
    if search_path is not None:
        names = sorted(
            info.name
            for info in pkgutil.walk_packages(
                search_path, prefix=package.__name__ + ".", onerror=_on_walk_error,
            )
        )
        modules.extend(_import_submodule(name) for name in names)

    classes: List[type] = []
    for module in modules:
        classes.extend(_classes_defined_in(module))

    selected = _select(classes, pojo_filter)
    logger.debug(
        "Discovered %d class(es) in %d module(s) under %s; %d selected",
        len(classes), len(modules), package_name, len(selected),
    )
    return selected


def _select(classes: Any, pojo_filter: Optional[PojoClassFilter]) -> List[PojoClass]:
    selected: List[PojoClass] = []
    for cls in classes:
        pojo_class = get_pojo_class(cls)
        if pojo_filter is None or pojo_filter.include(pojo_class):
            selected.append(pojo_class)
    return selected
