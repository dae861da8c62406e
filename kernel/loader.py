"""
kernel/loader.py — Resolve ``module`` / ``module:Class`` targets to classes.

A target naming a class loads exactly that class. A target naming a module
loads every class defined in it that has at least one ``@benchmark``
method, in definition order.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from typing import TYPE_CHECKING

from adapters.markers import marks_of
from domain.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

logger = logging.getLogger("benchassert.loader")


def has_benchmarks(cls: type) -> bool:
    """True if *cls* or one of its bases tags a method with ``@benchmark``."""
    for klass in cls.__mro__:
        for attr in vars(klass).values():
            marks = marks_of(attr)
            if marks is not None and marks.benchmark:
                return True
    return False


def _import(module_name: str, target: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r} for target {target!r}: {exc}"
        raise ConfigurationError(msg) from exc


def _resolve_attr(module: ModuleType, path: str, target: str) -> type:
    obj: object = module
    for part in path.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            msg = f"Target {target!r}: {module.__name__} has no attribute {path!r}"
            raise ConfigurationError(msg)
    if not isinstance(obj, type):
        msg = f"Target {target!r} is not a class"
        raise ConfigurationError(msg)
    return obj


def module_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* that declare benchmark methods."""
    return [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj) and obj.__module__ == module.__name__ and has_benchmarks(obj)
    ]


def load_target(target: str) -> list[type]:
    """Resolve one target string.

    Raises:
        ConfigurationError: The module cannot be imported, the class does
            not exist, or the target names a class without benchmarks.
    """
    module_name, sep, attr_path = target.partition(":")
    if not module_name or (sep and not attr_path):
        msg = f"Malformed target {target!r}; expected 'module' or 'module:Class'"
        raise ConfigurationError(msg)

    module = _import(module_name, target)
    if attr_path:
        cls = _resolve_attr(module, attr_path, target)
        if not has_benchmarks(cls):
            msg = f"{cls.__qualname__} declares no benchmark methods"
            raise ConfigurationError(msg)
        return [cls]

    classes = module_classes(module)
    logger.debug("Module %s: %d benchmark class(es)", module_name, len(classes))
    return classes


def load_targets(targets: Iterable[str]) -> list[type]:
    """Resolve every target, dropping duplicates while keeping order."""
    seen: set[type] = set()
    classes: list[type] = []
    for target in targets:
        for cls in load_target(target):
            if cls not in seen:
                seen.add(cls)
                classes.append(cls)
    logger.info("Loaded %d benchmark class(es)", len(classes))
    return classes
