"""Adapter: PythonReflection implements ReflectionPort.

Creates instances, assigns members and calls methods through ordinary
Python attribute access and calls. User exceptions raised inside
constructors, setters or methods propagate unchanged.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

from domain.errors import ArgumentSourceError, InstantiationError
from domain.models import Binding

if TYPE_CHECKING:
    from domain.models import ArgumentTuple, MemberHandle, MethodHandle

logger = logging.getLogger("benchassert.adapters")

_MISSING = object()


def _required_parameters(func: object) -> list[inspect.Parameter]:
    try:
        signature = inspect.signature(func)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        # Builtins without introspectable signatures; assume callable as-is.
        return []
    return [
        p
        for p in signature.parameters.values()
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


class PythonReflection:
    """Concrete implementation of ReflectionPort using plain Python calls."""

    def instantiate(self, cls: type) -> object:
        """Create a default-constructed instance of *cls*.

        Raises:
            InstantiationError: The constructor requires arguments.
        """
        required = _required_parameters(cls)
        if required:
            names = ", ".join(p.name for p in required)
            msg = f"{cls.__qualname__} must be constructible without arguments (requires {names})."
            raise InstantiationError(msg)
        return cls()

    def assign(self, instance: object, member: MemberHandle, value: object) -> None:
        setattr(instance, member.name, value)

    def invoke(self, method: MethodHandle, instance: object, arguments: ArgumentTuple) -> object:
        if method.binding is Binding.INSTANCE:
            return method.function(instance, *arguments)
        return method.function(*arguments)

    def supply(self, instance: object, name: str) -> object:
        """Read a supplier member; call it if it is a method.

        Properties and plain attributes are read; functions, staticmethods
        and classmethods are called with no arguments.

        Raises:
            ArgumentSourceError: No such member, or it needs arguments.
        """
        cls = type(instance)
        static = inspect.getattr_static(cls, name, _MISSING)
        if static is _MISSING and name not in getattr(instance, "__dict__", {}):
            msg = f"No attribute, property or zero-argument method named {name} on {cls.__qualname__}."
            raise ArgumentSourceError(msg)

        value = getattr(instance, name)
        if isinstance(static, property) or not inspect.isroutine(value):
            return value

        required = _required_parameters(value)
        if required:
            msg = f"Supplier {cls.__qualname__}.{name} must not take any arguments."
            raise ArgumentSourceError(msg)
        logger.debug("Calling supplier %s.%s", cls.__qualname__, name)
        return value()
