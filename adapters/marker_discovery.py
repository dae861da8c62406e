"""Adapter: MarkerDiscovery implements DeclarationSourcePort.

Finds parameter declarations in ``Annotated`` class annotations and
benchmark / assert / hook methods tagged by ``adapters.markers``, and turns
them into the structured descriptors the core modules consume.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import typing
from typing import TYPE_CHECKING, Annotated, ClassVar, Final

from adapters.markers import (
    HOOK_KINDS,
    Params,
    ParamsAllValues,
    ParamsSource,
    marks_of,
)
from domain.errors import AssertMethodError, ConfigurationError, HookError
from domain.models import (
    UNANNOTATED,
    BenchmarkSpec,
    Binding,
    DeclaredParameter,
    HookSet,
    MemberHandle,
    MemberKind,
    MethodHandle,
    MethodSignature,
    ValueSource,
    ValueSourceKind,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("benchassert.adapters")

_MISSING = object()
_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _source_for(marker: object) -> ValueSource | None:
    if isinstance(marker, Params):
        return ValueSource(kind=ValueSourceKind.FIXED, values=marker.values)
    if isinstance(marker, ParamsAllValues):
        return ValueSource(kind=ValueSourceKind.ALL_VALUES)
    if isinstance(marker, ParamsSource):
        return ValueSource(kind=ValueSourceKind.SUPPLIED, supplier=marker.name)
    return None


def _unwrap(annotation: object) -> tuple[object, list[ValueSource], bool]:
    """Strip Annotated / ClassVar / Final layers off a member annotation.

    Returns:
        The bare annotation, the declaration markers found, and whether a
        ClassVar or Final qualifier made the member read-only.
    """
    sources: list[ValueSource] = []
    read_only = False
    while True:
        origin = typing.get_origin(annotation)
        if origin is Annotated:
            bare, *metadata = typing.get_args(annotation)
            sources.extend(s for s in map(_source_for, metadata) if s is not None)
            annotation = bare
        elif origin in (ClassVar, Final) or annotation in (ClassVar, Final):
            read_only = True
            args = typing.get_args(annotation)
            annotation = args[0] if args else UNANNOTATED
        else:
            return annotation, sources, read_only


def _has_instance_dict(cls: type) -> bool:
    return any("__dict__" in vars(klass) for klass in cls.__mro__ if klass is not object)


def _is_frozen_dataclass(cls: type) -> bool:
    if not dataclasses.is_dataclass(cls):
        return False
    params = getattr(cls, "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def _member_kind(cls: type, name: str) -> tuple[MemberKind, bool]:
    """Return how *name* stores its value on instances and whether it is writable."""
    static = inspect.getattr_static(cls, name, _MISSING)
    if isinstance(static, property):
        return MemberKind.PROPERTY, static.fset is not None
    if _is_frozen_dataclass(cls):
        return MemberKind.FIELD, False
    if inspect.ismemberdescriptor(static):
        return MemberKind.FIELD, True
    if static is not _MISSING and hasattr(type(static), "__set__"):
        return MemberKind.DESCRIPTOR, True
    if static is not _MISSING and hasattr(type(static), "__get__") and not _has_instance_dict(cls):
        return MemberKind.DESCRIPTOR, False
    return MemberKind.FIELD, _has_instance_dict(cls)


def _class_hints(cls: type) -> dict[str, object]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        msg = f"Cannot resolve the annotations of {cls.__qualname__}: {exc}"
        raise ConfigurationError(msg) from exc


def _signature(func: Callable[..., object], skip_first: bool, where: str) -> MethodSignature:
    """Build the positional signature of *func*, resolving string annotations."""
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError) as exc:
        msg = f"Cannot resolve the annotations of {where}: {exc}"
        raise ConfigurationError(msg) from exc

    params = list(inspect.signature(func).parameters.values())
    if skip_first:
        params = params[1:]

    annotations: list[object] = []
    names: list[str] = []
    for p in params:
        if p.kind in _POSITIONAL:
            annotations.append(hints.get(p.name, UNANNOTATED))
            names.append(p.name)
        elif p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is not inspect.Parameter.empty:
            continue
        else:
            msg = f"{where} cannot take variadic or required keyword-only parameters ({p})."
            raise ConfigurationError(msg)

    return MethodSignature(
        parameters=tuple(annotations),
        parameter_names=tuple(names),
        returns=hints.get("return", UNANNOTATED),
    )


def _class_namespace(cls: type) -> dict[str, object]:
    """Class attributes in definition order, base classes first."""
    namespace: dict[str, object] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        namespace.update(vars(klass))
    return namespace


def _enclosing_class(cls: type) -> type | None:
    """Resolve the class that *cls* is nested in, if it is reachable."""
    qualname = cls.__qualname__
    if "." not in qualname or "<locals>" in qualname:
        return None
    outer: object = sys.modules.get(cls.__module__)
    for part in qualname.split(".")[:-1]:
        outer = getattr(outer, part, None)
        if outer is None:
            return None
    return outer if isinstance(outer, type) else None


class MarkerDiscovery:
    """Concrete implementation of DeclarationSourcePort using markers."""

    def type_name(self, cls: type) -> str:
        return f"{cls.__module__}.{cls.__qualname__}"

    # -- Parameters -------------------------------------------------------------

    def parameters(self, cls: type) -> list[DeclaredParameter]:
        """Return every annotated member that carries a declaration marker."""
        owner = self.type_name(cls)
        results: list[DeclaredParameter] = []
        for name, hint in _class_hints(cls).items():
            annotation, sources, read_only = _unwrap(hint)
            if not sources:
                continue
            kind, writable = _member_kind(cls, name)
            member = MemberHandle(
                name=name,
                owner=owner,
                annotation=annotation,
                kind=kind,
                writable=writable and not read_only,
            )
            results.append(DeclaredParameter(member=member, sources=tuple(sources)))
        logger.debug("Found %d parameter declaration(s) on %s", len(results), owner)
        return results

    # -- Methods ----------------------------------------------------------------

    def _handle(self, cls: type, name: str, attr: object) -> MethodHandle:
        owner = self.type_name(cls)
        where = f"{owner}.{name}"
        if isinstance(attr, staticmethod):
            return MethodHandle(
                name=name,
                owner=owner,
                signature=_signature(attr.__func__, skip_first=False, where=where),
                function=attr.__func__,
                binding=Binding.STATIC,
            )
        if isinstance(attr, classmethod):
            bound = attr.__get__(None, cls)
            return MethodHandle(
                name=name,
                owner=owner,
                signature=_signature(attr.__func__, skip_first=True, where=where),
                function=bound,
                binding=Binding.STATIC,
            )
        func = typing.cast("Callable[..., object]", attr)
        return MethodHandle(
            name=name,
            owner=owner,
            signature=_signature(func, skip_first=True, where=where),
            function=func,
            binding=Binding.INSTANCE,
        )

    def benchmarks(self, cls: type) -> list[BenchmarkSpec]:
        """Return every method tagged with ``@benchmark``, in definition order."""
        results: list[BenchmarkSpec] = []
        for name, attr in _class_namespace(cls).items():
            marks = marks_of(attr)
            if marks is None or not marks.benchmark:
                continue
            if isinstance(attr, staticmethod | classmethod):
                msg = f"Benchmark method {self.type_name(cls)}.{name} cannot be static."
                raise HookError(msg)
            results.append(
                BenchmarkSpec(
                    method=self._handle(cls, name, attr),
                    assert_name=marks.assert_name,
                    literal_arguments=tuple(marks.arguments),
                    argument_source=marks.argument_source,
                )
            )
        return results

    def hooks(self, cls: type) -> HookSet:
        """Return the lifecycle hooks; at most one of each kind."""
        found: dict[str, MethodHandle] = {}
        for name, attr in _class_namespace(cls).items():
            marks = marks_of(attr)
            if marks is None:
                continue
            for kind in marks.hooks:
                if kind in found:
                    msg = (
                        f"{self.type_name(cls)} declares more than one {kind} hook "
                        f"({found[kind].name}, {name})."
                    )
                    raise HookError(msg)
                handle = self._handle(cls, name, attr)
                if handle.signature.arity != 0:
                    msg = f"Hook {handle.qualname} must not take any parameters."
                    raise HookError(msg)
                found[kind] = handle
        return HookSet(**{kind: found.get(kind) for kind in HOOK_KINDS})

    def find_method(self, cls: type, name: str) -> MethodHandle | None:
        """Look up *name* on *cls*, then as a static method on its enclosing class."""
        attr = inspect.getattr_static(cls, name, _MISSING)
        if attr is not _MISSING and (
            isinstance(attr, staticmethod | classmethod) or inspect.isfunction(attr)
        ):
            return self._handle(cls, name, attr)

        outer = _enclosing_class(cls)
        if outer is None:
            return None
        attr = inspect.getattr_static(outer, name, _MISSING)
        if attr is _MISSING:
            return None
        if not isinstance(attr, staticmethod | classmethod):
            msg = (
                f"Assert method {name} on enclosing class {outer.__qualname__} must be a "
                f"staticmethod or classmethod to check {cls.__qualname__}."
            )
            raise AssertMethodError(msg)
        return self._handle(outer, name, attr)
