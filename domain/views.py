"""Restricted view types.

A restricted view is a non-owning window over contiguous memory. Benchmarks
use them to avoid copies, which means a view must never be stored beyond the
call that received it, and the *same* view object must flow from a benchmark
to its assert method.

Two window kinds are supported:

- ``CharView`` — read-only window over a ``str``.
- ``memoryview`` — the built-in element window over any buffer-protocol
  object (``bytearray``, ``array.array``, ``bytes``).

Any other subclass of ``RestrictedView`` is rejected when a harness is built.

Argument rows are built once and reused by every test case, so a writable
buffer is copied with ``private_buffer`` before a benchmark may touch it.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class RestrictedView:
    """Marker base for window types that cannot be stored on an instance."""

    __slots__ = ()


class CharView(RestrictedView):
    """Read-only window over a slice of a ``str``.

    Slicing a ``CharView`` returns another ``CharView`` over the same backing
    text; no characters are copied until ``str()`` is called.
    """

    __slots__ = ("_start", "_stop", "_text")

    def __init__(self, text: str, start: int = 0, stop: int | None = None) -> None:
        if not isinstance(text, str):
            msg = f"CharView needs a str to window over, got {type(text).__name__}"
            raise TypeError(msg)
        lo, hi, _ = slice(start, stop).indices(len(text))
        self._text = text
        self._start = lo
        self._stop = max(lo, hi)

    @property
    def text(self) -> str:
        """The backing text this view windows over."""
        return self._text

    @property
    def start(self) -> int:
        return self._start

    @property
    def stop(self) -> int:
        return self._stop

    def __len__(self) -> int:
        return self._stop - self._start

    def __getitem__(self, index: int | slice) -> str | CharView:
        if isinstance(index, slice):
            lo, hi, step = index.indices(len(self))
            if step != 1:
                msg = "CharView slices must be contiguous"
                raise ValueError(msg)
            return CharView(self._text, self._start + lo, self._start + max(lo, hi))
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            msg = "CharView index out of range"
            raise IndexError(msg)
        return self._text[self._start + index]

    def __iter__(self) -> Iterator[str]:
        for i in range(self._start, self._stop):
            yield self._text[i]

    def __str__(self) -> str:
        return self._text[self._start : self._stop]

    def __repr__(self) -> str:
        return f"CharView({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CharView | str):
            return str(self) == str(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def same_window(self, other: CharView) -> bool:
        """Return True if *other* covers exactly the same memory as this view."""
        return (
            self._text is other._text
            and self._start == other._start
            and self._stop == other._stop
        )


def private_buffer(value: object) -> object:
    """Return a private copy of *value* if it exports a writable buffer.

    Read-only buffers (``bytes``) and non-buffer values are returned as-is.
    A ``memoryview`` is copied into a fresh ``bytearray`` with the same
    format and shape; anything else is copied with ``copy.copy`` so its
    type survives.
    """
    try:
        probe = memoryview(value)  # type: ignore[arg-type]
    except TypeError:
        return value
    with probe:
        if probe.readonly:
            return value
        if isinstance(value, memoryview):
            data = memoryview(bytearray(probe.tobytes()))
            if probe.format == "B" and probe.ndim == 1:
                return data
            return data.cast(probe.format, list(probe.shape))
    return copy.copy(value)
