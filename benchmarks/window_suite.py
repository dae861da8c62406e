"""Sample suite: benchmarks over restricted windows.

Arguments are written as plain ``str`` / ``bytearray`` values; the harness
wraps them in ``CharView`` / ``memoryview`` windows at call time and hands
the same windows to the assert methods.

    benchassert run benchmarks.window_suite --verbose
"""

from __future__ import annotations

from typing import Annotated

from adapters.markers import Params, arguments, arguments_source, assert_with, benchmark
from domain.views import CharView


class WindowSuite:
    offset: Annotated[int, Params(0, 1, 2)] = 0

    def sentences(self) -> list[str]:
        return ["hello world", "benchmark"]

    def buffers(self) -> list[tuple[bytearray, int]]:
        return [(bytearray(b"\x01\x02\x03\x04"), 2), (bytearray(b"abcdef"), 3)]

    @benchmark
    @assert_with("check_tail")
    @arguments_source("sentences")
    def tail(self, text: CharView) -> CharView:
        return text[self.offset :]

    def check_tail(self, text: CharView, actual: CharView) -> bool:
        # The result must window over the caller's text, not a copy.
        return actual.text is text.text and actual == str(text)[self.offset :]

    @benchmark
    @assert_with("check_head")
    @arguments_source("buffers")
    def head(self, data: memoryview, size: int) -> memoryview:
        return data[:size]

    def check_head(self, data: memoryview, size: int, actual: memoryview) -> bool:
        return actual.obj is data.obj and actual.tobytes() == data.tobytes()[:size]

    @benchmark
    @assert_with("check_count")
    @arguments("banana")
    def count_vowels(self, text: CharView) -> int:
        return sum(1 for ch in text[self.offset :] if ch in "aeiou")

    def check_count(self, text: CharView, actual: int) -> bool:
        return actual == sum(1 for ch in str(text)[self.offset :] if ch in "aeiou")


class Outer:
    """Assert methods may live as static methods on an enclosing class.

    Nested classes are not found by a module scan; name them directly:
    ``benchmarks.window_suite:Outer.Inner``.
    """

    @staticmethod
    def check_upper(text: str, actual: str) -> bool:
        return actual == text.upper()

    class Inner:
        @benchmark
        @assert_with("check_upper")
        @arguments("abc")
        def upper(self, text: str) -> str:
            return text.upper()
