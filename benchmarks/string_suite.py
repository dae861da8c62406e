"""Sample suite: string building under every size / case combination.

    benchassert run benchmarks.string_suite
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from adapters.markers import (
    Params,
    ParamsAllValues,
    ParamsSource,
    arguments,
    arguments_source,
    assert_with,
    benchmark,
    global_cleanup,
    global_setup,
    iteration_setup,
)


class Padding(Enum):
    LEFT = "left"
    RIGHT = "right"


class StringSuite:
    count: Annotated[int, Params(1, 2, 3)] = 1
    upper: Annotated[bool, ParamsAllValues()] = False

    def __init__(self) -> None:
        self.word = ""
        self.pool: list[str] = []

    @global_setup
    def open_pool(self) -> None:
        self.pool = ["ab"] * self.count

    @iteration_setup
    def build_word(self) -> None:
        self.word = "".join(self.pool)
        if self.upper:
            self.word = self.word.upper()

    @global_cleanup
    def close_pool(self) -> None:
        self.pool = []

    @benchmark
    @assert_with("check_repeat")
    def repeat(self) -> str:
        return self.word * 2

    def check_repeat(self, actual: str) -> bool:
        return len(actual) == 4 * self.count and actual.isupper() == self.upper

    @benchmark
    @assert_with("check_join")
    @arguments("-", 2)
    @arguments(", ", 3)
    def join(self, sep: str, times: int) -> str:
        return sep.join([self.word] * times)

    def check_join(self, sep: str, times: int, actual: str) -> bool:
        return actual.split(sep) == [self.word] * times


class PaddingSuite:
    """Values supplied by members rather than listed inline."""

    side: Annotated[Padding, ParamsAllValues()] = Padding.LEFT
    width: Annotated[int, ParamsSource("widths")] = 0

    @property
    def widths(self) -> list[int]:
        return [4, 8]

    def samples(self) -> list[str]:
        return ["x", "abc"]

    @benchmark
    @assert_with("check_pad")
    @arguments_source("samples")
    def pad(self, text: str) -> str:
        if self.side is Padding.LEFT:
            return text.rjust(self.width)
        return text.ljust(self.width)

    def check_pad(self, text: str, actual: str) -> bool:
        if len(actual) != max(len(text), self.width):
            return False
        if self.side is Padding.LEFT:
            return actual.endswith(text)
        return actual.startswith(text)
