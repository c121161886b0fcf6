from __future__ import annotations

from typing import Any, Callable, Dict

from ...common.validation import name_problem
from ..contracts import Prompter
from .codecs import MAX_STORED_INT

INVALID_VALUE = "The value entered is invalid."


class ConsolePrompter(Prompter):
    """Prompter over stdin/stdout.

    Numeric reads re-prompt until the input parses and satisfies the bound.
    "Positive" means non-negative: zero is accepted. Integers are capped at
    the width of a stored field. EOFError from ``input_fn``
    propagates so the caller can treat end of input as a request to exit.
    """

    def __init__(self, input_fn: Callable[[str], str] = input, output_fn: Callable[[str], Any] = print):
        self.input_fn = input_fn
        self.output_fn = output_fn

    def _read_number(self, prompt: str, parse: Callable[[str], Any], accept: Callable[[Any], bool]) -> Any:
        while True:
            raw = self.input_fn(prompt).strip()
            try:
                value = parse(raw)
            except ValueError:
                self.output_fn(INVALID_VALUE)
                continue
            if accept(value):
                return value
            self.output_fn(INVALID_VALUE)

    def read_positive_int(self, prompt: str) -> int:
        return self._read_number(prompt, int, lambda v: 0 <= v <= MAX_STORED_INT)

    def read_int_in_range(self, min_value: int, max_value: int, prompt: str) -> int:
        return self._read_number(prompt, int, lambda v: min_value <= v <= max_value and abs(v) <= MAX_STORED_INT)

    def read_positive_float(self, prompt: str) -> float:
        # nan and inf parse as floats but are not amounts.
        return self._read_number(prompt, float, lambda v: v >= 0 and v != float("inf"))

    def read_dynamic_string(self, prompt: str) -> str:
        return self.input_fn(prompt)

    def read_validated_name(self, prompt: str) -> str:
        while True:
            value = self.input_fn(prompt)
            problem = name_problem(value)
            if not problem:
                return value
            self.output_fn(f"The name {problem}.")

    def pause(self) -> None:
        self.input_fn("\n\nPress Enter to continue...")

    def describe(self) -> Dict[str, Any]:
        return {"class": self.__class__.__name__}
