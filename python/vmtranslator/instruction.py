from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Instruction:
    line_number: int
    name: str
    arguments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # lists coming from the transformer are frozen into tuples
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def arg(self, i: int) -> str:
        return self.arguments[i]

    def __str__(self) -> str:
        return " ".join((self.name,) + self.arguments)
