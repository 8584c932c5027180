# src/vmtranslator/emit_asm.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class AsmProgram:
    # append-only: generators never rewrite or reorder earlier lines
    lines: List[str] = field(default_factory=list)

    def add(self, *instructions: str) -> None:
        self.lines.extend(instructions)

    def text(self) -> str:
        return "\n".join(self.lines) + ("\n" if self.lines else "")

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(self.text())

    def __len__(self) -> int:
        return len(self.lines)


# The only two places that move SP. Everything that touches the stack
# goes through these.

def push_d() -> List[str]:
    """*SP = D; SP++"""
    return ["@SP", "A=M", "M=D", "@SP", "M=M+1"]


def pop_to_d() -> List[str]:
    """SP--; D = *SP"""
    return ["@SP", "M=M-1", "A=M", "D=M"]
