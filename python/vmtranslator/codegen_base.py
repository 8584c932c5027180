from __future__ import annotations
import re
from typing import FrozenSet, List

from .emit_asm import AsmProgram
from .errors import MalformedIndexError, VMSyntaxError
from .instruction import Instruction

# label and function names; no `$`, which is reserved for generated labels
_SYMBOL_RE = re.compile(r"[A-Za-z_.:][A-Za-z0-9_.:]*")


class CodeGen:
    """
    One instruction category (stack, arithmetic, flow, function).

    try_translate() either appends the full translation and returns True,
    or returns False / raises with the buffer untouched. Subclasses build
    the code as a list in translate(); it is appended in one step.
    """

    names: FrozenSet[str] = frozenset()

    def recognizes(self, ins: Instruction) -> bool:
        return ins.name in self.names

    def try_translate(self, p: AsmProgram, ins: Instruction, module_name: str) -> bool:
        if not self.recognizes(ins):
            return False
        code = self.translate(ins, module_name)
        p.add(*code)
        return True

    def translate(self, ins: Instruction, module_name: str) -> List[str]:
        raise NotImplementedError


def expect_args(ins: Instruction, count: int) -> None:
    if len(ins.arguments) != count:
        raise VMSyntaxError(
            f"'{ins.name}' expects {count} argument(s), got {len(ins.arguments)}: [{ins}]",
            line=ins.line_number,
        )


def parse_index(ins: Instruction, text: str) -> int:
    # decimal digits only: no sign, no 0x, no underscores
    if not text.isascii() or not text.isdigit():
        raise MalformedIndexError(
            f"expected a non-negative integer, got {text!r}: [{ins}]",
            line=ins.line_number,
        )
    return int(text)


def expect_symbol(ins: Instruction, text: str) -> str:
    if not _SYMBOL_RE.fullmatch(text):
        raise VMSyntaxError(f"not a valid label/function name: {text!r}: [{ins}]", line=ins.line_number)
    return text
