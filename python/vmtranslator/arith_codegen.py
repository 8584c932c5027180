from __future__ import annotations
from typing import Dict, List

from .codegen_base import CodeGen, expect_args
from .emit_asm import pop_to_d
from .instruction import Instruction
from .scope import internal_label

# x op y, y on top. Result replaces x.
BINARY_OPS: Dict[str, str] = {
    "add": "D+M",
    "sub": "M-D",
    "and": "D&M",
    "or": "D|M",
}

UNARY_OPS: Dict[str, str] = {
    "neg": "-M",
    "not": "!M",
}

COMPARE_JUMPS: Dict[str, str] = {
    "eq": "JEQ",
    "gt": "JGT",
    "lt": "JLT",
}


class ArithmeticCodeGen(CodeGen):
    names = frozenset(BINARY_OPS) | frozenset(UNARY_OPS) | frozenset(COMPARE_JUMPS)

    def __init__(self) -> None:
        self.compare_count = 0

    def translate(self, ins: Instruction, module_name: str) -> List[str]:
        expect_args(ins, 0)
        op = ins.name
        if op in UNARY_OPS:
            return ["@SP", "A=M-1", f"M={UNARY_OPS[op]}"]
        if op in BINARY_OPS:
            return pop_to_d() + ["@SP", "A=M-1", f"M={BINARY_OPS[op]}"]
        return self._compare(op, module_name)

    def _compare(self, op: str, module_name: str) -> List[str]:
        # true is -1 (all bits set), false is 0.
        # x - y overflows when the signs differ, so only subtract when they
        # match; otherwise D = +1 / -1 from the sign of x.
        n = self.compare_count
        self.compare_count += 1
        x_neg = internal_label(module_name, "cmp_xneg", n)
        same = internal_label(module_name, "cmp_same", n)
        decide = internal_label(module_name, "cmp_decide", n)
        end = internal_label(module_name, "cmp_end", n)
        return pop_to_d() + [
            "@R13", "M=D",                       # y
            "@SP", "A=M-1", "D=M",               # x
            f"@{x_neg}", "D;JLT",
            "@R13", "D=M",
            f"@{same}", "D;JGE",
            "D=1",                               # x >= 0 > y
            f"@{decide}", "0;JMP",
            f"({x_neg})",
            "@R13", "D=M",
            f"@{same}", "D;JLT",
            "D=-1",                              # x < 0 <= y
            f"@{decide}", "0;JMP",
            f"({same})",
            "@R13", "D=M",
            "@SP", "A=M-1", "D=M-D",
            f"({decide})",
            "@SP", "A=M-1",
            "M=-1",
            f"@{end}",
            f"D;{COMPARE_JUMPS[op]}",
            "@SP", "A=M-1",
            "M=0",
            f"({end})",
        ]
