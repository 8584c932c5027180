from __future__ import annotations
from typing import List

from .codegen_base import CodeGen, expect_args, expect_symbol
from .emit_asm import pop_to_d
from .instruction import Instruction
from .scope import TranslationScope


class ProgramFlowCodeGen(CodeGen):
    names = frozenset({"label", "goto", "if-goto"})

    def __init__(self, scope: TranslationScope):
        self.scope = scope

    def translate(self, ins: Instruction, module_name: str) -> List[str]:
        expect_args(ins, 1)
        target = self.scope.label(expect_symbol(ins, ins.arg(0)), module_name)

        if ins.name == "label":
            return [f"({target})"]
        if ins.name == "goto":
            return [f"@{target}", "0;JMP"]
        # if-goto: jump when the popped value is not false (0)
        return pop_to_d() + [f"@{target}", "D;JNE"]
