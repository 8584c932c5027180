# src/vmtranslator/function_codegen.py
from __future__ import annotations
from typing import List

from .codegen_base import CodeGen, expect_args, expect_symbol, parse_index
from .emit_asm import push_d, pop_to_d
from .instruction import Instruction
from .scope import TranslationScope, internal_label

STACK_BASE = 256
ENTRY_FUNCTION = "Sys.init"

FRAME = "R13"
RET_ADDR = "R14"

# saved by `call`, restored in reverse by `return`
SAVED_REGISTERS = ["LCL", "ARG", "THIS", "THAT"]


class FunctionCodeGen(CodeGen):
    """
    function f k / call f n / return

    Frame layout after `call f n` (stack grows up):

        ARG -> arg 0 .. arg n-1
               return address
               saved LCL, ARG, THIS, THAT
        LCL -> local 0 .. local k-1
    """

    names = frozenset({"function", "call", "return"})

    def __init__(self, scope: TranslationScope):
        self.scope = scope
        self.call_count = 0

    def translate(self, ins: Instruction, module_name: str) -> List[str]:
        if ins.name == "return":
            expect_args(ins, 0)
            return self.write_return()

        expect_args(ins, 2)
        name = expect_symbol(ins, ins.arg(0))
        count = parse_index(ins, ins.arg(1))
        if ins.name == "function":
            return self.write_function(name, count)
        return self.write_call(name, count, self.scope.prefix(module_name))

    def write_function(self, name: str, n_locals: int) -> List[str]:
        self.scope.function = name
        code = [f"({name})"]
        for _ in range(n_locals):
            code += ["D=0"] + push_d()
        return code

    def write_call(self, name: str, n_args: int, caller: str) -> List[str]:
        ret = internal_label(caller, "ret", self.call_count)
        self.call_count += 1

        code = [f"@{ret}", "D=A"] + push_d()
        for reg in SAVED_REGISTERS:
            code += [f"@{reg}", "D=M"] + push_d()
        code += [
            # ARG = SP - n - 5
            "@SP", "D=M", f"@{n_args + 5}", "D=D-A", "@ARG", "M=D",
            # LCL = SP
            "@SP", "D=M", "@LCL", "M=D",
            f"@{name}", "0;JMP",
            f"({ret})",
        ]
        return code

    def write_return(self) -> List[str]:
        code = [
            "@LCL", "D=M", f"@{FRAME}", "M=D",
            # return address sits 5 below the frame
            "@5", "A=D-A", "D=M", f"@{RET_ADDR}", "M=D",
        ]
        # *ARG = return value; SP = ARG + 1
        code += pop_to_d() + ["@ARG", "A=M", "M=D"]
        code += ["@ARG", "D=M+1", "@SP", "M=D"]
        for reg in reversed(SAVED_REGISTERS):
            code += [f"@{FRAME}", "AM=M-1", "D=M", f"@{reg}", "M=D"]
        code += [f"@{RET_ADDR}", "A=M", "0;JMP"]
        return code

    def bootstrap(self) -> List[str]:
        return (
            [f"@{STACK_BASE}", "D=A", "@SP", "M=D"]
            + self.write_call(ENTRY_FUNCTION, 0, "bootstrap")
        )
