# src/vmtranslator/stack_codegen.py
from __future__ import annotations
from typing import List

from .codegen_base import CodeGen, expect_args, parse_index
from .emit_asm import push_d, pop_to_d
from .errors import InvalidSegmentIndexError, UnknownSegmentError
from .instruction import Instruction
from .segments import (
    BASE_REGISTERS, MAX_CONSTANT, POINTER_REGISTERS, SCRATCH,
    TEMP_BASE, TEMP_SIZE, Segment,
)


def static_symbol(module_name: str, index: int) -> str:
    return f"{module_name}.{index}"


class StackCodeGen(CodeGen):
    """
    push/pop over the eight segments:

      constant               push literal i (no pop form)
      local/argument/this/that  *(LCL|ARG|THIS|THAT + i)
      pointer                0 -> THIS, 1 -> THAT (the registers themselves)
      temp                   RAM[5 + i], i in 0..7
      static                 @{module}.{i}
    """

    names = frozenset({"push", "pop"})

    def translate(self, ins: Instruction, module_name: str) -> List[str]:
        expect_args(ins, 2)
        try:
            segment = Segment.from_name(ins.arg(0))
        except UnknownSegmentError as e:
            raise UnknownSegmentError(f"{e.message}: [{ins}]", line=ins.line_number) from None
        index = parse_index(ins, ins.arg(1))
        self._check_index(ins, segment, index)

        if ins.name == "push":
            return self.push(segment, index, module_name)
        return self.pop(segment, index, module_name)

    def _check_index(self, ins: Instruction, segment: Segment, index: int) -> None:
        problem = None
        if segment is Segment.CONSTANT:
            if ins.name == "pop":
                problem = "cannot pop into the constant segment"
            elif index > MAX_CONSTANT:
                problem = f"constant {index} does not fit in 15 bits"
        elif segment is Segment.POINTER and index not in POINTER_REGISTERS:
            problem = f"pointer index must be 0 or 1, got {index}"
        elif segment is Segment.TEMP and index >= TEMP_SIZE:
            problem = f"temp index must be 0..{TEMP_SIZE - 1}, got {index}"
        if problem:
            raise InvalidSegmentIndexError(f"{problem}: [{ins}]", line=ins.line_number)

    # ----------------- push -----------------

    def push(self, segment: Segment, index: int, module_name: str) -> List[str]:
        if segment is Segment.CONSTANT:
            load = [f"@{index}", "D=A"]
        elif segment in BASE_REGISTERS:
            # D = *(base + index), via pointer + offset
            load = [f"@{index}", "D=A", f"@{BASE_REGISTERS[segment]}", "A=D+M", "D=M"]
        elif segment is Segment.POINTER:
            load = [f"@{POINTER_REGISTERS[index]}", "D=M"]
        elif segment is Segment.TEMP:
            load = [f"@{TEMP_BASE + index}", "D=M"]
        elif segment is Segment.STATIC:
            load = [f"@{static_symbol(module_name, index)}", "D=M"]
        else:
            raise AssertionError(segment)
        return load + push_d()

    # ----------------- pop -----------------

    def pop(self, segment: Segment, index: int, module_name: str) -> List[str]:
        if segment in BASE_REGISTERS:
            # address first, into the scratch register, then pop
            return (
                [f"@{index}", "D=A", f"@{BASE_REGISTERS[segment]}", "D=D+M", f"@{SCRATCH}", "M=D"]
                + pop_to_d()
                + [f"@{SCRATCH}", "A=M", "M=D"]
            )
        if segment is Segment.POINTER:
            dest = POINTER_REGISTERS[index]
        elif segment is Segment.TEMP:
            dest = str(TEMP_BASE + index)
        elif segment is Segment.STATIC:
            dest = static_symbol(module_name, index)
        else:
            raise AssertionError(segment)
        return pop_to_d() + [f"@{dest}", "M=D"]
