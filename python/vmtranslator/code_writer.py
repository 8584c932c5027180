from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional

from .arith_codegen import ArithmeticCodeGen
from .codegen_base import CodeGen
from .emit_asm import AsmProgram
from .errors import (
    InvalidModuleNameError, SourceReadError, UnknownInstructionError, VMTranslatorError,
)
from .flow_codegen import ProgramFlowCodeGen
from .function_codegen import FunctionCodeGen
from .instruction import Instruction
from .parser import parse
from .scope import TranslationScope
from .stack_codegen import StackCodeGen

# must be usable as the `Module` part of `Module.3` and `Module$label`
_MODULE_RE = re.compile(r"[A-Za-z_:][A-Za-z0-9_:]*")


class CodeWriter:
    """
    Translates whole modules into one shared AsmProgram.

    Every instruction is offered to the generators in order; the first one
    that recognizes it appends the code. Nobody recognizing it is fatal.
    """

    def __init__(self, p: Optional[AsmProgram] = None):
        self.p = p if p is not None else AsmProgram(lines=[])
        self.scope = TranslationScope()
        self.functions = FunctionCodeGen(self.scope)
        self.generators: List[CodeGen] = [
            StackCodeGen(),
            ArithmeticCodeGen(),
            ProgramFlowCodeGen(self.scope),
            self.functions,
        ]

    def write_instruction(self, ins: Instruction, module_name: str) -> None:
        for gen in self.generators:
            if gen.try_translate(self.p, ins, module_name):
                return
        raise UnknownInstructionError(f"unknown instruction [{ins}]", line=ins.line_number)

    def write_instructions(self, instructions: Iterable[Instruction], module_name: str) -> None:
        for ins in instructions:
            self.write_instruction(ins, module_name)

    def write_module(self, module_name: str, vm_lines: Iterable[str]) -> None:
        if not _MODULE_RE.fullmatch(module_name):
            raise InvalidModuleNameError(f"module name is not a valid symbol: {module_name!r}")
        self.scope.reset()
        try:
            self.write_instructions(parse(vm_lines), module_name)
        except VMTranslatorError as e:
            e.with_module(module_name)
            raise

    def write_module_from_file(self, filename: str | Path) -> str:
        path = Path(filename)
        try:
            text = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            raise SourceReadError(f"cannot read {path}: {e}", module=path.stem) from e
        self.write_module(path.stem, text.split("\n"))
        return path.stem

    def write_directory(self, dirname: str | Path) -> List[str]:
        files = sorted(Path(dirname).glob("*.vm"))
        return [self.write_module_from_file(f) for f in files]

    def write_bootstrap(self) -> None:
        self.p.add(*self.functions.bootstrap())

    def save(self, path: str | Path) -> None:
        self.p.save(str(path))
