# src/vmtranslator/errors.py
from __future__ import annotations
from typing import Optional


class VMTranslatorError(ValueError):
    """
    Base for every translation failure.
    Carries optional source context so the CLI can print `Module:line: msg`.
    """

    def __init__(self, message: str, line: Optional[int] = None, module: Optional[str] = None):
        self.message = message
        self.line = line
        self.module = module
        super().__init__(self._render())

    def _render(self) -> str:
        ctx = ""
        if self.module:
            ctx += f"{self.module}:"
        if self.line:
            ctx += f"{self.line}:"
        return f"{ctx} {self.message}" if ctx else self.message

    def with_module(self, module: str) -> "VMTranslatorError":
        if self.module is None:
            self.module = module
            self.args = (self._render(),)
        return self

    def __str__(self) -> str:
        return self._render()


class VMSyntaxError(VMTranslatorError):
    pass


class MalformedIndexError(VMSyntaxError):
    pass


class UnknownSegmentError(VMTranslatorError):
    pass


class InvalidSegmentIndexError(UnknownSegmentError):
    # segment name is fine, index/direction is not (pointer 2, pop constant, ...)
    pass


class UnknownInstructionError(VMTranslatorError):
    pass


class InvalidModuleNameError(VMTranslatorError):
    pass


class SourceReadError(VMTranslatorError):
    # .vm file missing, unreadable, or not UTF-8
    pass
