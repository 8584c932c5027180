from __future__ import annotations

from typing import Iterable, List, Optional
from lark import Lark, Transformer, exceptions

from .errors import VMSyntaxError
from .instruction import Instruction


class InstructionBuilder(Transformer):
    def __init__(self, line_number: int):
        super().__init__()
        self.line_number = line_number

    def start(self, items):
        # start: instruction?  => empty for blank / comment-only lines
        return items[0] if items else None

    def instruction(self, items):
        tokens = [str(t) for t in items]
        return Instruction(
            line_number=self.line_number,
            name=tokens[0],
            arguments=tuple(tokens[1:]),
        )


def make_parser() -> Lark:
    with open(__file__.replace("parser.py", "vm.lark"), "r", encoding="utf-8") as f:
        grammar = f.read()
    return Lark(grammar, start="start", parser="lalr")


_PARSER: Optional[Lark] = None


def parse_line(line: str, line_number: int) -> Optional[Instruction]:
    global _PARSER
    if _PARSER is None:
        _PARSER = make_parser()
    try:
        # a trailing CR/LF ends the line; anywhere else \r is token text
        tree = _PARSER.parse(line.rstrip("\r\n"))
    except exceptions.UnexpectedInput as e:
        raise VMSyntaxError(f"cannot tokenize line: {line!r} ({e})", line=line_number) from e
    return InstructionBuilder(line_number).transform(tree)


def parse(lines: Iterable[str]) -> List[Instruction]:
    """
    Turns raw VM source lines into instructions.

    Line numbers are 1-based and count every input line, so a blank or
    comment-only line produces nothing but still shifts the numbers of
    the instructions after it.
    """
    instructions: List[Instruction] = []
    for line_number, line in enumerate(lines, start=1):
        ins = parse_line(line, line_number)
        if ins is not None:
            instructions.append(ins)
    return instructions


def parse_text(text: str) -> List[Instruction]:
    # only \n ends a line; \f and \v stay inside it
    return parse(text.split("\n"))
