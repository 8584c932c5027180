from __future__ import annotations
from enum import Enum
from typing import Dict

from .errors import UnknownSegmentError

TEMP_BASE = 5
TEMP_SIZE = 8
MAX_CONSTANT = 0x7FFF  # A-instruction immediate is 15 bits

# scratch register for the destination address of `pop <base segment> i`
SCRATCH = "R13"


class Segment(Enum):
    CONSTANT = "constant"
    LOCAL = "local"
    ARGUMENT = "argument"
    THIS = "this"
    THAT = "that"
    POINTER = "pointer"
    TEMP = "temp"
    STATIC = "static"

    @classmethod
    def from_name(cls, name: str) -> "Segment":
        try:
            return cls(name)
        except ValueError:
            raise UnknownSegmentError(f"unknown segment: {name!r}") from None


# segments addressed as *(base register) + index
BASE_REGISTERS: Dict[Segment, str] = {
    Segment.LOCAL: "LCL",
    Segment.ARGUMENT: "ARG",
    Segment.THIS: "THIS",
    Segment.THAT: "THAT",
}

# pointer 0/1 alias the this/that base registers themselves
POINTER_REGISTERS: Dict[int, str] = {
    0: "THIS",
    1: "THAT",
}
