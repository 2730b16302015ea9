from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class AssemblyError(Exception):
    def __init__(self, message: str, line_no: int = 0, text: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.line_no = line_no
        self.text = text

    def describe(self) -> str:
        if self.line_no:
            return f"line {self.line_no}: {self.message}: {self.text}"
        return self.message


@dataclass(frozen=True)
class SourceLine:
    line_no: int
    text: str


@dataclass(frozen=True)
class AddressInstruction:
    line_no: int
    text: str
    token: str  # decimal literal or symbol; decimal once resolved


@dataclass(frozen=True)
class ComputeInstruction:
    line_no: int
    text: str
    dest: str
    comp: str
    jump: str


Instruction = Union[AddressInstruction, ComputeInstruction]
