from __future__ import annotations

import logging
import re
from itertools import permutations
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from hackasm.config import AssemblerOptions
from hackasm.model import AddressInstruction, AssemblyError, ComputeInstruction, Instruction


log = logging.getLogger(__name__)

MAX_ADDRESS = 0x7FFF
INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# a-bit followed by c1..c6
COMP_CODES: Mapping[str, str] = MappingProxyType(
    {
        "0": "0101010",
        "1": "0111111",
        "-1": "0111010",
        "D": "0001100",
        "A": "0110000",
        "!D": "0001101",
        "!A": "0110001",
        "-D": "0001111",
        "-A": "0110011",
        "D+1": "0011111",
        "A+1": "0110111",
        "D-1": "0001110",
        "A-1": "0110010",
        "D+A": "0000010",
        "D-A": "0010011",
        "A-D": "0000111",
        "D&A": "0000000",
        "D|A": "0010101",
        "M": "1110000",
        "!M": "1110001",
        "-M": "1110011",
        "M+1": "1110111",
        "M-1": "1110010",
        "D+M": "1000010",
        "D-M": "1010011",
        "M-D": "1000111",
        "D&M": "1000000",
        "D|M": "1010101",
    }
)


def _dest_codes() -> Dict[str, str]:
    codes: Dict[str, str] = {}
    for bits in range(1, 8):
        registers = [reg for reg, mask in (("A", 4), ("D", 2), ("M", 1)) if bits & mask]
        for order in permutations(registers):
            codes["".join(order)] = format(bits, "03b")
    return codes


# bits are A,D,M; any ordering of the same register set is accepted
DEST_CODES: Mapping[str, str] = MappingProxyType(_dest_codes())

JUMP_CODES: Mapping[str, str] = MappingProxyType(
    {
        "JGT": "001",
        "JEQ": "010",
        "JGE": "011",
        "JLT": "100",
        "JNE": "101",
        "JLE": "110",
        "JMP": "111",
    }
)

EMPTY_FIELD = "000"


class EncodingError(AssemblyError):
    pass


def is_integer_literal(token: str) -> bool:
    return INTEGER_RE.fullmatch(token) is not None


def _encode_address(instr: AddressInstruction) -> str:
    if not instr.token:
        raise EncodingError("Missing address", instr.line_no, instr.text)
    if not is_integer_literal(instr.token):
        raise EncodingError(f"Unresolved address: {instr.token}", instr.line_no, instr.text)
    value = int(instr.token, 10)
    if value < 0 or value > MAX_ADDRESS:
        raise EncodingError(f"Address out of range 0..{MAX_ADDRESS}: {value}", instr.line_no, instr.text)
    return f"0{value:015b}"


def _encode_dest(instr: ComputeInstruction, options: AssemblerOptions) -> str:
    if not instr.dest:
        return EMPTY_FIELD
    code = DEST_CODES.get(instr.dest)
    if code is not None:
        return code
    if options.strict_dest:
        raise EncodingError(f"Unknown destination: {instr.dest}", instr.line_no, instr.text)
    log.warning("line %d: unknown destination %s encoded as %s", instr.line_no, instr.dest, EMPTY_FIELD)
    return EMPTY_FIELD


def _encode_compute(instr: ComputeInstruction, options: AssemblerOptions) -> str:
    comp = COMP_CODES.get(instr.comp)
    if comp is None:
        raise EncodingError(f"Unknown computation: {instr.comp}", instr.line_no, instr.text)
    dest = _encode_dest(instr, options)
    if not instr.jump:
        jump = EMPTY_FIELD
    else:
        jump = JUMP_CODES.get(instr.jump)
        if jump is None:
            raise EncodingError(f"Unknown jump: {instr.jump}", instr.line_no, instr.text)
    return f"111{comp}{dest}{jump}"


def encode_instruction(instr: Instruction, options: Optional[AssemblerOptions] = None) -> str:
    options = options or AssemblerOptions()
    if isinstance(instr, AddressInstruction):
        return _encode_address(instr)
    if isinstance(instr, ComputeInstruction):
        return _encode_compute(instr, options)
    raise TypeError(f"Not an instruction: {instr!r}")


def encode_program(instructions: Iterable[Instruction], options: Optional[AssemblerOptions] = None) -> List[str]:
    options = options or AssemblerOptions()
    words = [encode_instruction(instr, options) for instr in instructions]
    log.debug("encoded %d instruction(s)", len(words))
    return words
