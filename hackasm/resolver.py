from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List

from hackasm.encoder import EncodingError, is_integer_literal
from hackasm.model import AddressInstruction, Instruction
from hackasm.symbols import SymbolTable


log = logging.getLogger(__name__)


def resolve_instruction(instr: Instruction, symbols: SymbolTable) -> Instruction:
    if not isinstance(instr, AddressInstruction):
        return instr
    token = instr.token
    if not token:
        raise EncodingError("Missing address", instr.line_no, instr.text)
    if is_integer_literal(token):
        return instr
    address = symbols.resolve(token)
    return dataclasses.replace(instr, token=str(address))


def resolve_instructions(instructions: Iterable[Instruction], symbols: SymbolTable) -> List[Instruction]:
    resolved = [resolve_instruction(instr, symbols) for instr in instructions]
    log.debug("resolved symbols, %d variable(s) allocated", len(symbols.variables))
    return resolved
