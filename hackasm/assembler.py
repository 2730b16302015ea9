from __future__ import annotations

import logging
from typing import List, Optional

from hackasm.config import AssemblerOptions
from hackasm.encoder import encode_program
from hackasm.parser import normalize_lines, parse_program, scan_labels
from hackasm.resolver import resolve_instructions
from hackasm.symbols import SymbolTable


log = logging.getLogger(__name__)


def assemble(text: str, options: Optional[AssemblerOptions] = None) -> List[str]:
    """Translate a whole program into 16-character binary words.

    Labels are collected over the full input before any address is resolved,
    so the complete text must be available up front. Any error aborts the run
    and nothing is returned.
    """
    options = options or AssemblerOptions()
    symbols = SymbolTable()
    lines = scan_labels(normalize_lines(text), symbols, options)
    instructions = resolve_instructions(parse_program(lines), symbols)
    words = encode_program(instructions, options)
    log.debug(
        "assembled %d word(s), %d label(s), %d variable(s)",
        len(words),
        len(symbols.labels),
        len(symbols.variables),
    )
    return words


def assemble_text(text: str, options: Optional[AssemblerOptions] = None) -> str:
    return "\n".join(assemble(text, options))
