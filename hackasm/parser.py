from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from hackasm.config import AssemblerOptions
from hackasm.model import AddressInstruction, AssemblyError, ComputeInstruction, Instruction, SourceLine
from hackasm.symbols import SymbolTable


log = logging.getLogger(__name__)

COMMENT_MARKER = "//"


class ParseError(AssemblyError):
    pass


def strip_comment(line: str) -> str:
    return line.split(COMMENT_MARKER, 1)[0].strip()


def normalize_lines(text: str) -> List[SourceLine]:
    lines: List[SourceLine] = []
    for idx, raw_line in enumerate(text.split("\n"), start=1):
        raw_line = raw_line.rstrip("\r")
        line = strip_comment(raw_line)
        if not line:
            continue
        lines.append(SourceLine(line_no=idx, text=line))
    log.debug("normalized %d statement line(s)", len(lines))
    return lines


def _label_name(line: SourceLine) -> Optional[str]:
    text = line.text
    if not (text.startswith("(") and text.endswith(")")) or len(text) < 2:
        return None
    name = text[1:-1].strip()
    if not name:
        raise ParseError("Empty label", line.line_no, text)
    return name


def scan_labels(
    lines: Iterable[SourceLine],
    symbols: SymbolTable,
    options: Optional[AssemblerOptions] = None,
) -> List[SourceLine]:
    options = options or AssemblerOptions()
    kept: List[SourceLine] = []
    for line in lines:
        name = _label_name(line)
        if name is None:
            kept.append(line)
            continue
        # a label points at the next instruction that will be emitted
        symbols.add_label(name, len(kept), line.line_no, line.text, strict=options.strict_labels)
    log.debug("found %d label(s) over %d instruction(s)", len(symbols.labels), len(kept))
    return kept


def _split_comp_jump(expression: str) -> tuple[str, str]:
    comp, sep, jump = expression.partition(";")
    if not sep:
        return expression.strip(), ""
    return comp.strip(), jump.strip()


def parse_instruction(line: SourceLine) -> Instruction:
    text = line.text
    if text.startswith("@"):
        return AddressInstruction(line_no=line.line_no, text=text, token=text[1:].strip())
    dest, sep, expression = text.partition("=")
    if not sep:
        dest, expression = "", text
    comp, jump = _split_comp_jump(expression)
    return ComputeInstruction(
        line_no=line.line_no,
        text=text,
        dest=dest.strip(),
        comp=comp,
        jump=jump,
    )


def parse_program(lines: Iterable[SourceLine]) -> List[Instruction]:
    return [parse_instruction(line) for line in lines]
