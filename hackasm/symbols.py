from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from hackasm.model import AssemblyError


log = logging.getLogger(__name__)

VARIABLE_BASE = 16

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType(
    {
        **{f"R{index}": index for index in range(16)},
        "SP": 0,
        "LCL": 1,
        "ARG": 2,
        "THIS": 3,
        "THAT": 4,
        "SCREEN": 16384,
        "KBD": 24576,
    }
)


class SymbolError(AssemblyError):
    pass


class SymbolTable:
    """Name to address bindings for a single translation run.

    Lookups go predefined symbols first, then labels, then variables.
    Variables are allocated on first reference from ``VARIABLE_BASE`` upward.
    """

    def __init__(self) -> None:
        self.labels: Dict[str, int] = {}
        self.variables: Dict[str, int] = {}
        self.next_variable = VARIABLE_BASE

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def get(self, name: str) -> Optional[int]:
        if name in PREDEFINED_SYMBOLS:
            return PREDEFINED_SYMBOLS[name]
        if name in self.labels:
            return self.labels[name]
        return self.variables.get(name)

    def add_label(self, name: str, address: int, line_no: int = 0, text: str = "", strict: bool = True) -> None:
        if name in PREDEFINED_SYMBOLS:
            if strict:
                raise SymbolError(f"Label shadows predefined symbol: {name}", line_no, text)
            log.warning("line %d: label %s shadows a predefined symbol and is never used", line_no, name)
        if name in self.labels:
            if strict:
                raise SymbolError(f"Duplicate label: {name}", line_no, text)
            log.warning(
                "line %d: label %s redeclared, moving from %d to %d",
                line_no,
                name,
                self.labels[name],
                address,
            )
        self.labels[name] = address

    def resolve(self, name: str) -> int:
        address = self.get(name)
        if address is not None:
            return address
        address = self.next_variable
        self.variables[name] = address
        self.next_variable += 1
        log.debug("allocated variable %s at %d", name, address)
        return address
