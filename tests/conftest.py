import pytest

from hackasm.config import AssemblerOptions
from hackasm.symbols import SymbolTable


@pytest.fixture
def symbols() -> SymbolTable:
    return SymbolTable()


@pytest.fixture
def lenient() -> AssemblerOptions:
    return AssemblerOptions.lenient()
