import pytest

from hackasm.model import AddressInstruction, ComputeInstruction, SourceLine
from hackasm.parser import ParseError, normalize_lines, parse_instruction, scan_labels, strip_comment
from hackasm.symbols import SymbolError


def test_normalize_drops_comments_and_blank_lines():
    lines = normalize_lines("// header\n\n  @2   // load two\n\t\nD=A\r\n   // trailing\n")

    assert lines == [SourceLine(3, "@2"), SourceLine(5, "D=A")]


def test_strip_comment_keeps_text_before_first_marker():
    assert strip_comment("  M=D // store // again") == "M=D"
    assert strip_comment("// only a comment") == ""


def test_normalize_empty_program():
    assert normalize_lines("") == []
    assert normalize_lines("// nothing\n   \n") == []


def test_scan_labels_records_next_instruction_address(symbols):
    lines = normalize_lines("(START)\n@1\n(LOOP)\nD=A\n@LOOP\n0;JMP\n(END)\n")
    kept = scan_labels(lines, symbols)

    assert [line.text for line in kept] == ["@1", "D=A", "@LOOP", "0;JMP"]
    assert symbols.labels == {"START": 0, "LOOP": 1, "END": 4}


def test_consecutive_labels_share_an_address(symbols):
    scan_labels(normalize_lines("@0\n(A_LABEL)\n(B_LABEL)\nD=A\n"), symbols)

    assert symbols.labels["A_LABEL"] == 1
    assert symbols.labels["B_LABEL"] == 1


def test_label_name_is_trimmed(symbols):
    scan_labels(normalize_lines("( LOOP )\n0;JMP\n"), symbols)

    assert symbols.labels == {"LOOP": 0}


def test_empty_label_is_rejected(symbols):
    with pytest.raises(ParseError) as exc:
        scan_labels(normalize_lines("@1\n()\n"), symbols)
    assert exc.value.line_no == 2


def test_duplicate_label_is_rejected_by_default(symbols):
    with pytest.raises(SymbolError) as exc:
        scan_labels(normalize_lines("(X)\n@1\n(X)\n@2\n"), symbols)
    assert "Duplicate label: X" in exc.value.message
    assert exc.value.line_no == 3


def test_duplicate_label_last_wins_when_lenient(symbols, lenient):
    scan_labels(normalize_lines("(X)\n@1\n(X)\n@2\n"), symbols, lenient)

    assert symbols.labels["X"] == 1


def test_label_cannot_shadow_predefined_symbol(symbols):
    with pytest.raises(SymbolError):
        scan_labels(normalize_lines("(SCREEN)\n@0\n"), symbols)


@pytest.mark.parametrize(
    ("text", "token"),
    [
        ("@2", "2"),
        ("@LOOP", "LOOP"),
        ("@ sum", "sum"),
        ("@", ""),
    ],
)
def test_parse_address_instruction(text, token):
    instr = parse_instruction(SourceLine(7, text))

    assert instr == AddressInstruction(line_no=7, text=text, token=token)


@pytest.mark.parametrize(
    ("text", "dest", "comp", "jump"),
    [
        ("D=A", "D", "A", ""),
        ("AMD=M+1", "AMD", "M+1", ""),
        ("0;JMP", "", "0", "JMP"),
        ("D;JGT", "", "D", "JGT"),
        ("M=D;JEQ", "M", "D", "JEQ"),
        ("D = D + A", "D", "D + A", ""),
        ("D =M ; JNE", "D", "M", "JNE"),
        ("D^A", "", "D^A", ""),
    ],
)
def test_parse_compute_instruction(text, dest, comp, jump):
    instr = parse_instruction(SourceLine(1, text))

    assert isinstance(instr, ComputeInstruction)
    assert (instr.dest, instr.comp, instr.jump) == (dest, comp, jump)


def test_parse_splits_on_first_separator_only():
    instr = parse_instruction(SourceLine(1, "A=D=M;JMP;JMP"))

    assert instr.dest == "A"
    assert instr.comp == "D=M"
    assert instr.jump == "JMP;JMP"


def test_only_newline_ends_a_line():
    lines = normalize_lines("// a\x0c@7\n@1 @2\r\n@3")

    assert lines == [SourceLine(2, "@1 @2"), SourceLine(3, "@3")]
