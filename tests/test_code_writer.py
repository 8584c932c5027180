import pytest

from vmtranslator.code_writer import CodeWriter
from vmtranslator.emit_asm import AsmProgram
from vmtranslator.errors import (
    InvalidModuleNameError, SourceReadError, UnknownInstructionError, UnknownSegmentError,
    VMTranslatorError,
)
from vmtranslator.instruction import Instruction


def test_generators_are_chained():
    w = CodeWriter()
    w.write_module("Main", ["push constant 7", "push constant 8", "add"])
    assert w.p.lines[-3:] == ["@SP", "A=M-1", "M=D+M"]


def test_shared_buffer_is_appended_to():
    p = AsmProgram(lines=["// prologue"])
    w = CodeWriter(p)
    w.write_instruction(Instruction(1, "push", ("constant", "1")), "Main")
    assert w.p is p
    assert p.lines[0] == "// prologue"
    assert p.lines[1] == "@1"


def test_unknown_instruction_reports_line_and_module():
    w = CodeWriter()
    with pytest.raises(UnknownInstructionError) as exc:
        w.write_module("Main", ["push constant 1", "", "jump somewhere"])
    assert exc.value.line == 3
    assert exc.value.module == "Main"
    assert str(exc.value).startswith("Main:3:")
    assert "jump somewhere" in str(exc.value)


def test_unknown_instruction_appends_nothing():
    w = CodeWriter()
    w.write_module("Main", ["push constant 1"])
    before = list(w.p.lines)
    with pytest.raises(UnknownInstructionError):
        w.write_instruction(Instruction(9, "mul"), "Main")
    assert w.p.lines == before


def test_segment_errors_carry_module_name():
    w = CodeWriter()
    with pytest.raises(UnknownSegmentError) as exc:
        w.write_module("Prog", ["push heap 0"])
    assert str(exc.value).startswith("Prog:1:")
    assert isinstance(exc.value, VMTranslatorError)
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize("name", ["Foo.Bar", "has space", "", "1st"])
def test_bad_module_names_are_rejected(name):
    with pytest.raises(InvalidModuleNameError):
        CodeWriter().write_module(name, ["push static 0"])


def test_module_from_file_uses_stem(tmp_path):
    src = tmp_path / "Prog.vm"
    src.write_text("push constant 3\npop static 0\n", encoding="utf-8")
    w = CodeWriter()
    assert w.write_module_from_file(src) == "Prog"
    assert "@Prog.0" in w.p.lines


def test_directory_modules_are_sorted(tmp_path):
    (tmp_path / "B.vm").write_text("push static 1\n", encoding="utf-8")
    (tmp_path / "A.vm").write_text("push static 1\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored\n", encoding="utf-8")
    w = CodeWriter()
    assert w.write_directory(tmp_path) == ["A", "B"]
    statics = [line for line in w.p.lines if line.endswith(".1")]
    assert statics == ["@A.1", "@B.1"]


def test_bootstrap_comes_first():
    w = CodeWriter()
    w.write_bootstrap()
    assert w.p.lines[:4] == ["@256", "D=A", "@SP", "M=D"]
    assert "@Sys.init" in w.p.lines


def test_save_writes_one_instruction_per_line(tmp_path):
    w = CodeWriter()
    w.write_module("Main", ["push constant 2"])
    out = tmp_path / "Main.asm"
    w.save(out)
    text = out.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert text.splitlines() == w.p.lines


def test_non_utf8_file_is_a_translation_error(tmp_path):
    src = tmp_path / "Bad.vm"
    src.write_bytes(b"push constant 1\n\xff\n")
    w = CodeWriter()
    with pytest.raises(SourceReadError) as exc:
        w.write_module_from_file(src)
    assert isinstance(exc.value, VMTranslatorError)
    assert exc.value.module == "Bad"
    assert w.p.lines == []
