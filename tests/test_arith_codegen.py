import pytest

from hack_sim import HackMachine
from vmtranslator.arith_codegen import ArithmeticCodeGen
from vmtranslator.code_writer import CodeWriter
from vmtranslator.emit_asm import AsmProgram
from vmtranslator.errors import VMSyntaxError
from vmtranslator.parser import parse

TRUE, FALSE = -1, 0


def run_module(vm_lines, module="Arith"):
    w = CodeWriter()
    w.write_module(module, vm_lines)
    m = HackMachine(w.p.lines)
    m.poke(0, 256)
    m.run()
    return m


def push(x):
    # constants are non-negative; negatives go through neg
    return [f"push constant {abs(x)}"] + (["neg"] if x < 0 else [])


@pytest.mark.parametrize(
    "op,x,y,expected",
    [
        ("add", 7, 8, 15),
        ("add", -3, 1, -2),
        ("sub", 7, 8, -1),
        ("sub", 8, 7, 1),
        ("and", 12, 10, 8),
        ("or", 12, 10, 14),
        ("eq", 5, 5, TRUE),
        ("eq", 5, 6, FALSE),
        ("gt", 6, 5, TRUE),
        ("gt", 5, 5, FALSE),
        ("gt", -1, 5, FALSE),
        ("lt", 5, 6, TRUE),
        ("lt", 6, 5, FALSE),
        ("lt", -4, -2, TRUE),
    ],
)
def test_binary_ops(op, x, y, expected):
    m = run_module(push(x) + push(y) + [op])
    assert m.peek(256) == expected
    assert m.peek(0) == 257


@pytest.mark.parametrize("op,x,expected", [("neg", 5, -5), ("neg", 0, 0), ("not", 0, -1), ("not", 5, -6)])
def test_unary_ops(op, x, expected):
    m = run_module(push(x) + [op])
    assert m.peek(256) == expected
    assert m.peek(0) == 257


def test_comparison_labels_are_unique():
    lines = ["push constant 1", "push constant 1", "eq"] * 3 + ["and", "and"]
    m = run_module(lines)
    assert m.peek(256) == TRUE
    assert m.peek(0) == 257


def test_comparison_labels_unique_across_modules():
    w = CodeWriter()
    w.write_module("A", ["push constant 1", "push constant 2", "lt"])
    w.write_module("B", ["push constant 1", "push constant 2", "lt"])
    m = HackMachine(w.p.lines)
    m.poke(0, 256)
    m.run()
    assert m.peek(256) == TRUE
    assert m.peek(257) == TRUE


def test_declines_stack_instructions():
    p = AsmProgram()
    (ins,) = parse(["push constant 1"])
    assert ArithmeticCodeGen().try_translate(p, ins, "M") is False
    assert p.lines == []


def test_extra_argument_is_an_error():
    p = AsmProgram()
    (ins,) = parse(["add 1"])
    with pytest.raises(VMSyntaxError):
        ArithmeticCodeGen().try_translate(p, ins, "M")
    assert p.lines == []


@pytest.mark.parametrize(
    "op,x,y,expected",
    [
        ("gt", -32767, 2, FALSE),
        ("gt", 32767, -2, TRUE),
        ("gt", 2, -32767, TRUE),
        ("gt", -2, 32767, FALSE),
        ("lt", -32767, 2, TRUE),
        ("lt", 32767, -2, FALSE),
        ("lt", 2, -32767, FALSE),
        ("lt", -2, 32767, TRUE),
        ("eq", 32767, -32767, FALSE),
        ("eq", -32767, -32767, TRUE),
    ],
)
def test_comparisons_do_not_overflow_on_mixed_signs(op, x, y, expected):
    m = run_module(push(x) + push(y) + [op])
    assert m.peek(256) == expected
    assert m.peek(0) == 257


def test_comparison_labels_do_not_clash_with_user_labels():
    w = CodeWriter()
    w.write_module("Foo", ["label cmp_end.0", "label CMP_END.0", "push constant 1", "push constant 1", "eq"])
    m = HackMachine(w.p.lines)
    m.poke(0, 256)
    m.run()
    assert m.peek(256) == TRUE
