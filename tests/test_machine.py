## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io
from pathlib import Path

import pytest

from bfvm.machine import Machine, MAX_ARITHMETIC_OPERAND
from bfvm.compiler import compile_source
from bfvm.errors import BfValueError, BfTapeError, BfInputError
from bfvm.types import OpCode, Instruction, DEFAULT_TAPE_SIZE


def make_machine(source: str, stdin: bytes = b"", tape_size: int = DEFAULT_TAPE_SIZE):
    return Machine(compile_source(source), tape_size=tape_size, stdin=io.BytesIO(stdin), stdout=io.BytesIO())


class FailingReader:
    def read(self, size=-1):
        raise OSError("device not ready")


def test_new_machine_state():
    vm = make_machine("+")
    assert (vm.pc, vm.cursor, vm.tape_size) == (0, 0, DEFAULT_TAPE_SIZE)
    assert not any(vm.tape)


def test_add_wraps_around():
    vm = make_machine("+")
    vm.tape[0] = 250
    vm.add(10)
    assert vm.cell == 4


def test_sub_wraps_around():
    vm = make_machine("-")
    vm.tape[0] = 2
    vm.sub(5)
    assert vm.cell == 253


def test_decrement_from_zero_wraps_during_run():
    vm = make_machine("-").run()
    assert vm.cell == 255


def test_shift_left_saturates_at_zero():
    vm = make_machine(">>><<<<<<<<+").run()
    assert vm.cursor == 0 and vm.tape[0] == 1


def test_shift_right_past_tape_is_fatal():
    vm = make_machine(">>", tape_size=1)
    with pytest.raises(BfTapeError) as info:
        vm.run()
    assert (info.value.tape_size, info.value.overflow) == (1, 1)
    assert str(info.value) == "memory overflowed: 1 cells => 1 cells"
    assert vm.cursor == 0


def test_shift_right_onto_last_cell_is_allowed():
    vm = make_machine(">>>>+", tape_size=5).run()
    assert vm.cursor == 4 and vm.tape[4] == 1
    with pytest.raises(BfTapeError) as info:
        make_machine(">>>>>", tape_size=5).run()
    assert info.value.overflow == 0


def test_tape_size_must_be_positive():
    with pytest.raises(BfValueError):
        Machine((), tape_size=0)


def test_operand_below_limit_is_accepted():
    vm = make_machine("+" * (MAX_ARITHMETIC_OPERAND - 1)).run()
    assert vm.cell == 254


@pytest.mark.parametrize("symbol", ["+", "-"])
def test_operand_at_limit_is_rejected_at_construction(symbol):
    # Known boundary quirk: a run of 255 identical symbols would wrap fine at
    # runtime, but validation rejects it before anything executes.
    stdout = io.BytesIO()
    with pytest.raises(BfValueError, match="operand out of range"):
        Machine(compile_source(symbol * 255 + "."), stdout=stdout)
    assert stdout.getvalue() == b""


def test_validation_only_applies_to_add_and_sub():
    program = (Instruction(OpCode.SHIFT_RIGHT, 300), Instruction(OpCode.OUTPUT, 1000))
    Machine(program, tape_size=400)


def test_output_repeats_current_cell():
    vm = make_machine("+" * 65 + "...>" + "+" * 10 + ".")
    vm.run()
    assert vm.stdout.getvalue() == b"AAA\n"


def test_input_reads_one_byte_per_folded_instruction():
    vm = make_machine(",,,.>,.", stdin=b"xyz")
    assert vm.program[0] == Instruction(OpCode.INPUT, 3)
    vm.run()
    assert vm.stdout.getvalue() == b"xy"
    assert vm.stdin.read() == b"z"


def test_input_end_of_stream_is_fatal():
    vm = make_machine(",.,.", stdin=b"a")
    with pytest.raises(BfInputError, match="end of input"):
        vm.run()
    assert vm.stdout.getvalue() == b"a"


def test_input_read_failure_is_wrapped():
    vm = Machine(compile_source(","), stdin=FailingReader(), stdout=io.BytesIO())
    with pytest.raises(BfInputError) as info:
        vm.run()
    assert isinstance(info.value.__cause__, OSError)


def test_loop_skipped_when_cell_is_zero():
    vm = make_machine("[+++.]>+").run()
    assert vm.stdout.getvalue() == b""
    assert bytes(vm.tape[:2]) == b"\x00\x01"


def test_loop_moves_value():
    vm = make_machine("+++++[->++<]").run()
    assert bytes(vm.tape[:2]) == bytes([0, 10])
    assert vm.pc == len(vm.program)


def test_jump_lands_on_bracket_then_advances():
    program = (Instruction(OpCode.JUMP_ZERO, 2), Instruction(OpCode.ADD, 1), Instruction(OpCode.JUMP_NOT_ZERO, 0),
               Instruction(OpCode.ADD, 7))
    vm = Machine(program, stdout=io.BytesIO()).run()
    assert vm.cell == 7


def test_stats_count_steps():
    stats = {}
    make_machine("++[-]").run(stats=stats)
    assert stats["steps"] == 6


def test_verbose_trace_goes_to_stderr(capsys):
    make_machine("+>").run(verbosity=1)
    err = capsys.readouterr().err
    assert "Add(1)" in err and "ShiftRight(1)" in err


def test_hello_world():
    vm = Machine(compile_source((Path(__file__).parent / "hello.bf").read_bytes()), stdout=io.BytesIO())
    vm.run()
    assert vm.stdout.getvalue() == b"Hello World!\n"


def test_text_input_stream_is_rejected():
    vm = Machine(compile_source(",."), stdin=io.StringIO("a"), stdout=io.BytesIO())
    with pytest.raises(BfInputError, match="must be binary"):
        vm.run()
    assert vm.cell == 0
