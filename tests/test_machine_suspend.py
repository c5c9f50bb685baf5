import pytest

from intcode.errors import EmptyInputQueue, EmptyOutputBuffer
from intcode.machine import IntcodeMachine, StepResult


def test_run_until_input_stops_before_input():
    machine = IntcodeMachine([3, 0, 4, 0, 99])
    assert machine.run_until_input() is StepResult.NEEDS_INPUT
    assert machine.pc == 0
    assert machine.steps == 0
    assert machine.read(0) == 3
    assert not machine.is_halted()

    machine.add_input(11)
    assert machine.run_until_input() is StepResult.HALTED
    assert machine.get_output() == [11]


def test_input_supplied_later_is_used_by_same_instruction():
    machine = IntcodeMachine([1101, 2, 3, 10, 3, 11, 4, 11, 99])
    assert machine.run_until_input() is StepResult.NEEDS_INPUT
    assert machine.pc == 4
    machine.add_input(-8)
    machine.run()
    assert machine.read(10) == 5
    assert machine.get_output() == [-8]


def test_step_reports_needs_input_without_side_effects():
    machine = IntcodeMachine([3, 0, 99])
    before = machine.memory.snapshot()
    assert machine.step() is StepResult.NEEDS_INPUT
    assert machine.step() is StepResult.NEEDS_INPUT
    assert machine.memory.snapshot() == before
    assert machine.pc == 0


def test_run_until_input_on_halted_machine():
    machine = IntcodeMachine([99])
    machine.run()
    assert machine.run_until_input() is StepResult.HALTED


def test_interactive_loop_consumes_inputs_one_at_a_time():
    # Doubles each input until it reads 0.
    program = [3, 20, 1006, 20, 14, 1002, 20, 2, 21, 4, 21, 1105, 1, 0, 99]
    machine = IntcodeMachine(program)
    results = []
    for value in (1, 5, 21):
        assert machine.run_until_input() is StepResult.NEEDS_INPUT
        machine.add_input(value)
        results.append(machine.run_until_output())
    assert results == [2, 10, 42]
    machine.add_input(0)
    assert machine.run_until_input() is StepResult.HALTED


def test_run_until_output_returns_values_in_order():
    machine = IntcodeMachine([104, 1, 104, 2, 104, 3, 99])
    assert machine.run_until_output() == 1
    assert machine.pc == 2
    assert machine.run_until_output() == 2
    assert machine.run_until_output() == 3
    with pytest.raises(EmptyOutputBuffer):
        machine.run_until_output()


def test_run_until_output_returns_buffered_value_first():
    machine = IntcodeMachine([104, 1, 104, 2, 99])
    machine.run()
    assert machine.run_until_output() == 1
    assert machine.run_until_output() == 2


def test_run_until_output_halting_without_output():
    with pytest.raises(EmptyOutputBuffer):
        IntcodeMachine([1101, 1, 1, 0, 99]).run_until_output()


def test_run_until_output_blocked_on_input():
    with pytest.raises(EmptyInputQueue):
        IntcodeMachine([3, 0, 4, 0, 99]).run_until_output()


def test_two_machines_interleaved():
    echo = [3, 10, 4, 10, 1105, 1, 0]
    first = IntcodeMachine(echo, name="first")
    second = IntcodeMachine(echo, name="second")
    value = 1
    for _ in range(5):
        first.add_input(value)
        value = first.run_until_output() + 1
        second.add_input(value)
        value = second.run_until_output() * 2
    assert value == 94
    assert first.run_until_input() is StepResult.NEEDS_INPUT
    assert second.run_until_input() is StepResult.NEEDS_INPUT
