"""Tests for program text parsing."""

from __future__ import annotations

import pytest

from intcode.errors import ProgramFormatError
from intcode.loader import format_program, load_program, parse_program


def test_parse_basic_program():
    assert parse_program("1,0,0,3,99\n") == [1, 0, 0, 3, 99]


def test_parse_tolerates_whitespace_and_trailing_comma():
    assert parse_program("  1, -2 ,3,\n") == [1, -2, 3]


def test_parse_reports_token_index():
    with pytest.raises(ProgramFormatError) as excinfo:
        parse_program("1,,2")
    assert excinfo.value.index == 1


def test_parse_rejects_non_numbers():
    with pytest.raises(ProgramFormatError) as excinfo:
        parse_program("1,2,x3")
    assert excinfo.value.index == 2
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("text", ["", "   \n", ","])
def test_parse_rejects_empty_text(text):
    with pytest.raises(ProgramFormatError):
        parse_program(text)


def test_load_program_from_file(program_file):
    path = program_file([1101, 100, -1, 4, 0])
    assert load_program(path) == [1101, 100, -1, 4, 0]
    assert load_program(str(path)) == [1101, 100, -1, 4, 0]


def test_format_program():
    assert format_program([3, 0, 4, 0, 99]) == "3,0,4,0,99"


@pytest.mark.parametrize("text", ["1_000,99", "١٢,99", "0x10,99", "1.5,99", "1 2,99"])
def test_parse_accepts_only_plain_decimal(text):
    with pytest.raises(ProgramFormatError) as excinfo:
        parse_program(text)
    assert excinfo.value.index == 0


def test_parse_accepts_explicit_sign():
    assert parse_program("+5,-0,99") == [5, 0, 99]
