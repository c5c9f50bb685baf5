"""Shared Intcode machine constants."""

from __future__ import annotations

# Minimum number of memory cells; programs are zero-padded up to this size.
DEFAULT_CAPACITY = 10_000

MODE_POSITION = 0
MODE_IMMEDIATE = 1
MODE_RELATIVE = 2

OPCODE_MODULUS = 100
MODE_DIGITS_BASE = 100

ASCII_NEWLINE = 10
ASCII_MAX = 0x7F

ENV_LOG_LEVEL = "INTCODE_LOG"
ENV_DBG_LOG_LEVEL = "INTCODE_DBG_LOG"
ENV_CAPACITY = "INTCODE_CAPACITY"

__all__ = [
    "DEFAULT_CAPACITY",
    "MODE_POSITION",
    "MODE_IMMEDIATE",
    "MODE_RELATIVE",
    "OPCODE_MODULUS",
    "MODE_DIGITS_BASE",
    "ASCII_NEWLINE",
    "ASCII_MAX",
    "ENV_LOG_LEVEL",
    "ENV_DBG_LOG_LEVEL",
    "ENV_CAPACITY",
]
