"""
intcode-dbg - interactive console for the Intcode machine.

Loads a program, steps it, feeds input, inspects memory and disassembles
around the program counter. Use ``intcode-dbg PROGRAM`` or
``python -m intcode_dbg`` to launch it.
"""

from __future__ import annotations

from .cli import main

__all__ = ["main"]
__version__ = "0.1.0"
