"""Entry point for the intcode-dbg debugger."""

from __future__ import annotations

from intcode_dbg import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
