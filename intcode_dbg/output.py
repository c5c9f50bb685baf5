"""Output helpers for intcode-dbg."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from .context import DebuggerContext


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: DebuggerContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "ok"}
        if data is not None:
            payload["result"] = data
        else:
            payload["message"] = message
        print(_json_dump(payload))
    else:
        print(message)


def emit_error(ctx: DebuggerContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error message respecting JSON mode."""
    payload: Dict[str, Any] = {"status": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    if ctx.json_output:
        print(_json_dump(payload))
    else:
        print(f"error: {message}")


def render_state(state: Mapping[str, Any]) -> None:
    """Print a machine snapshot as produced by ``IntcodeMachine.snapshot_state``."""
    print(f"  state        : {state.get('state')}")
    print(f"  pc           : {state.get('pc')}")
    print(f"  relative base: {state.get('relative_base')}")
    print(f"  steps        : {state.get('steps')}")
    print(f"  capacity     : {state.get('capacity')}")
    print(f"  input queue  : {_format_queue(state.get('pending_input'))}")
    print(f"  output buffer: {_format_queue(state.get('pending_output'))}")
    next_text = state.get("next")
    if next_text:
        print(f"  next         : {next_text}")


def _format_queue(values: Any, *, limit: int = 16) -> str:
    if not values:
        return "(empty)"
    items = list(values)
    shown = ", ".join(str(value) for value in items[:limit])
    if len(items) > limit:
        shown += f", ... ({len(items)} total)"
    return f"[{shown}]"


__all__ = ["emit_result", "emit_error", "render_state"]
