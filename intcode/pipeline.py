"""Amplifier pipelines: several machines chained output-to-input.

Each stage runs the same program and is seeded with its phase setting as the
first input. A pass feeds a signal into the first stage, runs every stage to
its next suspension point and forwards whatever it produced to the next
stage. With ``feedback`` enabled the last stage's output loops back into the
first stage and passes repeat until every stage has halted.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Any, Deque, Dict, Iterable, List, Optional, Sequence

from .constants import DEFAULT_CAPACITY
from .errors import EmptyOutputBuffer, PipelineError
from .machine import IntcodeMachine, StepResult

LOGGER = logging.getLogger("intcode.pipeline")


class Pipeline:
    def __init__(
        self,
        program: Sequence[int],
        phases: Iterable[int],
        *,
        feedback: bool = False,
        capacity: int = DEFAULT_CAPACITY,
        trace: bool = False,
    ) -> None:
        self.phases = [int(phase) for phase in phases]
        if not self.phases:
            raise ValueError("pipeline needs at least one phase setting")
        self.feedback = feedback
        self.stages: List[IntcodeMachine] = []
        for index, phase in enumerate(self.phases):
            machine = IntcodeMachine(program, capacity=capacity, trace=trace, name=f"stage{index}")
            machine.add_input(phase)
            self.stages.append(machine)
        self.passes = 0
        self.events: Deque[Dict[str, Any]] = deque(maxlen=256)
        self.counters: Dict[str, Dict[str, int]] = defaultdict(dict)

    def _record_event(self, event: str, stage: Optional[IntcodeMachine], **fields: Any) -> None:
        entry: Dict[str, Any] = {"event": event, "pass": self.passes}
        if stage is not None:
            entry["stage"] = stage.name
        for key, value in fields.items():
            if value is not None:
                entry[key] = value
        self.events.append(entry)
        if stage is not None and stage.name:
            counters = self.counters.setdefault(stage.name, {})
            counters[event] = counters.get(event, 0) + 1

    def trace_snapshot(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        trace = list(self.events)
        if limit is not None:
            return trace[-int(limit):]
        return trace

    def stats(self) -> Dict[str, Dict[str, int]]:
        return {name: dict(counts) for name, counts in self.counters.items()}

    def is_halted(self) -> bool:
        """True when every stage halted; raises if only some of them did."""
        halted = [stage.is_halted() for stage in self.stages]
        if all(halted):
            return True
        if any(halted):
            names = [stage.name for stage, done in zip(self.stages, halted) if done]
            raise PipelineError(f"stages {names} halted while others are still running")
        return False

    def run_pass(self, signals: Sequence[int]) -> List[int]:
        """Push ``signals`` through every stage once and return the final stage's output."""
        self.passes += 1
        values = list(signals)
        for stage in self.stages:
            stage.extend_input(values)
            result = stage.run_until_input()
            values = stage.drain_output()
            self._record_event(
                "halt" if result is StepResult.HALTED else "wait",
                stage,
                pc=stage.pc,
                outputs=len(values),
            )
            if not values:
                raise EmptyOutputBuffer(f"{stage.name} produced no output", pc=stage.pc)
        LOGGER.debug("pass %d produced %s", self.passes, values)
        return values

    def run(self, signal: int = 0) -> int:
        """Run the pipeline and return the last signal produced by the final stage."""
        values = self.run_pass([signal])
        if self.feedback:
            while not self.is_halted():
                values = self.run_pass(values)
        return values[-1]


def run_pipeline(
    program: Sequence[int],
    phases: Iterable[int],
    *,
    signal: int = 0,
    feedback: bool = False,
    capacity: int = DEFAULT_CAPACITY,
) -> int:
    return Pipeline(program, phases, feedback=feedback, capacity=capacity).run(signal)


__all__ = ["Pipeline", "run_pipeline"]
