"""Helpers for collecting instrumentation data during level generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class PhaseMetrics:
    """Aggregated metrics for one pipeline phase across invocations."""

    name: str
    invocations: int = 0
    total_time: float = 0.0
    total_rooms_added: int = 0
    total_doors_added: int = 0

    def record(self, duration: float, rooms_delta: int, doors_delta: int) -> None:
        self.invocations += 1
        self.total_time += duration
        self.total_rooms_added += rooms_delta
        self.total_doors_added += doors_delta

    def to_dict(self) -> Dict[str, float | int]:
        average_time = self.total_time / self.invocations if self.invocations else 0.0
        return {
            "invocations": self.invocations,
            "total_time_ms": self.total_time * 1000.0,
            "average_time_ms": average_time * 1000.0,
            "total_rooms_added": self.total_rooms_added,
            "total_doors_added": self.total_doors_added,
        }


@dataclass
class GenerationMetrics:
    """Container for phase metrics recorded during a generation run."""

    phases: Dict[str, PhaseMetrics] = field(default_factory=dict)

    def record_phase(
        self,
        name: str,
        duration: float,
        rooms_delta: int,
        doors_delta: int,
    ) -> None:
        metrics = self.phases.get(name)
        if metrics is None:
            metrics = PhaseMetrics(name=name)
            self.phases[name] = metrics
        metrics.record(duration, rooms_delta, doors_delta)

    def total_time(self) -> float:
        return sum(metrics.total_time for metrics in self.phases.values())

    def snapshot(self) -> Dict[str, Dict[str, float | int]]:
        return {name: metrics.to_dict() for name, metrics in self.phases.items()}
