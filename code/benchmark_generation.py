#!/usr/bin/env python3

# Runs many seeded level generations and reports timing and layout-quality statistics.
# Used to check that generation stays fast and that door graphs stay connected.

from __future__ import annotations

import argparse
import json
import logging
import math
import random
import statistics
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import networkx as nx

from dungeon_generator import BaseLevelGenerator, DungeonGenerator
from level_config import ConnectivityPolicy, DungeonParams, TownParams
from town_generator import TownGenerator

PERCENTILES = [5.0, 25.0, 50.0, 75.0, 95.0, 99.0]


@dataclass
class LevelRunResult:
    seed: int
    duration: float
    room_count: int
    door_tiles: int
    fallback_rooms: int
    cycle_count: int
    largest_component_fraction: float
    reachable_from_center_fraction: float
    graph_diameter: int
    template_counts: Counter = field(default_factory=Counter)
    phase_metrics: Dict[str, Dict[str, float | int]] = field(default_factory=dict)


def gini_coefficient(counts: List[int]) -> float:
    """Gini coefficient of non-negative counts; 0 means perfectly even usage."""
    data = sorted(value for value in counts if value > 0)
    total = sum(data)
    if not data or total <= 0:
        return 0.0
    n = len(data)
    weighted = sum(rank * value for rank, value in enumerate(data, start=1))
    return (2.0 * weighted) / (n * total) - (n + 1) / n


def percentile(values: List[float], pct: float) -> float:
    if not values:
        return float("nan")
    ordered = sorted(values)
    rank = (len(ordered) - 1) * min(max(pct, 0.0), 100.0) / 100.0
    lower = math.floor(rank)
    upper = math.ceil(rank)
    return ordered[lower] + (ordered[upper] - ordered[lower]) * (rank - lower)


def json_safe_number(value: float | int | None) -> float | int | None:
    if value is None or isinstance(value, int):
        return value
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def door_graph_stats(generator: BaseLevelGenerator) -> Dict[str, float]:
    """Cycle, component and diameter statistics of the room/door graph."""
    graph = generator.door_graph if generator.door_graph is not None else nx.Graph()
    room_count = graph.number_of_nodes()
    stats = {
        "cycle_count": 0,
        "largest_component_fraction": 0.0,
        "reachable_from_center_fraction": 0.0,
        "graph_diameter": 0,
    }
    if room_count == 0:
        return stats

    stats["cycle_count"] = len(nx.cycle_basis(graph))
    largest = max(nx.connected_components(graph), key=len)
    stats["largest_component_fraction"] = len(largest) / room_count
    central = generator.layout.central_room()
    if central is not None:
        reachable = nx.node_connected_component(graph, central.index)
        stats["reachable_from_center_fraction"] = len(reachable) / room_count
    if len(largest) >= 2:
        stats["graph_diameter"] = int(nx.diameter(graph.subgraph(largest)))
    return stats


def build_generator(args: argparse.Namespace, seed: int) -> BaseLevelGenerator:
    if args.level_type == "town":
        params = TownParams(
            grid_size=args.grid,
            room_width=args.room_size or 30,
            room_height=args.room_size or 30,
            collect_metrics=True,
        )
        return TownGenerator(params, seed)
    params = DungeonParams(
        rooms_wide=args.grid,
        rooms_high=args.grid,
        room_width=args.room_size or 20,
        room_height=args.room_size or 20,
        central_room_multiplier=min(args.multiplier, args.grid),
        connectivity_policy=ConnectivityPolicy(args.policy),
        collect_metrics=True,
    )
    return DungeonGenerator(params, seed)


def run_single_generation(args: argparse.Namespace, seed: int) -> LevelRunResult:
    """Generate one level with ``seed`` and collect its statistics."""
    generator = build_generator(args, seed)
    generator.generate()

    stats = door_graph_stats(generator)
    phase_metrics = generator.metrics.snapshot() if generator.metrics else {}
    duration = generator.metrics.total_time() if generator.metrics else 0.0
    return LevelRunResult(
        seed=seed,
        duration=duration,
        room_count=len(generator.rooms),
        door_tiles=generator.connectivity.doors_opened if generator.connectivity else 0,
        fallback_rooms=generator.engine.fallback_rooms,
        cycle_count=int(stats["cycle_count"]),
        largest_component_fraction=stats["largest_component_fraction"],
        reachable_from_center_fraction=stats["reachable_from_center_fraction"],
        graph_diameter=int(stats["graph_diameter"]),
        template_counts=Counter(room.template_name or "<blank>" for room in generator.rooms),
        phase_metrics=phase_metrics,
    )


@dataclass
class MetricDefinition:
    key: str
    name: str
    values: List[float]
    value_formatter: Callable[[float], str] = lambda value: f"{value:.3f}"

    def summary(self) -> Dict[str, Any]:
        values = self.values
        if not values:
            return {"count": 0}
        return {
            "count": len(values),
            "mean": json_safe_number(statistics.mean(values)),
            "median": json_safe_number(statistics.median(values)),
            "min": json_safe_number(min(values)),
            "max": json_safe_number(max(values)),
            "percentiles": {
                f"p{pct:g}": json_safe_number(percentile(values, pct)) for pct in PERCENTILES
            },
        }

    def report(self) -> None:
        print(self.name + ":")
        if not self.values:
            print("  (no data)")
            return
        fmt = self.value_formatter
        print(
            f"  mean {fmt(statistics.mean(self.values))}, median {fmt(statistics.median(self.values))},"
            f" min {fmt(min(self.values))}, max {fmt(max(self.values))}"
        )
        parts = [f"p{pct:g}={fmt(percentile(self.values, pct))}" for pct in PERCENTILES]
        print("  Percentiles: " + ", ".join(parts))


def format_ms(value: float) -> str:
    return f"{value * 1000:.2f}ms"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the level generator repeatedly and report timing and graph statistics."
    )
    parser.add_argument("-n", "--runs", type=int, default=20, help="Number of generations (default: 20)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the harness RNG that draws run seeds")
    parser.add_argument("--level-type", choices=("dungeon", "town"), default="dungeon")
    parser.add_argument("--grid", type=int, default=5, help="Rooms per side (default: 5)")
    parser.add_argument("--room-size", type=int, default=None, help="Room width and height in tiles")
    parser.add_argument("--multiplier", type=int, default=2, help="Central room multiplier for dungeons")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ConnectivityPolicy],
        default=ConnectivityPolicy.FULL_CONNECT.value,
        help="Door policy for dungeons",
    )
    parser.add_argument("--json", dest="json_path", default=None, help="Write results as JSON to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.runs <= 0:
        parser.error("Number of runs must be a positive integer")
    if args.grid <= 0:
        parser.error("Grid size must be positive")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed)
    results = [run_single_generation(args, rng.randint(0, 1_000_000)) for _ in range(args.runs)]

    for idx, result in enumerate(results, start=1):
        print(
            f"Run {idx:02d}: {format_ms(result.duration)} (seed {result.seed}) | rooms {result.room_count}"
            f" | doors {result.door_tiles} | fallbacks {result.fallback_rooms}"
            f" | cycles {result.cycle_count} | reachable {result.reachable_from_center_fraction:.0%}"
        )

    template_totals: Counter = Counter()
    for result in results:
        template_totals.update(result.template_counts)
    diversity = [1.0 - gini_coefficient(list(result.template_counts.values())) for result in results]

    metrics = [
        MetricDefinition("generation_time", "Generation time", [r.duration for r in results], format_ms),
        MetricDefinition("rooms", "Rooms placed", [float(r.room_count) for r in results], lambda v: f"{v:.0f}"),
        MetricDefinition("doors", "Door tiles", [float(r.door_tiles) for r in results], lambda v: f"{v:.0f}"),
        MetricDefinition("cycles", "Cycle count", [float(r.cycle_count) for r in results], lambda v: f"{v:.1f}"),
        MetricDefinition(
            "largest_component_fraction",
            "Largest component coverage",
            [r.largest_component_fraction for r in results],
            lambda v: f"{v:.1%}",
        ),
        MetricDefinition(
            "reachable_from_center_fraction",
            "Reachable from central room",
            [r.reachable_from_center_fraction for r in results],
            lambda v: f"{v:.1%}",
        ),
        MetricDefinition("graph_diameter", "Graph diameter", [float(r.graph_diameter) for r in results]),
        MetricDefinition("diversity", "Template diversity (1 - Gini)", diversity),
    ]
    for metric in metrics:
        print()
        metric.report()

    total_rooms = sum(template_totals.values())
    if total_rooms:
        print()
        print("Room template distribution across runs:")
        for name, count in template_totals.most_common():
            print(f"  {name}: {count} rooms ({count / total_rooms:.1%})")

    if args.json_path:
        data = {
            "parameters": {
                "runs": args.runs,
                "seed": args.seed,
                "level_type": args.level_type,
                "grid": args.grid,
                "room_size": args.room_size,
                "policy": args.policy,
            },
            "aggregated_results": {metric.key: metric.summary() for metric in metrics},
            "results": [
                {
                    "seed": r.seed,
                    "duration_seconds": r.duration,
                    "room_count": r.room_count,
                    "door_tiles": r.door_tiles,
                    "fallback_rooms": r.fallback_rooms,
                    "cycle_count": r.cycle_count,
                    "largest_component_fraction": r.largest_component_fraction,
                    "reachable_from_center_fraction": r.reachable_from_center_fraction,
                    "graph_diameter": r.graph_diameter,
                    "phase_metrics": r.phase_metrics,
                }
                for r in results
            ],
        }
        with open(args.json_path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
        print(f"\nWrote benchmark results to {args.json_path}")


if __name__ == "__main__":
    main()
