#!/usr/bin/env python3

# This file performs multiple runs of dungeon generation, collecting and reporting metrics.
# Used for testing both performance of the generator and quality of resulting dungeons.

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
import random
import statistics
import time
from typing import Callable, List

from dungeon_analysis import analyze_dungeon
from dungeon_config import CorridorLayout, DungeonConfig, RoomLayout
from dungeon_generator import DungeonGenerator
from metrics import GenerationMetrics


@dataclass
class GenerationRunResult:
    seed: int
    duration: float
    total_rooms: int
    total_doors: int
    total_stairs: int
    open_cells: int
    largest_component_fraction: float
    cycle_count: int
    graph_diameter: int


REPORT_DECILES = (1, 5, 9)


def format_seconds(value: float) -> str:
    if value >= 1.0:
        return f"{value:.3f}s"
    return f"{value * 1000:.1f}ms"


def summarize(name: str, values: List[float], fmt: Callable[[float], str]) -> str:
    """One report line: mean, spread and the p10/p50/p90 deciles of ``values``."""
    if not values:
        return f"{name}: (no data)"
    parts = [
        f"mean {fmt(statistics.mean(values))}",
        f"min {fmt(min(values))}",
        f"max {fmt(max(values))}",
    ]
    if len(values) > 1:
        deciles = statistics.quantiles(values, n=10, method="inclusive")
        parts.extend(f"p{d * 10} {fmt(deciles[d - 1])}" for d in REPORT_DECILES)
    return f"{name}: " + ", ".join(parts)


def run_single_generation(
    seed: int, base_config: DungeonConfig, metrics: GenerationMetrics
) -> GenerationRunResult:
    """Run one dungeon generation with the provided seed and collect metrics."""
    config = replace(base_config, random_seed=seed, collect_metrics=True)
    generator = DungeonGenerator(config, metrics=metrics)

    start = time.perf_counter()
    snapshot = generator.generate()
    end = time.perf_counter()

    stats = analyze_dungeon(snapshot)
    return GenerationRunResult(
        seed=seed,
        duration=end - start,
        total_rooms=stats.room_count,
        total_doors=stats.door_count,
        total_stairs=stats.stair_count,
        open_cells=stats.open_cells,
        largest_component_fraction=stats.largest_component_fraction,
        cycle_count=stats.cycle_count,
        graph_diameter=stats.diameter,
    )


def run_benchmark(
    num_runs: int, seed: int | None, base_config: DungeonConfig, metrics: GenerationMetrics
) -> List[GenerationRunResult]:
    """Run the generator multiple times and collect run-level metrics."""
    rng = random.Random(seed)

    results: List[GenerationRunResult] = []
    for _ in range(num_runs):
        run_seed = rng.randint(0, 1_000_000)
        results.append(run_single_generation(run_seed, base_config, metrics))
    return results


def main() -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Run the dungeon generator multiple times and report timing and quality statistics."
        )
    )
    parser.add_argument(
        "-n",
        "--runs",
        type=int,
        default=20,
        help="Number of dungeon generations to execute (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional seed for the benchmark harness RNG; keeps run seeds reproducible",
    )
    parser.add_argument("--rows", type=int, default=79, help="Requested grid rows")
    parser.add_argument("--cols", type=int, default=79, help="Requested grid columns")
    parser.add_argument(
        "--room-layout",
        choices=[layout.name.lower() for layout in RoomLayout],
        default="packed",
    )
    parser.add_argument(
        "--corridor-layout",
        choices=[layout.name.lower() for layout in CorridorLayout],
        default="bent",
    )
    parser.add_argument(
        "--remove-deadends",
        type=int,
        default=20,
        help="Percent of dead ends to collapse (0-100)",
    )
    args = parser.parse_args()

    if args.runs <= 0:
        raise SystemExit("Number of runs must be a positive integer")

    try:
        base_config = DungeonConfig(
            rows=args.rows,
            cols=args.cols,
            room_layout=args.room_layout,
            corridor_layout=args.corridor_layout,
            remove_deadends=args.remove_deadends,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    metrics = GenerationMetrics()
    results = run_benchmark(args.runs, args.seed, base_config, metrics)

    durations = [result.duration for result in results]
    worst_duration = max(durations)
    worst_seed = results[durations.index(worst_duration)].seed

    for idx, result in enumerate(results, start=1):
        print(
            "Run {idx:02d}: {time} (seed {seed}) | rooms {rooms}, doors {doors}, stairs {stairs}"
            " | largest component {largest:.1%}, cycles {cycles}".format(
                idx=idx,
                time=format_seconds(result.duration),
                seed=result.seed,
                rooms=result.total_rooms,
                doors=result.total_doors,
                stairs=result.total_stairs,
                largest=result.largest_component_fraction,
                cycles=result.cycle_count,
            )
        )

    print()
    print(f"Config runs: {args.runs}")
    print(f"Worst-case generation time: {format_seconds(worst_duration)} (seed {worst_seed})")

    def count(value: float) -> str:
        return f"{value:.0f}"

    print()
    print(summarize("Generation time", durations, format_seconds))
    print(summarize("Rooms placed", [float(r.total_rooms) for r in results], count))
    print(summarize("Doors kept", [float(r.total_doors) for r in results], count))
    print(summarize("Stairs placed", [float(r.total_stairs) for r in results], count))
    print(
        summarize(
            "Largest component coverage",
            [r.largest_component_fraction for r in results],
            lambda value: f"{value:.1%}",
        )
    )
    print(summarize("Cycle count", [float(r.cycle_count) for r in results], count))
    print(summarize("Graph diameter", [float(r.graph_diameter) for r in results], count))

    phase_totals = metrics.snapshot()
    if phase_totals:
        print()
        print("Phase performance summary:")
        for name, totals in sorted(
            phase_totals.items(), key=lambda item: item[1]["total_time"], reverse=True
        ):
            print(
                "  {name}: invocations={invocations}, total_time={total_time},"
                " avg_time={avg_time}".format(
                    name=name,
                    invocations=int(totals["invocations"]),
                    total_time=format_seconds(totals["total_time"]),
                    avg_time=format_seconds(totals["average_time"]),
                )
            )


if __name__ == "__main__":
    main()
