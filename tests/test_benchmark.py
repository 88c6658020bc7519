from benchmark_generation import format_seconds, run_benchmark, summarize
from dungeon_config import DungeonConfig
from metrics import GenerationMetrics


def one_decimal(value):
    return f"{value:.1f}"


def test_summarize_reports_spread_and_deciles():
    line = summarize("Rooms", [1.0, 2.0, 3.0], one_decimal)

    assert line == "Rooms: mean 2.0, min 1.0, max 3.0, p10 1.2, p50 2.0, p90 2.8"


def test_summarize_single_and_empty_series():
    assert summarize("Doors", [4.0], one_decimal) == "Doors: mean 4.0, min 4.0, max 4.0"
    assert summarize("Doors", [], one_decimal) == "Doors: (no data)"


def test_format_seconds_switches_units():
    assert format_seconds(2.5) == "2.500s"
    assert format_seconds(0.0125) == "12.5ms"


def test_run_benchmark_is_reproducible_and_records_phases():
    config = DungeonConfig(rows=21, cols=21)
    metrics = GenerationMetrics()

    first = run_benchmark(3, 11, config, metrics)
    second = run_benchmark(3, 11, config, GenerationMetrics())

    assert [run.seed for run in first] == [run.seed for run in second]
    assert [run.total_rooms for run in first] == [run.total_rooms for run in second]
    assert metrics.snapshot()["room_placement"]["invocations"] == 3
