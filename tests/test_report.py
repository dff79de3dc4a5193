import csv

import pytest

from ga_tsp.island import RunResult
from ga_tsp.report import CSV_HEADERS, format_block, group_by_problem, write_reports


def _result(worker, problem, distance=123.456789, error=None):
    return RunResult(
        worker_name=worker,
        generations=100000,
        population_size=100,
        mutation_rate=0.05,
        crossover_rate=0.7,
        problem_num=problem,
        distance=distance,
        elapsed=1.5,
        error=error,
    )


def test_group_by_problem_keeps_arrival_order():
    results = [_result("Thread-2", 1), _result("Thread-1", 0), _result("Thread-1", 1), _result("Thread-2", 0)]
    ordered = group_by_problem(results)
    assert [(r.problem_num, r.worker_name) for r in ordered] == [
        (0, "Thread-1"),
        (0, "Thread-2"),
        (1, "Thread-2"),
        (1, "Thread-1"),
    ]


def test_format_block():
    assert format_block(_result("Thread-1", 3)) == (
        "Thread Name: Thread-1\n"
        "Genetic Parameters: numGenerations=100000 populationSize=100 "
        "mutationRate=0.050000 crossoverRate=0.700000\n"
        "Problem #3\n"
        "Distance: 123.456789\n"
        "Time taken: 1.500000s\n\n"
    )


def test_write_reports(tmp_path):
    results = [_result("Thread-1", 1), _result("Thread-2", 0, error="ZeroDivisionError: float division by zero", distance=float("inf"))]
    txt = tmp_path / "out" / "results.txt"
    csv_path = tmp_path / "out" / "results.csv"
    write_reports(results, txt, csv_path)

    text = txt.read_text()
    assert text.index("Problem #0") < text.index("Problem #1")
    assert text.count("Thread Name:") == 2

    with csv_path.open(newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_HEADERS
    assert rows[1] == ["Thread-2", "100000", "100", "0.050000", "0.700000", "0", "inf", "1.500000"]
    assert rows[2] == ["Thread-1", "100000", "100", "0.050000", "0.700000", "1", "123.456789", "1.500000"]


def test_write_reports_fails_on_unwritable_path(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(OSError):
        write_reports([_result("Thread-1", 0)], blocker / "results.txt", tmp_path / "results.csv")
