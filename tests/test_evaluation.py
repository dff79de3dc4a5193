import pytest

from ga_tsp.evaluation import ProblemSummary, build_graph, reference_length, summarize
from ga_tsp.island import RunResult
from ga_tsp.solvers.base import City


def _result(problem, distance, error=None):
    return RunResult("Thread-1", 10, 10, 0.05, 0.7, problem, distance, 0.1, error=error)


def test_build_graph_is_complete(square):
    graph = build_graph(square)
    assert graph.number_of_nodes() == 4
    assert graph.number_of_edges() == 6
    assert graph[0][2]["weight"] == pytest.approx(200 ** 0.5)


def test_reference_length_on_square(square):
    assert reference_length(square) == pytest.approx(40.0)


def test_reference_length_small_inputs():
    assert reference_length([City(0, 0)]) == 0.0
    assert reference_length([City(0, 0), City(3, 4)]) == pytest.approx(10.0)


def test_summarize_groups_and_counts_failures():
    results = [_result(1, 50.0), _result(0, 42.0), _result(0, 40.0), _result(1, float("inf"), error="boom")]
    summaries = summarize(results, {0: 40.0})
    assert [s.problem_num for s in summaries] == [0, 1]
    first, second = summaries
    assert first.best == 40.0 and first.mean == 41.0 and first.failures == 0
    assert first.gap == pytest.approx(0.0)
    assert second.best == 50.0 and second.failures == 1 and second.runs == 2
    assert second.gap == float("inf")


def test_gap_against_reference():
    summary = ProblemSummary(problem_num=0, runs=1, failures=0, best=44.0, mean=44.0, reference=40.0)
    assert summary.gap == pytest.approx(0.1)
