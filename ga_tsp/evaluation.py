import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import networkx as nx

from .solvers.base import City, distance, tour_length


@dataclass
class ProblemSummary:
    problem_num: int
    runs: int
    failures: int
    best: float
    mean: float
    reference: Optional[float]

    @property
    def gap(self) -> float:
        if self.reference is None or math.isclose(self.reference, 0.0):
            return float("inf")
        return (self.best - self.reference) / self.reference


def build_graph(cities: Sequence[City]) -> nx.Graph:
    graph = nx.complete_graph(len(cities))
    for a, b in graph.edges():
        graph[a][b]["weight"] = distance(cities[a], cities[b])
    return graph


def reference_length(cities: Sequence[City]) -> float:
    """Length of networkx's Christofides tour, used as a yardstick for GA results."""
    if len(cities) < 3:
        return tour_length(cities)
    graph = build_graph(cities)
    cycle = nx.approximation.christofides(graph, weight="weight")
    # networkx closes the cycle by repeating the start node.
    return tour_length([cities[n] for n in cycle[:-1]])


def summarize(results, references: Dict[int, Optional[float]] = None) -> List[ProblemSummary]:
    references = references or {}
    grouped: Dict[int, list] = {}
    for result in results:
        grouped.setdefault(result.problem_num, []).append(result)
    summaries = []
    for problem_num in sorted(grouped):
        group = grouped[problem_num]
        ok = [r.distance for r in group if r.error is None]
        summaries.append(
            ProblemSummary(
                problem_num=problem_num,
                runs=len(group),
                failures=len(group) - len(ok),
                best=min(ok) if ok else float("inf"),
                mean=sum(ok) / len(ok) if ok else float("inf"),
                reference=references.get(problem_num),
            )
        )
    return summaries
