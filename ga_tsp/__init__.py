"""
Parallel genetic-algorithm heuristic for the Euclidean TSP: roulette selection,
ordered crossover, swap mutation and half-population elitism, run concurrently
across many workers and problem instances.
"""

__all__ = [
    "cli",
    "data",
    "evaluation",
    "evolutionary",
    "island",
    "render",
    "report",
]
