import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import tsplib95

from .solvers.base import City, tour_length


logger = logging.getLogger(__name__)


@dataclass
class Problem:
    name: str
    cities: List[City]
    optimum: Optional[float] = None
    path: Optional[Path] = None


def generate_cities(count: int, width: int, height: int, rng: random.Random) -> List[City]:
    return [City(rng.randrange(width), rng.randrange(height)) for _ in range(count)]


def generate_problems(
    count: int, cities: int, width: int, height: int, rng: random.Random
) -> List[Problem]:
    return [
        Problem(name=f"random-{i}", cities=generate_cities(cities, width, height, rng))
        for i in range(count)
    ]


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(cities: List[City], nodes: List[int], path: Path) -> Optional[float]:
    index = {node: i for i, node in enumerate(nodes)}
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.load(candidate)
            order = [cities[index[n]] for n in tour_file.tours[0]]
        except Exception as exc:
            logger.warning("ignoring tour file %s: %s", candidate, exc)
            continue
        if len(order) != len(cities) or len(set(order)) != len(cities):
            logger.warning("ignoring tour file %s: not a permutation of %s", candidate, path.name)
            continue
        return tour_length(order)
    return None


def load_instance(path: Path) -> Problem:
    problem = tsplib95.load(path)
    if problem.edge_weight_type != "EUC_2D" or not problem.node_coords:
        raise ValueError(f"{path}: only EUC_2D instances with node coordinates are supported.")
    nodes = sorted(problem.node_coords)
    cities = [
        City(int(round(problem.node_coords[n][0])), int(round(problem.node_coords[n][1])))
        for n in nodes
    ]
    if not cities:
        raise ValueError(f"{path}: instance has no cities.")
    optimum = _load_optimum(cities, nodes, path)
    return Problem(name=problem.name or path.stem, cities=cities, optimum=optimum, path=path)


def load_problems(root: Path, max_problems: Optional[int] = None) -> List[Problem]:
    tsp_files = sorted(root.glob("*.tsp"))
    problems: List[Problem] = []
    for p in tsp_files:
        try:
            problems.append(load_instance(p))
        except Exception as exc:
            logger.warning("skipping %s: %s", p, exc)
            continue
        if max_problems is not None and len(problems) >= max_problems:
            break
    return problems
