import concurrent.futures
import logging
import multiprocessing
import queue
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .evolutionary import EvolutionConfig, EvolutionarySearch
from .data import Problem
from .solvers.base import City


logger = logging.getLogger(__name__)

EXECUTORS = ("thread", "process")


@dataclass
class PoolConfig(EvolutionConfig):
    workers: int = 12
    problems: int = 6
    cities: int = 32
    width: int = 256
    height: int = 256
    node_size: int = 10
    executor: str = "thread"
    output_dir: str = "."
    images_dir: str = "images"
    results_txt: str = "results.txt"
    results_csv: str = "results.csv"

    def validate(self) -> None:
        super().validate()
        for name in ("workers", "problems", "cities", "width", "height"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}.")
        if self.node_size < 0:
            raise ValueError(f"node_size must not be negative, got {self.node_size}.")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}.")

    def evolution(self) -> EvolutionConfig:
        return EvolutionConfig(
            population_size=self.population_size,
            generations=self.generations,
            mutation_rate=self.mutation_rate,
            crossover_rate=self.crossover_rate,
            random_seed=self.random_seed,
            patience=self.patience,
            normalize_initial_fitness=self.normalize_initial_fitness,
            log_interval=self.log_interval,
        )


@dataclass(frozen=True)
class RunResult:
    worker_name: str
    generations: int
    population_size: int
    mutation_rate: float
    crossover_rate: float
    problem_num: int
    distance: float
    elapsed: float
    tour: List[City] = field(default_factory=list, compare=False, repr=False)
    generations_run: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def worker_name(index: int) -> str:
    return f"Thread-{index + 1}"


def worker_rng(cfg: EvolutionConfig, index: int) -> random.Random:
    if cfg.random_seed is None:
        return random.Random()
    # Offset by one so no worker replays the stream that generated the cities.
    return random.Random(cfg.random_seed + 1 + index)


def run_problem(
    cfg: EvolutionConfig, cities: Sequence[City], rng: random.Random, name: str, problem_num: int
) -> RunResult:
    """Run the GA once on ``cities``; failures come back as a result with ``error`` set."""
    start = time.perf_counter()
    try:
        search = EvolutionarySearch(cfg, cities, rng=rng)
        best = search.run()
    except Exception as exc:
        logger.exception("%s failed on problem %d", name, problem_num)
        return RunResult(
            worker_name=name,
            generations=cfg.generations,
            population_size=cfg.population_size,
            mutation_rate=cfg.mutation_rate,
            crossover_rate=cfg.crossover_rate,
            problem_num=problem_num,
            distance=float("inf"),
            elapsed=time.perf_counter() - start,
            error=f"{type(exc).__name__}: {exc}",
        )
    elapsed = time.perf_counter() - start
    logger.info(
        "%s problem %d: distance=%.6f time=%.3fs", name, problem_num, best.distance, elapsed
    )
    return RunResult(
        worker_name=name,
        generations=cfg.generations,
        population_size=cfg.population_size,
        mutation_rate=cfg.mutation_rate,
        crossover_rate=cfg.crossover_rate,
        problem_num=problem_num,
        distance=best.distance,
        elapsed=elapsed,
        tour=list(best.cities),
        generations_run=search.generation,
    )


def run_worker(cfg: EvolutionConfig, problems: Sequence[Problem], index: int, results) -> int:
    """Solve every problem in order and put each result on ``results``."""
    rng = worker_rng(cfg, index)
    name = worker_name(index)
    for problem_num, problem in enumerate(problems):
        results.put(run_problem(cfg, problem.cities, rng, name, problem_num))
    return len(problems)


class WorkerPool:
    def __init__(self, cfg: PoolConfig, problems: Sequence[Problem]):
        cfg.validate()
        if not problems:
            raise ValueError("WorkerPool needs at least one problem.")
        for problem in problems:
            if not problem.cities:
                raise ValueError(f"Problem {problem.name!r} has no cities.")
        self.cfg = cfg
        self.problems = list(problems)

    @property
    def expected(self) -> int:
        return self.cfg.workers * len(self.problems)

    def run(self) -> List[RunResult]:
        """Run every (worker, problem) pair and return results in completion order."""
        evo_cfg = self.cfg.evolution()
        if self.cfg.executor == "process":
            with multiprocessing.Manager() as manager:
                results = manager.Queue()
                with concurrent.futures.ProcessPoolExecutor(max_workers=self.cfg.workers) as ex:
                    return self._collect(ex, evo_cfg, results)
        results = queue.Queue()
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.cfg.workers) as ex:
            return self._collect(ex, evo_cfg, results)

    def _collect(self, ex, evo_cfg: EvolutionConfig, results) -> List[RunResult]:
        futures = [
            ex.submit(run_worker, evo_cfg, self.problems, i, results)
            for i in range(self.cfg.workers)
        ]
        logger.info(
            "started %d workers on %d problems (%s executor)",
            self.cfg.workers,
            len(self.problems),
            self.cfg.executor,
        )
        collected: List[RunResult] = []
        while len(collected) < self.expected:
            try:
                collected.append(results.get(timeout=0.5))
            except queue.Empty:
                # A worker that died outside run isolation would never report.
                for fut in futures:
                    if fut.done() and fut.exception() is not None:
                        raise fut.exception()
        return collected
