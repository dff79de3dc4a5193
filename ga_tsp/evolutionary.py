import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .solvers.base import City, Tour
from .solvers.operators import crossover, normalize_fitness, refresh_fitness, select_parents


logger = logging.getLogger(__name__)


@dataclass
class EvolutionConfig:
    population_size: int = 100
    generations: int = 100_000
    mutation_rate: float = 0.05
    crossover_rate: float = 0.70
    random_seed: Optional[int] = None
    patience: Optional[int] = None
    normalize_initial_fitness: bool = True
    log_interval: int = 10_000

    def validate(self) -> None:
        if self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}.")
        if self.generations < 1:
            raise ValueError(f"generations must be at least 1, got {self.generations}.")
        for name in ("mutation_rate", "crossover_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {rate}.")
        if self.patience is not None and self.patience < 1:
            raise ValueError(f"patience must be at least 1 when set, got {self.patience}.")
        if self.log_interval < 1:
            raise ValueError(f"log_interval must be at least 1, got {self.log_interval}.")


def evolve(
    population: Sequence[Tour],
    crossover_rate: float,
    mutation_rate: float,
    cities: Sequence[City],
    rng: random.Random,
) -> List[Tour]:
    """Build the next generation.

    The first half of ``population`` (assumed sorted best first) is carried over
    as-is. Every remaining slot gets a crossover child of two roulette-selected
    parents, or a fresh random tour when crossover is not applied, and is then
    mutated with probability ``mutation_rate``. The result is sorted by distance.
    """
    elite_count = len(population) // 2
    new_pop: List[Tour] = list(population[:elite_count])
    while len(new_pop) < len(population):
        parent_a, parent_b = select_parents(population, rng)
        if rng.random() < crossover_rate:
            child = crossover(parent_a, parent_b)
        else:
            child = Tour.new_tour(cities, rng)
        if rng.random() < mutation_rate:
            child.mutate(rng)
        new_pop.append(child)
    new_pop.sort(key=lambda t: t.distance)
    return new_pop


class EvolutionarySearch:
    def __init__(
        self,
        config: EvolutionConfig,
        cities: Sequence[City],
        rng: random.Random = None,
    ):
        config.validate()
        if not cities:
            raise ValueError("Cannot evolve tours over an empty city set.")
        self.cfg = config
        self.cities = list(cities)
        self.rng = rng or random.Random(config.random_seed)
        self.population: List[Tour] = [
            Tour.new_tour(self.cities, self.rng) for _ in range(config.population_size)
        ]
        self.generation = 0
        if config.normalize_initial_fitness:
            # Overwritten by the first step; kept so the initial state matches a
            # probability distribution.
            refresh_fitness(self.population)
            normalize_fitness(self.population)

    def step(self) -> None:
        refresh_fitness(self.population)
        self.population = evolve(
            self.population,
            self.cfg.crossover_rate,
            self.cfg.mutation_rate,
            self.cities,
            self.rng,
        )
        self.generation += 1

    def run(self) -> Tour:
        best_distance = float("inf")
        stale = 0
        for _ in range(self.cfg.generations):
            self.step()
            current = self.population[0].distance
            if current < best_distance:
                best_distance = current
                stale = 0
            else:
                stale += 1
            if self.generation % self.cfg.log_interval == 0:
                logger.debug("generation %d: best distance %.6f", self.generation, current)
            if self.cfg.patience is not None and stale >= self.cfg.patience:
                logger.debug(
                    "stopping at generation %d: no improvement for %d generations",
                    self.generation,
                    stale,
                )
                break
        return self.best()

    def best(self) -> Tour:
        best_tour = self.population[0]
        for tour in self.population:
            if tour.distance < best_tour.distance:
                best_tour = tour
        return best_tour
