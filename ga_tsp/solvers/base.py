import math
import random
from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(frozen=True, eq=False)
class City:
    """A point on the integer grid.

    Cities compare and hash by identity: two coincident cities are still two
    different stops on a tour.
    """

    x: int
    y: int


def distance(a: City, b: City) -> float:
    return math.hypot(float(a.x - b.x), float(a.y - b.y))


def tour_length(cities: Sequence[City]) -> float:
    dist = 0.0
    n = len(cities)
    for i in range(n):
        dist += distance(cities[i], cities[(i + 1) % n])
    return float(dist)


@dataclass
class Tour:
    cities: List[City]
    distance: float = 0.0
    fitness: float = field(default=0.0, compare=False)

    @staticmethod
    def new_tour(cities: Sequence[City], rng: random.Random) -> "Tour":
        if not cities:
            raise ValueError("A tour needs at least one city.")
        order = list(cities)
        rng.shuffle(order)
        tour = Tour(cities=order)
        tour.distance = tour.calculate_distance()
        return tour

    def calculate_distance(self) -> float:
        return tour_length(self.cities)

    def calculate_fitness(self) -> float:
        # Raises ZeroDivisionError for degenerate tours with all cities coincident.
        self.fitness = 1.0 / self.distance
        return self.fitness

    def mutate(self, rng: random.Random) -> None:
        n = len(self.cities)
        i = rng.randrange(n)
        j = rng.randrange(n)
        self.cities[i], self.cities[j] = self.cities[j], self.cities[i]
        self.distance = self.calculate_distance()

    def __len__(self) -> int:
        return len(self.cities)
