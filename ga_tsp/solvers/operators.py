import random
from typing import List, Sequence

from .base import Tour


def crossover(parent_a: Tour, parent_b: Tour) -> Tour:
    """Ordered crossover: first half of ``parent_a``, then the rest in ``parent_b`` order."""
    half = len(parent_a.cities) // 2
    child_cities = parent_a.cities[:half]
    placed = set(child_cities)
    for city in parent_b.cities:
        if city not in placed:
            child_cities.append(city)
            placed.add(city)
    child = Tour(cities=child_cities)
    child.distance = child.calculate_distance()
    return child


def refresh_fitness(population: Sequence[Tour]) -> None:
    for tour in population:
        tour.calculate_fitness()


def normalize_fitness(population: Sequence[Tour]) -> None:
    total = sum(tour.fitness for tour in population)
    for tour in population:
        tour.fitness /= total


def select_tour(population: Sequence[Tour], rng: random.Random) -> Tour:
    """Roulette-wheel selection over the raw fitness values of ``population``."""
    fitness_sum = sum(tour.fitness for tour in population)
    threshold = rng.random() * fitness_sum
    running = 0.0
    for tour in population:
        running += tour.fitness
        if running >= threshold:
            return tour
    # Only reachable through float rounding.
    return population[0]


def select_parents(population: Sequence[Tour], rng: random.Random) -> List[Tour]:
    return [select_tour(population, rng), select_tour(population, rng)]
