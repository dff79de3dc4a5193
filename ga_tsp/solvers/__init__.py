from .base import City, Tour, distance, tour_length
from .operators import (
    crossover,
    normalize_fitness,
    refresh_fitness,
    select_parents,
    select_tour,
)

__all__ = [
    "City",
    "Tour",
    "distance",
    "tour_length",
    "crossover",
    "normalize_fitness",
    "refresh_fitness",
    "select_parents",
    "select_tour",
]
