import random

import pytest

from ga_tsp.solvers.base import City


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def square():
    return [City(0, 0), City(0, 10), City(10, 10), City(10, 0)]


@pytest.fixture
def cities(rng):
    return [City(rng.randrange(256), rng.randrange(256)) for _ in range(20)]
