import logging
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from matplotlib import image as mpimg

from .solvers.base import City


logger = logging.getLogger(__name__)

INK: Tuple[int, int, int, int] = (0, 0, 0, 255)


def new_canvas(width: int, height: int) -> np.ndarray:
    # Transparent RGBA, indexed [y, x].
    return np.zeros((height, width, 4), dtype=np.uint8)


def _set(canvas: np.ndarray, x: int, y: int) -> None:
    h, w = canvas.shape[:2]
    if 0 <= x < w and 0 <= y < h:
        canvas[y, x] = INK


def draw_node(canvas: np.ndarray, city: City, node_size: int) -> None:
    h, w = canvas.shape[:2]
    x0, x1 = max(city.x - node_size, 0), min(city.x + node_size, w - 1)
    y0, y1 = max(city.y - node_size, 0), min(city.y + node_size, h - 1)
    if x0 <= x1 and y0 <= y1:
        canvas[y0 : y1 + 1, x0 : x1 + 1] = INK


def draw_line(canvas: np.ndarray, a: City, b: City) -> None:
    dx = b.x - a.x
    dy = b.y - a.y
    if dx == 0:
        for y in range(min(a.y, b.y), max(a.y, b.y) + 1):
            _set(canvas, a.x, y)
        return
    slope = dy / dx
    if abs(slope) > 1:
        # Steep: step along y so the line has no gaps.
        for y in range(min(a.y, b.y), max(a.y, b.y) + 1):
            _set(canvas, int((y - a.y) / slope + a.x), y)
    else:
        for x in range(min(a.x, b.x), max(a.x, b.x) + 1):
            _set(canvas, x, int(slope * (x - a.x) + a.y))


def draw_tour(canvas: np.ndarray, cities: Sequence[City], node_size: int) -> np.ndarray:
    for city in cities:
        draw_node(canvas, city, node_size)
    n = len(cities)
    for i in range(n):
        draw_line(canvas, cities[i], cities[(i + 1) % n])
    return canvas


def outside_canvas(cities: Sequence[City], width: int, height: int) -> int:
    return sum(1 for c in cities if not (0 <= c.x < width and 0 <= c.y < height))


def image_name(worker: str, problem_num: int) -> str:
    return f"tour_thread_{worker}_problem_{problem_num}.png"


def save_tour_image(
    path: Path, cities: Sequence[City], width: int = 256, height: int = 256, node_size: int = 10
) -> Path:
    clipped = outside_canvas(cities, width, height)
    if clipped:
        logger.warning(
            "%s: %d of %d cities lie outside the %dx%d canvas and are clipped",
            path.name,
            clipped,
            len(cities),
            width,
            height,
        )
    canvas = draw_tour(new_canvas(width, height), cities, node_size)
    path.parent.mkdir(parents=True, exist_ok=True)
    mpimg.imsave(path, canvas)
    return path
