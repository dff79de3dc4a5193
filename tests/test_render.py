import logging

import numpy as np
from matplotlib import image as mpimg

from ga_tsp.render import (
    INK,
    draw_line,
    draw_node,
    draw_tour,
    image_name,
    new_canvas,
    outside_canvas,
    save_tour_image,
)
from ga_tsp.solvers.base import City


def _inked(canvas, x, y):
    return tuple(canvas[y, x]) == INK


def test_canvas_starts_blank():
    canvas = new_canvas(32, 16)
    assert canvas.shape == (16, 32, 4)
    assert not canvas.any()


def test_node_is_filled_square():
    canvas = new_canvas(40, 40)
    draw_node(canvas, City(20, 20), 3)
    assert _inked(canvas, 17, 17) and _inked(canvas, 23, 23)
    assert not _inked(canvas, 16, 20) and not _inked(canvas, 24, 20)
    assert (canvas[..., 3] > 0).sum() == 7 * 7


def test_node_is_clipped_at_edges():
    canvas = new_canvas(10, 10)
    draw_node(canvas, City(0, 9), 2)
    assert (canvas[..., 3] > 0).sum() == 3 * 3


def test_lines_cover_both_endpoints():
    for a, b in [
        (City(2, 2), City(2, 12)),
        (City(2, 12), City(2, 2)),
        (City(1, 1), City(15, 8)),
        (City(15, 8), City(1, 1)),
        (City(3, 1), City(5, 15)),
        (City(5, 15), City(3, 1)),
    ]:
        canvas = new_canvas(20, 20)
        draw_line(canvas, a, b)
        assert _inked(canvas, a.x, a.y)
        assert _inked(canvas, b.x, b.y)


def test_steep_line_has_one_pixel_per_row():
    canvas = new_canvas(20, 20)
    draw_line(canvas, City(3, 1), City(5, 15))
    rows = np.nonzero(canvas[..., 3])[0]
    assert sorted(set(rows)) == list(range(1, 16))


def test_draw_tour_draws_closing_edge():
    canvas = new_canvas(30, 30)
    cities = [City(5, 5), City(25, 5), City(25, 25), City(5, 25)]
    draw_tour(canvas, cities, 0)
    # Closing edge from (5, 25) back to (5, 5).
    assert all(_inked(canvas, 5, y) for y in range(5, 26))


def test_image_name():
    assert image_name("Thread-3", 4) == "tour_thread_Thread-3_problem_4.png"


def test_save_tour_image(tmp_path):
    path = tmp_path / "images" / image_name("Thread-1", 0)
    cities = [City(10, 10), City(100, 40), City(50, 200)]
    save_tour_image(path, cities, width=256, height=256, node_size=10)
    assert path.exists()
    img = mpimg.imread(path)
    assert img.shape[:2] == (256, 256)
    assert img[10, 10, 3] > 0
    assert img[250, 250, 3] == 0


def test_outside_canvas_counts_clipped_cities():
    cities = [City(0, 0), City(255, 255), City(256, 10), City(10, 4000)]
    assert outside_canvas(cities, 256, 256) == 2


def test_save_warns_when_cities_are_clipped(tmp_path, caplog):
    path = tmp_path / "big.png"
    with caplog.at_level(logging.WARNING, logger="ga_tsp.render"):
        save_tour_image(path, [City(10, 10), City(3000, 10), City(10, 2000)])
    assert path.exists()
    assert "2 of 3 cities" in caplog.text


def test_save_is_quiet_when_tour_fits(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="ga_tsp.render"):
        save_tour_image(tmp_path / "ok.png", [City(10, 10), City(100, 40)])
    assert caplog.text == ""
