import math

import numpy as np
import pygame
import pytest

from stickdna.figure import Figure
from stickdna.genome import Genome
from stickdna.render import DRAW_ORDER, FigureRenderer, neck_points, wavy_limb_points


def test_flat_limb_is_a_straight_line():
	pts = wavy_limb_points((0, 0), (100, 50), amplitude=0, frequency=0.3, phase=1.0)
	assert pts.shape == (21, 2)
	assert pts[0] == pytest.approx([0, 0])
	assert pts[-1] == pytest.approx([100, 50])
	assert pts[10] == pytest.approx([50, 25])


def test_limb_wave_is_perpendicular_and_mirrored():
	pts = wavy_limb_points((0, 0), (100, 0), amplitude=10, frequency=0, phase=math.pi / 2)
	assert pts[:, 0] == pytest.approx(np.linspace(0, 100, 21))
	assert pts[:, 1] == pytest.approx(np.full(21, 10.0))

	mirrored = wavy_limb_points((0, 0), (100, 0), 10, 0, math.pi / 2, mirrored=True)
	assert mirrored[:, 1] == pytest.approx(np.full(21, -10.0))


def test_neck_is_an_arc_between_its_ends():
	pts = neck_points((0, 0), (0, -60), wiggle=8, phase=0)
	assert pts.shape == (9, 2)
	assert pts[0] == pytest.approx([0, 0])
	assert pts[-1] == pytest.approx([0, -60], abs=1e-9)
	# widest at the middle
	assert abs(pts[4, 0]) == pytest.approx(8)


def test_limbs_are_drawn_behind_torso_and_head():
	order = list(DRAW_ORDER)
	assert order[0] == "background"
	assert order.index("limbs") < order.index("torso") < order.index("head")
	assert order.index("neck") < order.index("torso")
	assert order[-1] == "markers"


@pytest.fixture
def surface():
	pygame.init()
	yield pygame.Surface((300, 300), 0, 32)
	pygame.quit()


def _genome(rng, **extra):
	params = {
		"limb_length": 150,
		"wave_amplitude": 0,
		"limb_thickness": 20,
		"hand_foot_size": 5,
		"neck_wiggle": 0,
		"head_rotation": 30,
		"torso_color": (200, 30, 30),
		"limb_color": (10, 10, 200),
		"head_color": (30, 200, 30),
		"hand_foot_color": (90, 90, 90),
		"background_color": (240, 240, 240),
	}
	params.update(extra)
	return Genome(params, rng=rng)


def _rgb(surface, x, y):
	return tuple(surface.get_at((x, y)))[:3]


def test_render_paints_torso_over_a_crossing_limb(surface, rng):
	genome = _genome(rng)
	figure = Figure(150, 150)
	figure.sync_from_genome(genome)
	# left arm now runs from the shoulder straight through the torso
	figure.anchors["left_hand"][:] = (170, 200)

	FigureRenderer(surface).render(figure, genome, frame=12)

	assert _rgb(surface, 150, 170) == (200, 30, 30)
	# the same arm is visible outside the torso
	assert _rgb(surface, 127, 133) == (10, 10, 200)


def test_render_draws_rotated_head_on_top(surface, rng):
	genome = _genome(rng)
	figure = Figure(150, 150)
	figure.sync_from_genome(genome)

	FigureRenderer(surface).render(figure, genome, frame=0)

	hx, hy = (int(v) for v in figure.anchors["head"])
	assert _rgb(surface, hx + 20, hy) == (30, 200, 30)
	assert _rgb(surface, 5, 5) == (240, 240, 240)
