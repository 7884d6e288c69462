import os
import random

# headless pygame for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


class MaxRandom:
	"""Always mutates and always draws the top of the range"""

	def random(self):
		return 0.0

	def uniform(self, lo, hi):
		return hi


@pytest.fixture
def rng():
	return random.Random(1234)


@pytest.fixture
def max_rng():
	return MaxRandom()
