# stickdna/vectors.py

import math
import random
from typing import Optional, Sequence, Tuple

import numpy as np

Color = Tuple[int, int, int]

def clamp(value: float, lo: float, hi: float) -> float:
	return max(lo, min(hi, value))

def vec(x: float, y: float) -> np.ndarray:
	"""2-D float vector"""
	return np.array([x, y], dtype=float)

def distance(a, b) -> float:
	return math.hypot(a[0] - b[0], a[1] - b[1])

def uniform(lo: float, hi: float, rng: Optional[random.Random] = None) -> float:
	"""Uniform float in [lo, hi) from rng, or the module-level generator"""
	return (rng or random).uniform(lo, hi)

def clamp_channel(value: float) -> int:
	return int(round(clamp(value, 0, 255)))

def rgb_to_hex(color: Sequence[float]) -> str:
	r, g, b = (int(math.floor(c)) for c in color[:3])
	return "#{:02x}{:02x}{:02x}".format(r, g, b)

def parse_color(value) -> Optional[Color]:
	"""
	Accepts '#rrggbb' / 'rrggbb' strings or an (r, g, b) sequence.
	Returns None for anything malformed so callers can keep their old value.
	"""
	if value is None:
		return None

	if isinstance(value, str):
		text = value.strip().lstrip("#")
		if len(text) != 6:
			return None
		try:
			return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
		except ValueError:
			return None

	try:
		channels = [float(c) for c in value]
	except (TypeError, ValueError):
		return None
	if len(channels) != 3 or not all(math.isfinite(c) for c in channels):
		return None
	return tuple(clamp_channel(c) for c in channels)
