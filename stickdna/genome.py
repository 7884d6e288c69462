# stickdna/genome.py
"""
Genome - the bundle of procedural parameters ("DNA") behind one rendering of the
stick figure, with its mutation and clone operators.

Scalars are bounded and clamped, offsets are 2-D vectors relative to the torso
center derived from limb length unless overridden, colors are RGB int triples.
"""

import logging
import math
import random
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from stickdna.vectors import (
	Color, clamp, clamp_channel, parse_color, rgb_to_hex, uniform, vec
)

logger = logging.getLogger(__name__)

# Scalar ranges and the fixed per-field mutation step
RANGES: Dict[str, Tuple[float, float]] = {
	"wave_amplitude": (0.0, 50.0),
	"wave_frequency": (0.0, 0.5),
	"limb_thickness": (2.0, 20.0),
	"limb_length":    (50.0, 300.0),
	"hand_foot_size": (5.0, 40.0),
	"neck_wiggle":    (0.0, 15.0),   # milder than the limb wave
	"head_rotation":  (-45.0, 45.0), # degrees
}

MUTATION_STEPS: Dict[str, float] = {
	"wave_amplitude": 5.0,
	"wave_frequency": 0.05,
	"limb_thickness": 2.0,
	"limb_length":    10.0,
	"hand_foot_size": 3.0,
	"neck_wiggle":    2.0,
	"head_rotation":  5.0,
}

SCALARS = tuple(RANGES)

# Anchor names shared with Figure, in hit-test priority order
ANCHORS = ("head", "left_hand", "right_hand", "left_foot", "right_foot")

# Offsets at limb_length == 150 (scale 1)
DEFAULT_OFFSETS: Dict[str, Tuple[float, float]] = {
	"head":       (0.0, -100.0),
	"left_hand":  (-80.0, -10.0),
	"right_hand": (80.0, -10.0),
	"left_foot":  (-65.0, 100.0),
	"right_foot": (65.0, 100.0),
}

NORMAL_LIMB_LENGTH = 150.0

# Offset jitter applied per axis on mutation
LIMB_POSITION_JITTER = 5.0
HEAD_POSITION_JITTER = 3.0

# Head stays above the torso: y in [-120*scale, -80*scale]
HEAD_Y_RANGE = (-120.0, -80.0)

# Random construction ranges per channel; None means fixed default
COLOR_RANGES: Dict[str, Optional[Tuple[int, int]]] = {
	"torso_color":      (100, 255),
	"limb_color":       (0, 100),
	"head_color":       (150, 255),
	"hand_foot_color":  (100, 255),
	"background_color": None,
}
DEFAULT_BACKGROUND: Color = (240, 240, 240)
COLOR_CHANGE = 20.0

COLORS = tuple(COLOR_RANGES)

def offset_field(anchor: str) -> str:
	return f"{anchor}_offset"

def limb_scale(limb_length: float) -> float:
	return limb_length / NORMAL_LIMB_LENGTH

def default_offset(anchor: str, limb_length: float) -> np.ndarray:
	scale = limb_scale(limb_length)
	dx, dy = DEFAULT_OFFSETS[anchor]
	return vec(dx * scale, dy * scale)

def _is_overridden(override_mask: Optional[Mapping[str, bool]], anchor: str) -> bool:
	return bool(override_mask and override_mask.get(anchor, False))

class Genome:
	"""Procedural parameters for one stick figure"""

	def __init__(self, params: Optional[Mapping[str, object]] = None,
				 rng: Optional[random.Random] = None):
		params = params or {}
		self.rng = rng

		for name in SCALARS:
			lo, hi = RANGES[name]
			value = params.get(name)
			if value is not None:
				setattr(self, name, clamp(float(value), lo, hi))
			else:
				setattr(self, name, uniform(lo, hi, rng))

		# Offsets follow the final limb length unless given explicitly
		for anchor in ANCHORS:
			field = offset_field(anchor)
			value = params.get(field)
			if value is not None:
				setattr(self, field, np.array(value, dtype=float).reshape(2))
			else:
				setattr(self, field, default_offset(anchor, self.limb_length))

		for name in COLORS:
			value = params.get(name)
			color = parse_color(value) if value is not None else None
			if color is None:
				color = self._random_color(COLOR_RANGES[name])
			setattr(self, name, color)

	def _random_color(self, channel_range: Optional[Tuple[int, int]]) -> Color:
		if channel_range is None:
			return DEFAULT_BACKGROUND
		lo, hi = channel_range
		return tuple(int(uniform(lo, hi, self.rng)) for _ in range(3))

	def _random(self) -> float:
		return (self.rng or random).random()

	@property
	def scale(self) -> float:
		return limb_scale(self.limb_length)

	def offset(self, anchor: str) -> np.ndarray:
		return getattr(self, offset_field(anchor))

	def clone(self) -> "Genome":
		"""Independent copy: no offset array is shared with the source"""
		params = {name: getattr(self, name) for name in SCALARS + COLORS}
		for anchor in ANCHORS:
			params[offset_field(anchor)] = self.offset(anchor).copy()
		return Genome(params, rng=self.rng)

	def recompute_offsets_from_limb_length(self, override_mask: Optional[Mapping[str, bool]] = None):
		"""Re-derive every offset whose anchor is not flagged in override_mask"""
		for anchor in ANCHORS:
			if _is_overridden(override_mask, anchor):
				continue
			self.offset(anchor)[:] = default_offset(anchor, self.limb_length)

	def mutate(self, mutation_rate: float = 0.9,
			   override_mask: Optional[Mapping[str, bool]] = None):
		"""Drift scalars, offsets and colors in place"""
		for name in SCALARS:
			if self._random() >= mutation_rate:
				continue
			lo, hi = RANGES[name]
			step = MUTATION_STEPS[name]
			old = getattr(self, name)
			setattr(self, name, clamp(old + uniform(-step, step, self.rng), lo, hi))

			if name == "limb_length" and self.limb_length != old:
				self.recompute_offsets_from_limb_length(override_mask)

		# Jitter is applied regardless of the mask
		for anchor in ANCHORS:
			if self._random() >= mutation_rate:
				continue
			jitter = HEAD_POSITION_JITTER if anchor == "head" else LIMB_POSITION_JITTER
			offset = self.offset(anchor)
			offset += vec(uniform(-jitter, jitter, self.rng),
						  uniform(-jitter, jitter, self.rng))

			if anchor == "head":
				lo, hi = HEAD_Y_RANGE
				offset[1] = clamp(offset[1], lo * self.scale, hi * self.scale)

		for name in COLORS:
			if self._random() < mutation_rate:
				setattr(self, name, self._mutate_color(getattr(self, name)))

	def _mutate_color(self, color: Color) -> Color:
		return tuple(
			clamp_channel(c + uniform(-COLOR_CHANGE, COLOR_CHANGE, self.rng))
			for c in color
		)

	def update_from_controls(self, controls: Mapping[str, object],
							 override_mask: Optional[Mapping[str, bool]] = None) -> List[str]:
		"""
		Apply externally edited values (sliders, color pickers, key bindings).

		Absent or malformed entries leave the field untouched. A limb length
		change re-derives the non-overridden offsets, same as mutation.
		Returns the names of the fields that were written.
		"""
		updated = []

		for name in SCALARS:
			if name not in controls:
				continue
			raw = controls[name]
			try:
				value = float(raw)
			except (TypeError, ValueError):
				logger.warning("Ignoring malformed value for %s: %r", name, raw)
				continue
			if not math.isfinite(value):
				logger.warning("Ignoring non-finite value for %s: %r", name, raw)
				continue

			lo, hi = RANGES[name]
			old = getattr(self, name)
			setattr(self, name, clamp(value, lo, hi))
			updated.append(name)

			if name == "limb_length" and self.limb_length != old:
				self.recompute_offsets_from_limb_length(override_mask)

		for name in COLORS:
			if name not in controls:
				continue
			color = parse_color(controls[name])
			if color is None:
				logger.warning("Ignoring malformed color for %s: %r", name, controls[name])
				continue
			setattr(self, name, color)
			updated.append(name)

		return updated

	def to_controls(self) -> Dict[str, object]:
		"""Current values in the shape update_from_controls accepts"""
		values = {name: getattr(self, name) for name in SCALARS}
		values.update({name: rgb_to_hex(getattr(self, name)) for name in COLORS})
		return values

	def __repr__(self):
		scalars = ", ".join(f"{name}={getattr(self, name):.3f}" for name in SCALARS)
		return f"Genome({scalars})"
