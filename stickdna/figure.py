# stickdna/figure.py

import logging
from typing import Dict, Iterable, Optional

import numpy as np

from stickdna.genome import ANCHORS, DEFAULT_OFFSETS, Genome
from stickdna.vectors import distance, vec

logger = logging.getLogger(__name__)

# Hit-test radii, checked in ANCHORS order
HEAD_HIT_RADIUS = 30.0
LIMB_HIT_RADIUS = 20.0

# Torso ellipse (center sits below the torso center)
TORSO_OFFSET_Y = 20.0
TORSO_WIDTH = 50.0
TORSO_HEIGHT = 100.0

class Figure:
	"""
	Anchor positions for head, hands and feet around a movable torso.

	An anchor follows torso_center + genome offset unless its override flag is
	set, in which case it stays wherever the user dragged it until
	clear_overrides() is called.
	"""

	def __init__(self, center_x: float, center_y: float, sync_dragged_only: bool = False):
		self.torso_center = vec(center_x, center_y)
		self.anchors: Dict[str, np.ndarray] = {}
		self.reset_anchors()

		# Interaction state
		self.dragging_anchor: Optional[str] = None
		self.dragging_torso = False
		self.drag_offset: Optional[np.ndarray] = None
		self.sync_dragged_only = sync_dragged_only

		# Anchors the user has placed by hand
		self.overrides: Dict[str, bool] = {name: False for name in ANCHORS}

	def reset_anchors(self):
		"""Place every anchor at its fixed default offset from the torso"""
		for name in ANCHORS:
			self.anchors[name] = self.torso_center + vec(*DEFAULT_OFFSETS[name])

	def anchor(self, name: str) -> np.ndarray:
		return self.anchors[name].copy()

	def override_mask(self) -> Dict[str, bool]:
		return dict(self.overrides)

	@property
	def is_dragging(self) -> bool:
		return self.dragging_anchor is not None or self.dragging_torso

	def sync_from_genome(self, genome: Genome):
		"""Move non-overridden anchors to torso_center + genome offset"""
		for name in ANCHORS:
			if not self.overrides[name]:
				self.anchors[name][:] = self.torso_center + genome.offset(name)

	def sync_genome_from_anchors(self, genome: Genome, names: Optional[Iterable[str]] = None):
		"""Write anchor - torso_center back into the genome (all anchors by default)"""
		for name in (ANCHORS if names is None else names):
			genome.offset(name)[:] = self.anchors[name] - self.torso_center

	def _hit_anchor(self, x: float, y: float) -> Optional[str]:
		for name in ANCHORS:
			radius = HEAD_HIT_RADIUS if name == "head" else LIMB_HIT_RADIUS
			if distance((x, y), self.anchors[name]) < radius:
				return name
		return None

	def _hit_torso(self, x: float, y: float) -> bool:
		torso_x = self.torso_center[0]
		torso_y = self.torso_center[1] + TORSO_OFFSET_Y
		norm_x = (x - torso_x) / (TORSO_WIDTH / 2)
		norm_y = (y - torso_y) / (TORSO_HEIGHT / 2)
		return norm_x * norm_x + norm_y * norm_y <= 1

	def handle_pointer_down(self, x: float, y: float) -> bool:
		"""Start an anchor or torso drag; returns True if something was hit"""
		name = self._hit_anchor(x, y)
		if name is not None:
			self.dragging_anchor = name
			self.dragging_torso = False
			self.overrides[name] = True
			logger.debug("Dragging %s (now overridden)", name)
			return True

		if self._hit_torso(x, y):
			self.dragging_torso = True
			self.dragging_anchor = None
			self.drag_offset = vec(x, y) - self.torso_center
			return True

		self.dragging_anchor = None
		self.dragging_torso = False
		self.drag_offset = None
		return False

	def handle_pointer_move(self, x: float, y: float, genome: Genome):
		if self.dragging_anchor is not None:
			self.anchors[self.dragging_anchor][:] = (x, y)
			# Persist the drag so later syncs start from the dragged spot
			names = [self.dragging_anchor] if self.sync_dragged_only else None
			self.sync_genome_from_anchors(genome, names)

		elif self.dragging_torso and self.drag_offset is not None:
			new_center = vec(x, y) - self.drag_offset
			delta = new_center - self.torso_center
			self.torso_center = new_center

			# Rigid move: overrides keep their place relative to the torso
			for name in ANCHORS:
				self.anchors[name] += delta

	def handle_pointer_up(self):
		self.dragging_anchor = None
		self.dragging_torso = False
		self.drag_offset = None

	def clear_overrides(self):
		for name in ANCHORS:
			self.overrides[name] = False
