# stickdna/render.py

import math
from typing import Sequence

import numpy as np
import pygame

from stickdna.figure import TORSO_HEIGHT, TORSO_OFFSET_Y, TORSO_WIDTH, Figure
from stickdna.genome import Genome

# Limb roots relative to the torso center
SHOULDER_OFFSET = (25.0, -20.0)
HIP_OFFSET = (20.0, 70.0)

LIMB_POINTS = 20
NECK_POINTS = 8 # fewer points for a smoother arc
NECK_BASE_Y = -10.0
NECK_TOP_Y = 25.0 # below the head anchor

HEAD_DIAMETER = 60
MARKER_DIAMETER = 16
MARKER_COLOR = (255, 100, 100, 180)
OUTLINE_COLOR = (0, 0, 0)

# Frames per radian of wave phase
LIMB_PHASE_DIVISOR = 10.0
NECK_PHASE_DIVISOR = 15.0

# Back to front; limbs must sit fully behind torso and head
DRAW_ORDER = (
	"background", "limbs", "hands_feet", "neck", "torso", "head", "markers",
)

def wavy_limb_points(start: Sequence[float], end: Sequence[float], amplitude: float,
					 frequency: float, phase: float, mirrored: bool = False,
					 points: int = LIMB_POINTS) -> np.ndarray:
	"""(points + 1, 2) polyline waving perpendicular to start->end"""
	x1, y1 = start
	dx, dy = end[0] - x1, end[1] - y1
	length = math.hypot(dx, dy)
	normal = math.atan2(dy, dx) + math.pi / 2

	pos = np.linspace(0.0, 1.0, points + 1)
	wave = np.sin(2 * math.pi * frequency * (pos * length) + phase) * amplitude
	if mirrored:
		wave = -wave

	xs = x1 + dx * pos + math.cos(normal) * wave
	ys = y1 + dy * pos + math.sin(normal) * wave
	return np.column_stack((xs, ys))

def neck_points(start: Sequence[float], end: Sequence[float], wiggle: float,
				phase: float, points: int = NECK_POINTS) -> np.ndarray:
	"""Half-sine arc from start to end, swaying slowly with phase"""
	x1, y1 = start
	dx, dy = end[0] - x1, end[1] - y1
	normal = math.atan2(dy, dx) + math.pi / 2

	pos = np.linspace(0.0, 1.0, points + 1)
	wave = np.sin(math.pi * pos + phase * 0.5) * wiggle

	xs = x1 + dx * pos + math.cos(normal) * wave
	ys = y1 + dy * pos + math.sin(normal) * wave
	return np.column_stack((xs, ys))

def _int_point(p) -> tuple:
	return (int(round(p[0])), int(round(p[1])))

class FigureRenderer:
	"""Draws a Figure with a Genome's look onto a pygame Surface"""

	def __init__(self, surface: pygame.Surface):
		self.surface = surface
		self.marker = pygame.Surface((MARKER_DIAMETER, MARKER_DIAMETER), pygame.SRCALPHA)
		pygame.draw.circle(self.marker, MARKER_COLOR,
						   (MARKER_DIAMETER // 2, MARKER_DIAMETER // 2), MARKER_DIAMETER // 2)

	def render(self, figure: Figure, genome: Genome, frame: float):
		for layer in DRAW_ORDER:
			getattr(self, f"draw_{layer}")(figure, genome, frame)

	def draw_background(self, figure, genome, frame):
		self.surface.fill(genome.background_color)

	def draw_limbs(self, figure, genome, frame):
		cx, cy = figure.torso_center
		phase = frame / LIMB_PHASE_DIVISOR
		width = max(1, int(round(genome.limb_thickness)))

		limbs = (
			((cx - SHOULDER_OFFSET[0], cy + SHOULDER_OFFSET[1]), "left_hand", True),
			((cx + SHOULDER_OFFSET[0], cy + SHOULDER_OFFSET[1]), "right_hand", False),
			((cx - HIP_OFFSET[0], cy + HIP_OFFSET[1]), "left_foot", True),
			((cx + HIP_OFFSET[0], cy + HIP_OFFSET[1]), "right_foot", False),
		)
		for root, anchor, is_left in limbs:
			# Left limbs wave with a positive sign, right limbs mirror them
			pts = wavy_limb_points(root, figure.anchors[anchor], genome.wave_amplitude,
								   genome.wave_frequency, phase, mirrored=not is_left)
			pygame.draw.lines(self.surface, genome.limb_color, False,
							  [_int_point(p) for p in pts], width)

	def draw_hands_feet(self, figure, genome, frame):
		size = genome.hand_foot_size
		w, h = size * 1.4, size
		for anchor in ("left_hand", "right_hand", "left_foot", "right_foot"):
			x, y = figure.anchors[anchor]
			rect = pygame.Rect(0, 0, max(1, int(w)), max(1, int(h)))
			rect.center = _int_point((x, y))
			pygame.draw.ellipse(self.surface, genome.hand_foot_color, rect)
			pygame.draw.ellipse(self.surface, OUTLINE_COLOR, rect, 2)

	def draw_neck(self, figure, genome, frame):
		cx, cy = figure.torso_center
		hx, hy = figure.anchors["head"]
		pts = neck_points((cx, cy + NECK_BASE_Y), (hx, hy + NECK_TOP_Y),
						  genome.neck_wiggle, frame / NECK_PHASE_DIVISOR)
		width = max(1, int(round(genome.limb_thickness)))
		pygame.draw.lines(self.surface, genome.limb_color, False,
						  [_int_point(p) for p in pts], width)

	def draw_torso(self, figure, genome, frame):
		cx, cy = figure.torso_center
		rect = pygame.Rect(0, 0, int(TORSO_WIDTH), int(TORSO_HEIGHT))
		rect.center = _int_point((cx, cy + TORSO_OFFSET_Y))
		pygame.draw.ellipse(self.surface, genome.torso_color, rect)

	def draw_head(self, figure, genome, frame):
		head = pygame.Surface((HEAD_DIAMETER, HEAD_DIAMETER), pygame.SRCALPHA)
		pygame.draw.ellipse(head, genome.head_color, head.get_rect())
		# pygame rotates counter-clockwise; positive rotation turns clockwise on screen
		rotated = pygame.transform.rotate(head, -genome.head_rotation)
		rect = rotated.get_rect(center=_int_point(figure.anchors["head"]))
		self.surface.blit(rotated, rect)

	def draw_markers(self, figure, genome, frame):
		for pos in figure.anchors.values():
			rect = self.marker.get_rect(center=_int_point(pos))
			self.surface.blit(self.marker, rect)
