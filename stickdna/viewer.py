# stickdna/viewer.py

import logging
import os
import random
import time
from typing import Optional

import pygame

from stickdna import evolution
from stickdna.config import settings
from stickdna.figure import Figure
from stickdna.genome import MUTATION_STEPS, SCALARS
from stickdna.render import FigureRenderer

logger = logging.getLogger(__name__)

SPEED_STEP = 5

class StickFigureApp:
	"""Pygame front end: evolution timer, mouse dragging, keyboard controls and HUD"""

	def __init__(self, cfg: Optional[dict] = None):
		# ==== CONFIGURABLE (config["viewer"], config["evolution"], config["figure"]) ====
		cfg = cfg if cfg is not None else settings
		view_cfg = cfg.get("viewer") or {}
		evo_cfg = cfg.get("evolution") or {}
		fig_cfg = cfg.get("figure") or {}

		self.width = view_cfg.get("width", 600)
		self.height = view_cfg.get("height", 600)
		self.fps = view_cfg.get("fps", 60)
		self.screenshot_dir = view_cfg.get("screenshot_dir", ".")

		self.mutation_rate = evo_cfg.get("mutation_rate", evolution.MUTATION_RATE)
		self.generation_speed = evo_cfg.get("generation_speed", 10)
		seed = evo_cfg.get("seed")
		self.rng = random.Random(seed) if seed is not None else None

		# Colors
		self.black = (0, 0, 0)
		self.green = (0, 160, 0)
		self.red = (200, 0, 0)

		# Pygame setup
		pygame.init()
		self.screen = pygame.display.set_mode((self.width, self.height))
		pygame.display.set_caption(view_cfg.get("caption", "stickdna"))

		# State
		self.state = evolution.seed_population(
			evo_cfg.get("population_size", evolution.POPULATION_SIZE), self.rng
		)
		self.figure = Figure(self.width / 2, self.height / 2 + 20,
							 sync_dragged_only=fig_cfg.get("sync_dragged_only", False))
		self.figure.sync_from_genome(self.state.current)
		self.renderer = FigureRenderer(self.screen)

		self.selected_control = 0
		self.frame = 0
		self.last_generation_ms = 0

		# UI
		self.font = pygame.font.Font(None, 20)
		self.clock = pygame.time.Clock()

		logger.info("Controls: SPACE pause/resume | M mutate once | UP/DOWN speed | "
					"TAB select | LEFT/RIGHT adjust (paused) | S save | ESC exit")

	@property
	def genome(self):
		return self.state.current

	@property
	def selected_name(self) -> str:
		return SCALARS[self.selected_control]

	def toggle_pause(self):
		self.state = evolution.toggle_pause(self.state)
		if not self.state.paused:
			# Resuming hands every anchor back to the genome
			self.figure.clear_overrides()
		logger.info("Mutation paused: %s", self.state.paused)

	def next_generation(self):
		self.state = evolution.mutate_once(
			self.state, self.mutation_rate, self.figure.override_mask(), self.rng
		)
		self.figure.sync_from_genome(self.genome)

	def adjust_control(self, direction: int):
		"""Step the selected parameter; only honoured while paused"""
		if not self.state.paused:
			return
		name = self.selected_name
		value = self.genome.to_controls()[name] + direction * MUTATION_STEPS[name]
		self.genome.update_from_controls({name: str(value)}, self.figure.override_mask())
		self.figure.sync_from_genome(self.genome)

	def save_screenshot(self) -> str:
		filename = os.path.join(self.screenshot_dir, f"stickdna_gen_{self.state.generation}.png")
		pygame.image.save(self.screen, filename)
		logger.info("Saved %s", filename)
		return filename

	def on_screen(self, pos) -> bool:
		x, y = pos
		return 0 <= x <= self.width and 0 <= y <= self.height

	def dispatch(self, e) -> bool:
		"""Handle one pygame event; False means quit"""
		if e.type == pygame.QUIT:
			return False

		# Pointer presses and drags only count inside the window
		if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and self.on_screen(e.pos):
			self.figure.handle_pointer_down(*e.pos)
		elif e.type == pygame.MOUSEMOTION and e.buttons[0] and self.on_screen(e.pos):
			self.figure.handle_pointer_move(*e.pos, self.genome)
		elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
			self.figure.handle_pointer_up()

		elif e.type == pygame.KEYDOWN:
			if e.key == pygame.K_ESCAPE:
				return False
			elif e.key == pygame.K_SPACE:
				self.toggle_pause()
			elif e.key == pygame.K_m:
				self.next_generation()
			elif e.key == pygame.K_UP:
				self.generation_speed = min(100, self.generation_speed + SPEED_STEP)
			elif e.key == pygame.K_DOWN:
				self.generation_speed = max(0, self.generation_speed - SPEED_STEP)
			elif e.key == pygame.K_TAB:
				self.selected_control = (self.selected_control + 1) % len(SCALARS)
			elif e.key == pygame.K_RIGHT:
				self.adjust_control(1)
			elif e.key == pygame.K_LEFT:
				self.adjust_control(-1)
			elif e.key == pygame.K_s:
				self.save_screenshot()
		return True

	def handle_events(self) -> bool:
		for e in pygame.event.get():
			if not self.dispatch(e):
				return False
		return True

	def update(self, now_ms: int):
		"""Advance the evolution timer, or track the edited genome while paused"""
		if self.state.paused:
			self.figure.sync_from_genome(self.genome)
			return

		interval_ms = evolution.generation_interval(self.generation_speed) * 1000
		if now_ms - self.last_generation_ms > interval_ms:
			self.next_generation()
			self.last_generation_ms = now_ms

	def draw_hud(self):
		lines = [
			(f"Gen Speed: {self.generation_speed}", self.black),
			(f"Generation: {self.state.generation}", self.black),
			(f"DNA Index: {self.state.index}", self.black),
		]
		for i, (text, color) in enumerate(reversed(lines)):
			surface = self.font.render(text, True, color)
			self.screen.blit(surface, (10, self.height - 20 * (i + 1)))

		status = "PAUSED" if self.state.paused else "EVOLVING"
		status_color = self.red if self.state.paused else self.green
		self.screen.blit(self.font.render(status, True, status_color), (10, 10))

		name = self.selected_name
		control_text = f"{name}: {getattr(self.genome, name):.3f}"
		self.screen.blit(self.font.render(control_text, True, self.black), (10, 30))

	def draw_frame(self):
		self.renderer.render(self.figure, self.genome, self.frame)
		self.draw_hud()

	def run(self):
		"""Main application loop"""
		started = time.time()
		while self.handle_events():
			self.update(pygame.time.get_ticks())
			self.draw_frame()
			pygame.display.flip()
			self.clock.tick(self.fps)
			self.frame += 1
		pygame.quit()
		logger.info("Viewer exited after %d generations (%.1fs)",
					self.state.generation, time.time() - started)

def register(app_context):
	"""Plugin hook: instantiate and run on start()."""
	app = StickFigureApp()
	# pygame calls must stay on the main thread
	app_context.register_module(app)
	app.start = app.run
	logger.info("StickFigureApp (viewer) registered")
