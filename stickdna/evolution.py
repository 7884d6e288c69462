# stickdna/evolution.py
"""
Evolution loop as a value: each step takes a SimulationState and returns a new
one. Genomes already in the population are never mutated; a step first stores a
clone of the edited working genome in its slot, then clones the next parent,
mutates the clone and swaps it into the parent's slot.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

from stickdna.genome import Genome
from stickdna.vectors import clamp

logger = logging.getLogger(__name__)

POPULATION_SIZE = 10
MUTATION_RATE = 0.9

# Generation speed control: 0..100 maps to 0.1..10 generations per second
SPEED_RANGE = (0.0, 100.0)
GENERATIONS_PER_SECOND = (0.1, 10.0)

@dataclass(frozen=True)
class SimulationState:
	population: Tuple[Genome, ...]
	index: int = 0
	generation: int = 0
	paused: bool = False
	# Working copy edited by drags and controls, never a population member
	current: Optional[Genome] = None

def seed_population(size: int = POPULATION_SIZE,
					rng: Optional[random.Random] = None) -> SimulationState:
	"""Random initial population; current starts as a clone of slot 0"""
	if size < 1:
		raise ValueError(f"population size must be positive, got {size}")

	population = tuple(Genome(rng=rng) for _ in range(size))
	logger.info("Seeded population of %d genomes", size)
	return SimulationState(population=population, current=population[0].clone())

def advance_generation(state: SimulationState, mutation_rate: float = MUTATION_RATE,
					   override_mask: Optional[Mapping[str, bool]] = None,
					   rng: Optional[random.Random] = None) -> SimulationState:
	"""
	Store the edited working genome back in its slot, then clone the next
	slot's genome, mutate it and put it back in that slot.
	"""
	population = state.population
	if state.current is not None:
		# Drags and control edits carry into later generations
		population = _with_slot(population, state.index, state.current.clone())

	index = (state.index + 1) % len(population)

	child = population[index].clone()
	if rng is not None:
		child.rng = rng
	child.mutate(mutation_rate, override_mask)

	population = _with_slot(population, index, child)
	generation = state.generation + 1
	logger.debug("Generation %d -> slot %d: %r", generation, index, child)

	return replace(
		state,
		population=population,
		index=index,
		generation=generation,
		current=child.clone(),
	)

def _with_slot(population: Tuple[Genome, ...], index: int, genome: Genome) -> Tuple[Genome, ...]:
	return population[:index] + (genome,) + population[index + 1:]

def mutate_once(state: SimulationState, mutation_rate: float = MUTATION_RATE,
				override_mask: Optional[Mapping[str, bool]] = None,
				rng: Optional[random.Random] = None) -> SimulationState:
	"""Single manual step; runs whether or not the loop is paused"""
	return advance_generation(state, mutation_rate, override_mask, rng)

def toggle_pause(state: SimulationState) -> SimulationState:
	return replace(state, paused=not state.paused)

def generation_interval(speed: float) -> float:
	"""Seconds between generations for a speed control value in 0..100"""
	lo, hi = SPEED_RANGE
	fast_lo, fast_hi = GENERATIONS_PER_SECOND
	speed = clamp(speed, lo, hi)
	per_second = fast_lo + (speed - lo) / (hi - lo) * (fast_hi - fast_lo)
	return 1.0 / per_second
