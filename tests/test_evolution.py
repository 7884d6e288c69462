import pytest

from stickdna.evolution import (
	SimulationState, advance_generation, generation_interval, mutate_once,
	seed_population, toggle_pause
)
from stickdna.figure import Figure
from stickdna.genome import ANCHORS, SCALARS, Genome


def _values(genome):
	values = {name: getattr(genome, name) for name in SCALARS}
	values.update({a: tuple(genome.offset(a)) for a in ANCHORS})
	return values


def test_seed_population(rng):
	state = seed_population(10, rng)
	assert len(state.population) == 10
	assert state.index == 0
	assert state.generation == 0
	assert state.paused is False
	assert state.current is not state.population[0]
	assert _values(state.current) == _values(state.population[0])


def test_seed_population_rejects_empty():
	with pytest.raises(ValueError):
		seed_population(0)


def test_advance_generation_returns_new_state(rng):
	state = seed_population(4, rng)
	population = state.population
	before = [_values(g) for g in population]

	after = advance_generation(state, 1.0, rng=rng)

	assert state.population is population
	assert [_values(g) for g in population] == before
	assert state.generation == 0 and state.index == 0

	assert after.index == 1
	assert after.generation == 1
	# slot 0 now holds a copy of the working genome
	assert after.population[0] is not population[0]
	assert _values(after.population[0]) == _values(state.current)
	assert after.population[1] is not population[1]
	assert after.current is not after.population[1]
	assert _values(after.current) == _values(after.population[1])


def test_advance_generation_cycles_through_slots(rng):
	state = seed_population(3, rng)
	indexes = []
	for _ in range(7):
		state = advance_generation(state, rng=rng)
		indexes.append(state.index)
	assert indexes == [1, 2, 0, 1, 2, 0, 1]
	assert state.generation == 7
	assert len(state.population) == 3


def test_advance_generation_passes_override_mask(max_rng):
	parent = Genome({"limb_length": 150, "head_offset": (7, -100)})
	state = SimulationState(population=(parent.clone(), parent), current=parent.clone())

	after = advance_generation(state, 0.5, {"head": True}, rng=max_rng)
	child = after.population[1]
	# limb length grew, but the masked head only took the +3 jitter
	assert child.limb_length == 160
	assert child.head_offset == pytest.approx([10, -97])
	assert parent.head_offset == pytest.approx([7, -100])


def test_edits_to_working_genome_return_to_its_slot(rng):
	state = advance_generation(seed_population(2, rng), rng=rng)
	assert state.index == 1

	figure = Figure(300, 300)
	figure.sync_from_genome(state.current)
	figure.handle_pointer_down(*figure.anchor("left_hand"))
	figure.handle_pointer_move(50, 60, state.current)

	state = advance_generation(state, 0.0, rng=rng)
	state = advance_generation(state, 0.0, rng=rng)

	assert state.index == 1
	assert state.population[1].left_hand_offset == pytest.approx([-250, -240])
	assert state.current.left_hand_offset == pytest.approx([-250, -240])


def test_paused_control_edits_seed_the_next_child(rng):
	state = seed_population(1, rng)
	stored = state.population[0].torso_color
	state.current.update_from_controls({"wave_amplitude": "0", "torso_color": "#010203"})

	after = advance_generation(state, 0.0, rng=rng)
	assert after.population[0].wave_amplitude == 0
	assert after.current.torso_color == (1, 2, 3)
	# the replaced parent itself was left alone
	assert state.population[0].torso_color == stored


def test_mutate_once_runs_while_paused(rng):
	state = toggle_pause(seed_population(2, rng))
	after = mutate_once(state, rng=rng)
	assert after.paused is True
	assert after.generation == 1


def test_toggle_pause():
	state = SimulationState(population=())
	paused = toggle_pause(state)
	assert paused.paused is True
	assert state.paused is False
	assert toggle_pause(paused).paused is False


@pytest.mark.parametrize("speed, seconds", [
	(0, 10.0),
	(100, 0.1),
	(-20, 10.0),
	(250, 0.1),
	(50, 1 / 5.05),
])
def test_generation_interval(speed, seconds):
	assert generation_interval(speed) == pytest.approx(seconds)
