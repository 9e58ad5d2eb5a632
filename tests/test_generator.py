import pytest

import ringproof.block
import ringproof.call
import ringproof.change
import ringproof.config
import ringproof.errors
import ringproof.generator
import ringproof.row
import ringproof.touch


def test_cross_on_eight_for_three_rows () -> None:

	"""Ringing x on eight bells for three rows comes straight back to rounds."""

	block = ringproof.block.Block.explicit([ringproof.change.Change.cross(8)])
	touch = ringproof.touch.TouchDefinition.repeat(block, termination="length", length=3)

	rows = list(ringproof.generator.TouchGenerator(touch))

	assert [str(g.row) for g in rows] == ["12345678", "21436587", "12345678"]
	assert [g.index for g in rows] == [0, 1, 2]
	assert [g.final for g in rows] == [False, False, True]


def test_plain_course_ends_at_rounds (plain_bob_minor: ringproof.block.Block) -> None:

	"""Rounds termination cycles the lead until rounds comes up again."""

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="rounds")
	rows = list(ringproof.generator.TouchGenerator(touch))

	assert len(rows) == 61
	assert rows[-1].row.is_rounds()
	assert rows[-1].final
	assert not any(g.row.is_rounds() for g in rows[1:-1])


def test_lead_positions_and_methods (plain_bob_minor: ringproof.block.Block) -> None:

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="rounds")
	rows = list(ringproof.generator.TouchGenerator(touch))

	assert rows[12].lead == 1
	assert rows[12].lead_index == 0
	assert str(rows[12].row) == "135264"
	assert rows[13].lead_index == 1
	assert rows[48].lead == 4
	assert all(g.method == "Plain Bob" for g in rows)


def test_leads_termination_emits_leftover_row (plain_bob_minor: ringproof.block.Block, minor_bob: ringproof.call.Call) -> None:

	"""Leads termination rings each lead once and ends on the leftover row."""

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, 3, calls={0: minor_bob, 1: minor_bob, 2: minor_bob})
	rows = list(ringproof.generator.generate(touch))

	assert len(rows) == 37
	assert rows[-1].final
	assert rows[-1].row.is_rounds()
	assert rows[12].call == "-"
	assert str(rows[12].row) == "123564"
	assert rows[11].call is None


def test_leads_termination_on_a_false_leftover (plain_bob_minor: ringproof.block.Block) -> None:

	"""The leftover row is emitted even when it is not rounds."""

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, 2)
	rows = list(ringproof.generator.TouchGenerator(touch))

	assert len(rows) == 25
	assert str(rows[-1].row) == str(plain_bob_minor.lead_head.power(2))


def test_discontinuous_block () -> None:

	"""A block whose only change swaps places one and four comes round after two rows."""

	block = ringproof.block.Block.explicit([ringproof.change.Change.from_transpositions([(0, 3)], 4)], name="Jump")
	touch = ringproof.touch.TouchDefinition.repeat(block, termination="rounds")

	rows = list(ringproof.generator.TouchGenerator(touch))

	assert [str(g.row) for g in rows] == ["1234", "4231", "1234"]


def test_boundary_blocks_jump_across_leads (plain_bob_minor: ringproof.block.Block) -> None:

	"""Boundary-only leads emit just their lead heads."""

	boundary = plain_bob_minor.as_boundary()
	touch = ringproof.touch.TouchDefinition.repeat(boundary, 5)
	rows = list(ringproof.generator.TouchGenerator(touch))

	assert len(rows) == 6
	assert [g.boundary for g in rows] == [True] * 5 + [False]
	assert [g.span for g in rows] == [12] * 5 + [1]
	assert str(rows[1].row) == "135264"
	assert rows[-1].row.is_rounds()


def test_mixed_boundary_and_explicit_leads (plain_bob_minor: ringproof.block.Block) -> None:

	touch = ringproof.touch.TouchDefinition.from_blocks([plain_bob_minor.as_boundary(), plain_bob_minor], termination="length", length=4)
	rows = list(ringproof.generator.TouchGenerator(touch))

	assert rows[0].boundary
	assert not rows[1].boundary
	assert rows[1].row == plain_bob_minor.lead_head
	assert rows[2].lead_index == 1


def test_generation_is_deterministic (plain_bob_minor: ringproof.block.Block, minor_bob: ringproof.call.Call) -> None:

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, 3, calls={1: minor_bob}, termination="rounds")

	first = list(ringproof.generator.TouchGenerator(touch))
	second = list(ringproof.generator.TouchGenerator(touch))

	assert first == second


def test_safety_bound_in_rounds_mode (plain_bob_minor: ringproof.block.Block) -> None:

	"""A touch that will not come round within max_rows raises while generating."""

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="rounds")
	config = ringproof.config.ProverConfig(max_rows=10)
	generator = ringproof.generator.TouchGenerator(touch, config)

	rows = []

	with pytest.raises(ringproof.errors.MalformedTouch):
		for generated in generator:
			rows.append(generated)

	assert len(rows) == 10


def test_safety_bound_checked_up_front (plain_bob_minor: ringproof.block.Block) -> None:

	"""Touches whose length is known are refused before any row is generated."""

	config = ringproof.config.ProverConfig(max_rows=30)

	with pytest.raises(ringproof.errors.MalformedTouch):
		ringproof.generator.TouchGenerator(ringproof.touch.TouchDefinition.repeat(plain_bob_minor, 3), config)

	with pytest.raises(ringproof.errors.MalformedTouch):
		ringproof.generator.TouchGenerator(
			ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="length", length=31),
			config
		)


def test_start_row_other_than_rounds (plain_bob_minor: ringproof.block.Block) -> None:

	start = ringproof.row.Row.from_string("654321")
	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="rounds", start=start)
	rows = list(ringproof.generator.TouchGenerator(touch))

	assert rows[0].row == start
	assert rows[-1].row == start
	assert len(rows) == 61
