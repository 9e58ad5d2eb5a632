import typing

import pytest

import ringproof.block
import ringproof.call
import ringproof.config
import ringproof.falseness
import ringproof.generator
import ringproof.row
import ringproof.touch


def _stream (rows: typing.Sequence[ringproof.row.Row], boundary: bool = False) -> typing.List[ringproof.generator.GeneratedRow]:

	"""Wrap rows as a generated stream whose last row is final."""

	return [
		ringproof.generator.GeneratedRow(index=i, row=row, boundary=boundary and i < len(rows) - 1, final=i == len(rows) - 1)
		for i, row in enumerate(rows)
	]


def test_plain_course_is_true (plain_bob_minor: ringproof.block.Block) -> None:

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="rounds")
	report = ringproof.falseness.prove(touch)

	assert report.truth == "true"
	assert report.complete
	assert report.is_true
	assert report.length == 61
	assert report.falseness == ()
	assert report.summary() == "61 rows, true"


def test_bobbed_touch_is_true (plain_bob_minor: ringproof.block.Block, minor_bob: ringproof.call.Call) -> None:

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, 3, calls={0: minor_bob, 1: minor_bob, 2: minor_bob})

	assert ringproof.falseness.prove(touch).summary() == "37 rows, true"


def test_repeat_is_grouped_with_its_first_occurrence () -> None:

	"""A row rung at 3 and again at 7 forms one group [3, 7]."""

	rows = list(ringproof.row.extent(4))[:7]
	stream = _stream(rows + [rows[3], rows[0]])

	engine = ringproof.falseness.FalsenessEngine()
	statuses = [engine.observe(g).status for g in stream]
	report = engine.finish()

	assert statuses == ["true"] * 7 + ["false", "closure"]
	assert report.truth == "false"
	assert report.complete
	assert not report.is_true
	assert report.falseness == (ringproof.falseness.FalseRow(index=7, first_index=3, key=rows[3].key),)
	assert len(report.groups) == 1
	assert report.groups[0].indices == (3, 7)
	assert report.groups[0].row == rows[3]
	assert report.groups[0].span == (3, 7)
	assert report.groups[0].ordinal == 0


def test_rounds_in_the_middle_is_false () -> None:

	"""Only the final row may repeat the start row without being false."""

	rounds = ringproof.row.Row.rounds(4)
	swapped = ringproof.row.Row.from_string("2134")
	stream = _stream([rounds, swapped, rounds, swapped, rounds])

	engine = ringproof.falseness.FalsenessEngine()
	annotated = list(engine.annotate(stream))
	report = engine.finish()

	assert annotated[2].status == "false"
	assert annotated[2].first_index == 0
	assert annotated[3].first_index == 1
	assert annotated[4].status == "closure"
	assert len(report.groups) == 1
	assert report.groups[0].indices == (0, 2)
	assert report.groups[0].length == 2
	assert report.groups[0].ranges == ((0, 1), (2, 3))


def test_touch_that_does_not_come_round () -> None:

	rows = list(ringproof.row.extent(4))[:5]

	engine = ringproof.falseness.FalsenessEngine()
	engine_open = ringproof.falseness.FalsenessEngine(require_closure=False)

	for generated in _stream(rows):
		engine.observe(generated)
		engine_open.observe(generated)

	report = engine.finish()
	open_report = engine_open.finish()

	assert report.truth == "true"
	assert not report.complete
	assert not report.is_true
	assert report.summary() == "5 rows, true, does not come round"
	assert open_report.is_true


def test_length_past_the_plain_course_is_false (plain_bob_minor: ringproof.block.Block) -> None:

	"""Ringing on past rounds repeats the start of the course."""

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="length", length=73)
	report = ringproof.falseness.prove(touch)

	assert report.truth == "false"
	assert not report.complete
	assert len(report.falseness) == 13
	assert report.falseness[0].index == 60
	assert report.falseness[0].first_index == 0
	assert len(report.groups) == 1
	assert report.groups[0].row.is_rounds()
	assert report.groups[0].ranges == ((0, 12), (60, 72))
	assert report.groups[0].span == (0, 72)
	assert report.summary() == "73 rows, false (13 repeated rows in 1 group), does not come round"


def test_consecutive_repeats_merge_into_one_group () -> None:

	"""Rows 7-9 repeating rows 2-4 form one group; row 10 repeating row 1 stands alone."""

	rows = list(ringproof.row.extent(4))[:7]
	stream = _stream(rows + [rows[2], rows[3], rows[4], rows[1], rows[0]])

	engine = ringproof.falseness.FalsenessEngine()

	for generated in stream:
		engine.observe(generated)

	report = engine.finish()

	assert len(report.falseness) == 4
	assert [(g.indices, g.length) for g in report.groups] == [((1, 10), 1), ((2, 7), 3)]
	assert report.groups[1].ranges == ((2, 4), (7, 9))
	assert report.groups[1].row == rows[2]
	assert [g.ordinal for g in report.groups] == [0, 1]
	assert "4 repeated rows in 2 groups" in report.summary()


def test_stretch_rung_three_times_is_one_group () -> None:

	rows = list(ringproof.row.extent(4))[:4]
	stream = _stream(rows + [rows[1], rows[2], rows[1], rows[2], rows[0]])

	engine = ringproof.falseness.FalsenessEngine()

	for generated in stream:
		engine.observe(generated)

	report = engine.finish()

	assert len(report.groups) == 1
	assert report.groups[0].indices == (1, 4, 6)
	assert report.groups[0].ranges == ((1, 2), (4, 5), (6, 7))


def test_shorter_repeat_of_a_stretch_gets_its_own_group (plain_bob_minor: ringproof.block.Block) -> None:

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="length", length=130)
	report = ringproof.falseness.prove(touch)

	assert len(report.groups) == 2
	assert report.groups[0].ranges == ((0, 59), (60, 119))
	assert report.groups[1].ranges == ((0, 9), (120, 129))
