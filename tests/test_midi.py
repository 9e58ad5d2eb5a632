import pytest

import ringproof.block
import ringproof.falseness
import ringproof.midi
import ringproof.row
import ringproof.touch


def test_bell_pitches () -> None:

	"""The tenor sounds the tenor note and the treble is highest."""

	assert ringproof.midi.bell_pitches(4) == [65, 64, 62, 60]
	assert ringproof.midi.bell_pitches(8)[0] == 72
	assert ringproof.midi.bell_pitches(8)[-1] == 60

	with pytest.raises(ValueError):
		ringproof.midi.bell_pitches(16, tenor_note=110)


def test_render_rows_with_handstroke_gap () -> None:

	rows = [ringproof.row.Row.from_string(text) for text in ("1234", "2143", "4321")]
	mid = ringproof.midi.render_rows(rows, stage=4)

	assert mid.ticks_per_beat == ringproof.midi.TICKS_PER_BEAT
	assert len(mid.tracks) == 1

	track = mid.tracks[0]
	note_ons = [m for m in track if m.type == "note_on"]

	assert track[0].type == "set_tempo"
	assert track[1].type == "program_change"
	assert track[1].program == ringproof.midi.TUBULAR_BELLS_PROGRAM
	assert track[-1].type == "end_of_track"
	assert len(note_ons) == 12
	assert note_ons[0].time == 0
	assert note_ons[4].time == 0
	assert note_ons[8].time == 120
	assert note_ons[8].note == 60


def test_render_without_gap () -> None:

	rows = list(ringproof.row.extent(4))[:3]
	mid = ringproof.midi.render_rows(rows, stage=4, handstroke_gap=False)

	assert all(m.time == 0 for m in mid.tracks[0] if m.type == "note_on")


def test_false_rows_use_false_velocity (plain_bob_minor: ringproof.block.Block) -> None:

	touch = ringproof.touch.TouchDefinition.repeat(plain_bob_minor, termination="length", length=62)
	mid = ringproof.midi.render_rows(ringproof.falseness.annotate(touch), stage=6, velocity=80, false_velocity=127)

	note_ons = [m for m in mid.tracks[0] if m.type == "note_on"]

	assert len(note_ons) == 62 * 6
	assert {m.velocity for m in note_ons[:60 * 6]} == {80}
	assert {m.velocity for m in note_ons[60 * 6:]} == {127}


def test_stage_mismatch_raises () -> None:

	with pytest.raises(ValueError):
		ringproof.midi.render_rows([ringproof.row.Row.rounds(5)], stage=6)
