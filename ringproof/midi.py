"""Render a touch as MIDI so it can be heard.

Each row becomes one blow per bell, treble first, with the bells tuned to a
descending major scale above the tenor.  Ringing leaves a one-blow gap before
every handstroke row (the "open handstroke lead"), which is reproduced here.

The result is an in-memory ``mido.MidiFile``; saving it is up to the caller::

	render_rows(rows, stage=8).save("touch.mid")
"""

import logging
import typing

import mido

import ringproof.falseness
import ringproof.row


logger = logging.getLogger(__name__)


MAJOR_SCALE = [0, 2, 4, 5, 7, 9, 11]

# General MIDI program 15 (zero-based 14).
TUBULAR_BELLS_PROGRAM = 14

TICKS_PER_BEAT = 480

RowLike = typing.Union[ringproof.row.Row, ringproof.falseness.AnnotatedRow]


def bell_pitches (stage: int, tenor_note: int = 60) -> typing.List[int]:

	"""
	Return the MIDI note for each bell, treble first.

	The tenor (heaviest bell) sounds ``tenor_note`` and each lighter bell is
	the next note up the major scale.

	Raises:
		ValueError: If the highest bell would be above MIDI note 127.
	"""

	pitches = []

	for degree in range(stage):
		octave, step = divmod(degree, len(MAJOR_SCALE))
		pitches.append(tenor_note + 12 * octave + MAJOR_SCALE[step])

	pitches.reverse()

	if pitches and pitches[0] > 127:
		raise ValueError(f"Stage {stage} with tenor note {tenor_note} exceeds the MIDI note range")

	return pitches


def render_rows (
	rows: typing.Iterable[RowLike],
	stage: int,
	bpm: float = 120.0,
	blows_per_beat: int = 4,
	tenor_note: int = 60,
	velocity: int = 90,
	false_velocity: typing.Optional[int] = None,
	channel: int = 0,
	handstroke_gap: bool = True
) -> mido.MidiFile:

	"""
	Render rows to a single-track ``mido.MidiFile``.

	Parameters:
		rows: Rows or annotated rows, in ringing order.
		stage: Number of bells.
		bpm: Tempo, in beats per minute.
		blows_per_beat: How many bells strike per beat.
		tenor_note: MIDI note of the tenor.
		velocity: Velocity of each blow.
		false_velocity: If given, false rows are struck at this velocity so
			they stand out.
		channel: MIDI channel.
		handstroke_gap: Leave one blow of silence before each handstroke row.
	"""

	if blows_per_beat <= 0:
		raise ValueError("blows_per_beat must be positive")

	pitches = bell_pitches(stage, tenor_note)
	blow_ticks = TICKS_PER_BEAT // blows_per_beat

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = TICKS_PER_BEAT
	track = mido.MidiTrack()
	mid.tracks.append(track)

	track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm), time=0))
	track.append(mido.Message("program_change", channel=channel, program=TUBULAR_BELLS_PROGRAM, time=0))

	count = 0

	for position, item in enumerate(rows):

		if isinstance(item, ringproof.falseness.AnnotatedRow):
			row = item.row
			row_velocity = false_velocity if (false_velocity is not None and item.is_false) else velocity
		else:
			row = item
			row_velocity = velocity

		if row.stage != stage:
			raise ValueError(f"Row {row} is not stage {stage}")

		# Handstrokes are the even rows; the very first row starts immediately.
		gap = blow_ticks if (handstroke_gap and position > 0 and position % 2 == 0) else 0

		for bell in row:
			track.append(mido.Message("note_on", channel=channel, note=pitches[bell], velocity=row_velocity, time=gap))
			track.append(mido.Message("note_off", channel=channel, note=pitches[bell], velocity=0, time=blow_ticks))
			gap = 0

		count += 1

	track.append(mido.MetaMessage("end_of_track", time=0))
	logger.debug(f"Rendered {count} rows to MIDI")

	return mid
