"""Falseness detection over a row stream.

:class:`FalsenessEngine` classifies each row as it arrives:

- ``"true"`` - the first time this row has appeared.
- ``"false"`` - a repeat; ``first_index`` says where it was first rung.
- ``"closure"`` - the final row returning to the start row.  This is the
  required repeat that completes a touch, so it is never falseness.
- ``"boundary"`` - a row from a boundary-only block.  It never enters the key
  map and can be neither true nor false.

Only integer row keys are stored, one per distinct row, in a dict (an
open-addressed hash map), so each lookup is O(1).  When the stream ends,
:meth:`FalsenessEngine.finish` groups the repeats into
:class:`FalsenessGroup` records and returns a :class:`ProofReport`.
"""

import dataclasses
import logging
import typing

import ringproof.config
import ringproof.generator
import ringproof.row
import ringproof.touch


logger = logging.getLogger(__name__)


STATUS_TRUE = "true"
STATUS_FALSE = "false"
STATUS_CLOSURE = "closure"
STATUS_BOUNDARY = "boundary"

TRUTH_TRUE = "true"
TRUTH_FALSE = "false"
TRUTH_UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True)
class AnnotatedRow:

	"""
	A generated row with its truth annotation.

	This is what pretty-printers and music scorers consume.
	"""

	generated: ringproof.generator.GeneratedRow
	status: str
	first_index: typing.Optional[int] = None

	@property
	def index (self) -> int:

		return self.generated.index

	@property
	def row (self) -> ringproof.row.Row:

		return self.generated.row

	@property
	def part (self) -> int:

		return self.generated.part

	@property
	def is_false (self) -> bool:

		return self.status == STATUS_FALSE


@dataclasses.dataclass(frozen=True)
class FalseRow:

	"""A single repeat: the row at ``index`` was already rung at ``first_index``."""

	index: int
	first_index: int
	key: int


@dataclasses.dataclass(frozen=True)
class FalsenessGroup:

	"""
	One stretch of rows rung more than once.

	Consecutive false rows that repeat consecutive earlier rows form a single
	group, so ringing a whole lead twice gives one group rather than one per
	row.  An isolated repeat is a group of length 1.

	Attributes:
		row: The first row of the repeated stretch.
		indices: Where each occurrence of the stretch starts, in order.
		ordinal: 0 for the group whose rows were rung first, 1 for the next,
			and so on.  Renderers can map it to a colour.
		length: Number of rows in the stretch.
	"""

	row: ringproof.row.Row
	indices: typing.Tuple[int, ...]
	ordinal: int
	length: int = 1

	@property
	def ranges (self) -> typing.Tuple[typing.Tuple[int, int], ...]:

		"""The inclusive ``(first, last)`` index range of each occurrence."""

		return tuple((index, index + self.length - 1) for index in self.indices)

	@property
	def start (self) -> int:

		return self.indices[0]

	@property
	def end (self) -> int:

		return self.indices[-1] + self.length - 1

	@property
	def span (self) -> typing.Tuple[int, int]:

		"""The index range ``(start, end)`` the group covers, inclusive."""

		return self.start, self.end


@dataclasses.dataclass(frozen=True)
class ProofReport:

	"""
	The result of proving one row stream.

	Attributes:
		truth: ``"true"``, ``"false"`` or ``"unknown"`` (no repeats found, but
			boundary-only rows hide part of the touch).
		complete: True if the final row returned to the start row.
		length: Rows observed.
		nominal_length: Rows the touch stands for, boundary leads counted in full.
		falseness: Every repeat, in stream order.
		groups: Repeats grouped by row.
		boundary_rows: How many rows were boundary-derived.
		require_closure: Whether :attr:`is_true` also demands completion.
		stopped_early: True if proving stopped at the first false row.
	"""

	truth: str
	complete: bool
	length: int
	nominal_length: int
	falseness: typing.Tuple[FalseRow, ...] = ()
	groups: typing.Tuple[FalsenessGroup, ...] = ()
	boundary_rows: int = 0
	require_closure: bool = True
	stopped_early: bool = False

	@property
	def is_true (self) -> bool:

		"""True only for a proved touch that also closes (when closure is required)."""

		return self.truth == TRUTH_TRUE and (self.complete or not self.require_closure)

	def summary (self) -> str:

		"""Return a one-line description, e.g. ``"720 rows, true"``."""

		if self.truth == TRUTH_FALSE:
			plural = "" if len(self.groups) == 1 else "s"
			verdict = f"false ({len(self.falseness)} repeated rows in {len(self.groups)} group{plural})"
		else:
			verdict = self.truth

		if not self.complete:
			verdict += ", does not come round"

		return f"{self.length} rows, {verdict}"


class FalsenessEngine:

	"""
	Classifies rows one at a time.

	Each engine proves one stream; create a new one per touch.

	Example:
		```python
		engine = FalsenessEngine()
		for generated in TouchGenerator(touch):
			annotated = engine.observe(generated)
		report = engine.finish()
		```
	"""

	def __init__ (self, require_closure: bool = True) -> None:

		self.require_closure = require_closure

		self._first_seen: typing.Dict[int, int] = {}
		self._falseness: typing.List[FalseRow] = []
		self._start: typing.Optional[ringproof.row.Row] = None
		self._stage = 0
		self._length = 0
		self._nominal_length = 0
		self._boundary_rows = 0
		self._complete = False
		self._finished = False

	def observe (self, generated: ringproof.generator.GeneratedRow) -> AnnotatedRow:

		"""
		Record one row and return its annotation.

		Raises:
			ValueError: If rows arrive out of order, change stage, or arrive
				after :meth:`finish`.
		"""

		if self._finished:
			raise ValueError("Engine has already finished; create a new one for another touch")

		if generated.index != self._length:
			raise ValueError(f"Expected row {self._length}, got row {generated.index}")

		row = generated.row

		if self._start is None:
			self._start = row
			self._stage = row.stage

		elif row.stage != self._stage:
			raise ValueError(f"Row {generated.index} is stage {row.stage}, expected {self._stage}")

		self._length += 1
		self._nominal_length += generated.span

		if generated.final and generated.index > 0 and row == self._start:
			self._complete = True
			return AnnotatedRow(generated, STATUS_CLOSURE)

		if generated.boundary:
			self._boundary_rows += 1
			return AnnotatedRow(generated, STATUS_BOUNDARY)

		key = row.key
		first_index = self._first_seen.get(key)

		if first_index is None:
			self._first_seen[key] = generated.index
			return AnnotatedRow(generated, STATUS_TRUE)

		self._falseness.append(FalseRow(index=generated.index, first_index=first_index, key=key))
		logger.debug(f"Row {generated.index} ({row}) repeats row {first_index}")

		return AnnotatedRow(generated, STATUS_FALSE, first_index)

	def annotate (self, rows: typing.Iterable[ringproof.generator.GeneratedRow]) -> typing.Iterator[AnnotatedRow]:

		"""Observe ``rows`` lazily, yielding each annotation as it is made."""

		for generated in rows:
			yield self.observe(generated)

	def lookup (self, row: ringproof.row.Row) -> typing.Optional[int]:

		"""Return the index where ``row`` was first rung, or None."""

		return self._first_seen.get(row.key)

	def first_occurrences (self) -> typing.Iterator[typing.Tuple[int, int]]:

		"""Yield ``(key, first_index)`` for every distinct proved row, in stream order."""

		return iter(self._first_seen.items())

	@property
	def stage (self) -> int:

		return self._stage

	@property
	def false_count (self) -> int:

		return len(self._falseness)

	def finish (self, stopped_early: bool = False) -> ProofReport:

		"""
		Close the stream, build the report and release the key map.
		"""

		if self._finished:
			raise ValueError("Engine has already finished")

		self._finished = True

		if self._falseness:
			truth = TRUTH_FALSE
		elif self._boundary_rows:
			truth = TRUTH_UNKNOWN
		else:
			truth = TRUTH_TRUE

		report = ProofReport(
			truth = truth,
			complete = self._complete,
			length = self._length,
			nominal_length = self._nominal_length,
			falseness = tuple(self._falseness),
			groups = group_falseness(self._falseness, self._stage),
			boundary_rows = self._boundary_rows,
			require_closure = self.require_closure,
			stopped_early = stopped_early
		)

		self._first_seen = {}
		self._falseness = []

		return report


def group_falseness (falseness: typing.Sequence[FalseRow], stage: int) -> typing.Tuple[FalsenessGroup, ...]:

	"""
	Merge repeats into maximal stretches and group the stretches by what they repeat.

	A false row extends the current stretch when both its index and the index
	it repeats are one past the stretch's.  Stretches repeating the same
	earlier stretch share a group, which lists the first occurrence and every
	repeat.  Groups are ordered by where their rows were first rung.
	"""

	# Each run is [start index, first start index, length, key of first row].
	runs: typing.List[typing.List[int]] = []

	for false_row in falseness:

		if runs:
			start, first_start, length, _ = runs[-1]

			if false_row.index == start + length and false_row.first_index == first_start + length:
				runs[-1][2] += 1
				continue

		runs.append([false_row.index, false_row.first_index, 1, false_row.key])

	occurrences: typing.Dict[typing.Tuple[int, int], typing.List[int]] = {}
	keys: typing.Dict[typing.Tuple[int, int], int] = {}

	for start, first_start, length, key in runs:

		identity = (first_start, length)

		if identity not in occurrences:
			occurrences[identity] = [first_start]
			keys[identity] = key

		occurrences[identity].append(start)

	ordered = sorted(occurrences.items(), key=lambda item: (item[0][0], item[1][1]))

	return tuple(
		FalsenessGroup(
			row = ringproof.row.Row.from_key(keys[identity], stage),
			indices = tuple(indices),
			ordinal = ordinal,
			length = identity[1]
		)
		for ordinal, (identity, indices) in enumerate(ordered)
	)


def prove (
	touch: ringproof.touch.TouchDefinition,
	config: typing.Optional[ringproof.config.ProverConfig] = None
) -> ProofReport:

	"""
	Generate ``touch`` and prove it.

	With ``config.stop_at_first_false`` the generator is abandoned at the
	first repeat, which is how open-ended touches are explored.

	Raises:
		MalformedTouch: If the touch cannot be generated.
	"""

	config = config or ringproof.config.ProverConfig()
	engine = FalsenessEngine(require_closure=config.require_closure)
	stopped_early = False

	for annotated in engine.annotate(ringproof.generator.TouchGenerator(touch, config)):

		if config.stop_at_first_false and annotated.is_false:
			stopped_early = not annotated.generated.final
			break

	report = engine.finish(stopped_early=stopped_early)
	logger.info(f"Proved {touch.name or 'touch'}: {report.summary()}")

	return report


def annotate (
	touch: ringproof.touch.TouchDefinition,
	config: typing.Optional[ringproof.config.ProverConfig] = None
) -> typing.Iterator[AnnotatedRow]:

	"""Yield the annotated rows of ``touch`` lazily, for printers and scorers."""

	config = config or ringproof.config.ProverConfig()
	engine = FalsenessEngine(require_closure=config.require_closure)

	yield from engine.annotate(ringproof.generator.TouchGenerator(touch, config))
