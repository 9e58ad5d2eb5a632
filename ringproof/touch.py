"""Touch definitions: which leads to ring, from where, and when to stop.

A :class:`TouchDefinition` is a fully resolved composition.  It holds no rows;
:class:`ringproof.generator.TouchGenerator` produces them on demand.

Termination rules:

- ``"leads"`` - ring every lead once, then emit the row reached (the leftover
  row) as the final row.  A true touch has rounds as its leftover row.
- ``"length"`` - emit exactly ``length`` rows, cycling through the leads as
  often as needed.
- ``"rounds"`` - cycle through the leads until the start row comes up again,
  and emit it as the final row.
- ``"open"`` - cycle through the leads with no natural end.  The consumer stops
  pulling, typically at the first false row.
"""

import dataclasses
import typing

import ringproof.block
import ringproof.call
import ringproof.errors
import ringproof.row


TERMINATE_LEADS = "leads"
TERMINATE_LENGTH = "length"
TERMINATE_ROUNDS = "rounds"
TERMINATE_OPEN = "open"

TERMINATIONS = (TERMINATE_LEADS, TERMINATE_LENGTH, TERMINATE_ROUNDS, TERMINATE_OPEN)

CallSpec = typing.Union[ringproof.call.Call, typing.Sequence[ringproof.call.Call]]


@dataclasses.dataclass(frozen=True)
class Lead:

	"""One block rung once, with any calls applied to this lead only."""

	block: ringproof.block.Block
	calls: typing.Tuple[ringproof.call.Call, ...] = ()

	def __post_init__ (self) -> None:

		object.__setattr__(self, "calls", tuple(self.calls))

	def resolve (self) -> typing.List[ringproof.call.CalledChange]:

		"""
		Return this lead's changes with its calls spliced in.

		Raises:
			MalformedTouch: If a call does not fit the block, or the calls
				leave the lead with no changes.
		"""

		if not self.block.is_explicit:

			if self.calls:
				# Call.resolve raises the descriptive error for boundary blocks.
				self.calls[0].resolve(self.block)

			return []

		changes = ringproof.call.apply_calls(self.block, self.calls)

		if not changes:
			raise ringproof.errors.MalformedTouch(f"Calls leave lead of {self.block.name!r} with no changes")

		return changes

	def lead_head (self) -> ringproof.row.Row:

		"""The transposition across this lead, calls included."""

		if not self.calls:
			return self.block.lead_head

		return ringproof.block.lead_head_of((c for c, _ in self.resolve()), self.block.stage)

	@property
	def call_names (self) -> typing.List[str]:

		return [call.name for call in self.calls]


@dataclasses.dataclass(frozen=True)
class TouchDefinition:

	"""
	A complete, resolved touch.

	Attributes:
		leads: The leads in ringing order.
		start: The first row; rounds when omitted.
		termination: One of ``"leads"``, ``"length"``, ``"rounds"`` or ``"open"``.
		length: Number of rows to emit when ``termination == "length"``.
		name: Optional label carried into reports and log messages.

	Every structural problem is raised from the constructor, so a definition
	that exists can always be played.

	Example:
		```python
		plain_course = TouchDefinition.repeat(plain_bob_minor, termination="rounds")
		bobbed = TouchDefinition.repeat(plain_bob_minor, 3, calls={0: bob, 1: bob, 2: bob})
		```
	"""

	leads: typing.Tuple[Lead, ...]
	start: typing.Optional[ringproof.row.Row] = None
	termination: str = TERMINATE_LEADS
	length: typing.Optional[int] = None
	name: str = ""

	def __post_init__ (self) -> None:

		object.__setattr__(self, "leads", tuple(self.leads))

		if not self.leads:
			raise ringproof.errors.MalformedTouch("A touch needs at least one lead")

		stage = self.leads[0].block.stage

		for number, lead in enumerate(self.leads):

			if lead.block.stage != stage:
				raise ringproof.errors.MalformedTouch(
					f"Lead {number} ({lead.block.name!r}) is stage {lead.block.stage}, expected {stage}"
				)

			# Resolve now so bad calls surface before any row is generated.
			lead.resolve()

		if self.start is None:
			object.__setattr__(self, "start", ringproof.row.Row.rounds(stage))

		elif self.start.stage != stage:
			raise ringproof.errors.MalformedTouch(f"Start row {self.start} is not stage {stage}")

		if self.termination not in TERMINATIONS:
			raise ValueError(f"Unknown termination {self.termination!r}. Expected one of {TERMINATIONS}")

		if self.termination == TERMINATE_LENGTH:
			if self.length is None or self.length < 1:
				raise ringproof.errors.MalformedTouch("A touch of declared length needs length >= 1")

		elif self.length is not None:
			raise ringproof.errors.MalformedTouch(
				f"length is only used with termination {TERMINATE_LENGTH!r}, not {self.termination!r}"
			)

	@classmethod
	def from_blocks (
		cls,
		blocks: typing.Sequence[ringproof.block.Block],
		calls: typing.Optional[typing.Mapping[int, CallSpec]] = None,
		**kwargs: typing.Any
	) -> "TouchDefinition":

		"""
		Build a touch from a list of blocks, with calls keyed by lead number.

		Example:
			```python
			TouchDefinition.from_blocks([bristol, cambridge], calls={1: bob})
			```
		"""

		calls = calls or {}

		for number in calls:
			if number < 0 or number >= len(blocks):
				raise ringproof.errors.MalformedTouch(f"Call at lead {number} but the touch has {len(blocks)} leads")

		leads = [Lead(block, _as_call_tuple(calls.get(number, ()))) for number, block in enumerate(blocks)]

		return cls(leads=tuple(leads), **kwargs)

	@classmethod
	def repeat (
		cls,
		block: ringproof.block.Block,
		count: int = 1,
		calls: typing.Optional[typing.Mapping[int, CallSpec]] = None,
		**kwargs: typing.Any
	) -> "TouchDefinition":

		"""Build a touch that rings ``block`` ``count`` times, calling at the given repetitions."""

		if count < 1:
			raise ringproof.errors.MalformedTouch("A touch needs at least one lead")

		return cls.from_blocks([block] * count, calls=calls, **kwargs)

	@property
	def stage (self) -> int:

		return self.leads[0].block.stage

	@property
	def start_row (self) -> ringproof.row.Row:

		assert self.start is not None
		return self.start

	def pass_length (self) -> int:

		"""Rows emitted by one pass through the leads, the leftover row excluded."""

		return sum(len(lead.resolve()) if lead.block.is_explicit else 1 for lead in self.leads)

	def nominal_length (self) -> int:

		"""Rows one pass through the leads stands for, counting boundary leads in full."""

		return sum(len(lead.resolve()) if lead.block.is_explicit else lead.block.nominal_length for lead in self.leads)

	def pass_head (self) -> ringproof.row.Row:

		"""The transposition across one pass through every lead."""

		head = ringproof.row.Row.rounds(self.stage)

		for lead in self.leads:
			head = head * lead.lead_head()

		return head

	def leftover (self) -> ringproof.row.Row:

		"""The row reached after one pass through every lead."""

		return self.start_row * self.pass_head()

	def with_termination (self, termination: str, length: typing.Optional[int] = None) -> "TouchDefinition":

		"""Return a copy with a different termination rule."""

		return dataclasses.replace(self, termination=termination, length=length)


def _as_call_tuple (spec: CallSpec) -> typing.Tuple[ringproof.call.Call, ...]:

	if isinstance(spec, ringproof.call.Call):
		return (spec,)

	return tuple(spec)
