"""Blocks: the repeating units a touch is built from, usually one lead of a method.

A :class:`Block` is a tagged variant rather than a class hierarchy:

- ``kind == "explicit"`` - an ordered list of changes.  Every row is generated
  and can be proved.
- ``kind == "boundary"`` - only the transposition from the block's first row
  to the next block's first row is known.  The generator jumps straight
  across, so interior rows are never seen and their truth is unknown.

Consumers check :attr:`Block.kind` (or :attr:`Block.is_explicit`) to decide
whether the interior of a lead can be proved.
"""

import dataclasses
import functools
import typing

import ringproof.change
import ringproof.errors
import ringproof.row


EXPLICIT = "explicit"
BOUNDARY = "boundary"

BLOCK_KINDS = (EXPLICIT, BOUNDARY)


@dataclasses.dataclass(frozen=True)
class Block:

	"""
	One lead (or other unit) of changes.

	Use :meth:`explicit`, :meth:`from_places`, :meth:`symmetric` or
	:meth:`boundary` rather than the constructor.

	Attributes:
		kind: ``"explicit"`` or ``"boundary"``.
		stage: Number of bells.
		name: Method or block name, carried onto generated rows.
		changes: The changes of an explicit block.
		transposition: For a boundary block, the permutation taking its first
			row to the next block's first row.
		nominal_length: For a boundary block, how many rows the full lead
			would contain.  Explicit blocks ignore it.
	"""

	kind: str
	stage: int
	name: str = ""
	changes: typing.Tuple[ringproof.change.Change, ...] = ()
	transposition: typing.Optional[ringproof.row.Row] = None
	nominal_length: int = 0

	def __post_init__ (self) -> None:

		object.__setattr__(self, "changes", tuple(self.changes))

		if self.kind not in BLOCK_KINDS:
			raise ValueError(f"Unknown block kind {self.kind!r}. Expected one of {BLOCK_KINDS}")

		if self.kind == EXPLICIT:

			if not self.changes:
				raise ringproof.errors.MalformedTouch(f"Block {self.name!r} has no changes")

			for change in self.changes:
				if change.stage != self.stage:
					raise ringproof.errors.InvalidChange(
						f"Block {self.name!r} is stage {self.stage} but contains a stage {change.stage} change"
					)

			if self.transposition is not None:
				raise ringproof.errors.MalformedTouch(f"Explicit block {self.name!r} cannot also store a transposition")

		else:

			if self.transposition is None:
				raise ringproof.errors.MalformedTouch(f"Boundary block {self.name!r} needs a transposition")

			if self.transposition.stage != self.stage:
				raise ringproof.errors.InvalidChange(
					f"Boundary block {self.name!r} is stage {self.stage} but its transposition is stage "
					f"{self.transposition.stage}"
				)

			if self.changes:
				raise ringproof.errors.MalformedTouch(f"Boundary block {self.name!r} cannot list changes")

			if self.nominal_length < 1:
				raise ringproof.errors.MalformedTouch(f"Boundary block {self.name!r} must span at least one row")

	@classmethod
	def explicit (cls, changes: typing.Sequence[ringproof.change.Change], name: str = "") -> "Block":

		"""Build a block from a non-empty list of changes."""

		if not changes:
			raise ringproof.errors.MalformedTouch(f"Block {name!r} has no changes")

		return cls(kind=EXPLICIT, stage=changes[0].stage, name=name, changes=tuple(changes))

	@classmethod
	def from_places (cls, place_lists: typing.Sequence[typing.Iterable[int]], stage: int, name: str = "") -> "Block":

		"""
		Build a block from the places made at each change.

		Example:
			```python
			# Plain Bob Minor: x16x16x16x16x16x12
			x, sixteen, twelve = [], [0, 5], [0, 1]
			block = Block.from_places([x, sixteen] * 5 + [x, twelve], 6, name="Plain Bob")
			```
		"""

		return cls.explicit([ringproof.change.Change.from_places(p, stage) for p in place_lists], name=name)

	@classmethod
	def symmetric (
		cls,
		half_lead: typing.Sequence[ringproof.change.Change],
		lead_end: ringproof.change.Change,
		name: str = ""
	) -> "Block":

		"""
		Build a palindromic lead from its first half and its lead-end change.

		The half lead is rung forwards, then backwards without repeating the
		half-lead change, then the lead-end change.
		"""

		if not half_lead:
			raise ringproof.errors.MalformedTouch(f"Block {name!r} has an empty half lead")

		changes = list(half_lead) + list(reversed(half_lead[:-1])) + [lead_end]
		return cls.explicit(changes, name=name)

	@classmethod
	def boundary (cls, transposition: ringproof.row.Row, nominal_length: int, name: str = "") -> "Block":

		"""Build a block known only by the transposition across it."""

		return cls(
			kind = BOUNDARY,
			stage = transposition.stage,
			name = name,
			transposition = transposition,
			nominal_length = nominal_length
		)

	@property
	def is_explicit (self) -> bool:

		return self.kind == EXPLICIT

	@property
	def length (self) -> int:

		"""Number of rows the generator emits for this block."""

		return len(self.changes) if self.is_explicit else 1

	@property
	def span (self) -> int:

		"""Number of rows this block stands for in the full touch."""

		return len(self.changes) if self.is_explicit else self.nominal_length

	@functools.cached_property
	def lead_head (self) -> ringproof.row.Row:

		"""The transposition from this block's first row to the next block's first row."""

		if not self.is_explicit:
			assert self.transposition is not None
			return self.transposition

		return lead_head_of(self.changes, self.stage)

	def as_boundary (self) -> "Block":

		"""Return a boundary-only copy of this block."""

		return Block.boundary(self.lead_head, self.span, name=self.name)


def lead_head_of (changes: typing.Iterable[ringproof.change.Change], stage: int) -> ringproof.row.Row:

	"""Return the row reached by ringing ``changes`` from rounds."""

	row = ringproof.row.Row.rounds(stage)

	for change in changes:
		row = row.apply(change)

	return row
