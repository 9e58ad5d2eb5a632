"""Calls: substitutions spliced into a single lead.

A :class:`Call` names a position inside a block and the change(s) to ring
there instead.  Bobs and singles are usually lead-end calls, so the default
index of ``-1`` (the last change of the lead) covers the common case.
"""

import dataclasses
import typing

import ringproof.change
import ringproof.errors

if typing.TYPE_CHECKING:
	import ringproof.block


# A resolved change paired with the name of the call that put it there.
CalledChange = typing.Tuple[ringproof.change.Change, typing.Optional[str]]


@dataclasses.dataclass(frozen=True)
class Call:

	"""
	A replacement of one or more changes in a lead.

	Attributes:
		name: Short symbol used in compositions, e.g. ``"-"`` or ``"s"``.
		index: Position of the first replaced change.  Negative values count
			back from the end of the block, so ``-1`` is the lead end.
		replacement: The changes rung instead.
		variable_length: If True, the call replaces ``span`` changes with
			``replacement`` and may lengthen or shorten the lead.  Otherwise
			it replaces exactly ``len(replacement)`` changes.
		span: Number of changes replaced by a variable-length call.

	Example:
		```python
		bob = Call.lead_end("-", Change.from_places([0, 3], 8))   # 14 bob
		single = Call.lead_end("s", Change.from_places([0, 1, 2, 3], 8))
		```
	"""

	name: str
	index: int
	replacement: typing.Tuple[ringproof.change.Change, ...]
	variable_length: bool = False
	span: typing.Optional[int] = None

	def __post_init__ (self) -> None:

		object.__setattr__(self, "replacement", tuple(self.replacement))

		if not self.variable_length:

			if not self.replacement:
				raise ringproof.errors.MalformedTouch(f"Call {self.name!r} has no replacement changes")

			if self.span is not None and self.span != len(self.replacement):
				raise ringproof.errors.MalformedTouch(
					f"Call {self.name!r} replaces {self.span} changes with {len(self.replacement)}; "
					"mark it variable_length to change the lead length"
				)

			object.__setattr__(self, "span", len(self.replacement))

		elif self.span is None or self.span < 0:
			raise ringproof.errors.MalformedTouch(f"Variable-length call {self.name!r} needs a non-negative span")

		stages = {c.stage for c in self.replacement}

		if len(stages) > 1:
			raise ringproof.errors.InvalidChange(f"Call {self.name!r} mixes stages {sorted(stages)}")

	@classmethod
	def lead_end (cls, name: str, change: ringproof.change.Change) -> "Call":

		"""Return a call that replaces the last change of the lead."""

		return cls(name=name, index=-1, replacement=(change,))

	@property
	def stage (self) -> typing.Optional[int]:

		"""The stage of the replacement changes, or None for an empty variable-length call."""

		if not self.replacement:
			return None

		return self.replacement[0].stage

	def resolve (self, block: "ringproof.block.Block") -> typing.Tuple[int, int]:

		"""
		Return the ``(start, stop)`` slice of ``block`` this call replaces.

		Raises:
			MalformedTouch: If the block is boundary-only, the stages differ,
				or the replaced span falls outside the block.
		"""

		if not block.is_explicit:
			raise ringproof.errors.MalformedTouch(
				f"Call {self.name!r} cannot be applied to boundary-only block {block.name!r}"
			)

		if self.stage is not None and self.stage != block.stage:
			raise ringproof.errors.MalformedTouch(
				f"Call {self.name!r} is for stage {self.stage} but block {block.name!r} is stage {block.stage}"
			)

		length = len(block.changes)
		start = self.index + length if self.index < 0 else self.index
		assert self.span is not None
		stop = start + self.span

		if start < 0 or stop > length:
			raise ringproof.errors.MalformedTouch(
				f"Call {self.name!r} at index {self.index} (span {self.span}) is outside "
				f"block {block.name!r} of {length} changes"
			)

		return start, stop


def apply_calls (block: "ringproof.block.Block", calls: typing.Sequence[Call]) -> typing.List[CalledChange]:

	"""
	Return the block's changes with ``calls`` spliced in.

	Each entry pairs a change with the name of the call that supplied it, or
	None for a plain change.

	Raises:
		MalformedTouch: If any call is out of range or two calls overlap.
	"""

	spans = sorted((call.resolve(block) + (call,) for call in calls), key=lambda s: (s[0], s[1]))

	for (_, previous_stop, previous), (start, _, current) in zip(spans, spans[1:]):

		if start < previous_stop:
			raise ringproof.errors.MalformedTouch(
				f"Calls {previous.name!r} and {current.name!r} overlap in block {block.name!r}"
			)

	result: typing.List[CalledChange] = []
	position = 0

	for start, stop, call in spans:

		result.extend((change, None) for change in block.changes[position:start])
		result.extend((change, call.name) for change in call.replacement)
		position = stop

	result.extend((change, None) for change in block.changes[position:])

	return result
