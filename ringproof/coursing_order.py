"""Coursing orders.

The coursing order of a lead head lists the working bells in the order they
follow each other through a plain course of Plain Bob, read off the lead head
at the plain places (the even places down to 2nds, then the odd places back
up).  It is written starting from the heaviest bell, which is then usually
left implicit: the plain coursing order on eight bells is ``<753246>``
after the ``8``.

Module-level helpers:
- `plain_places(stage)`: the places the coursing order is read from.
- `plain_bob_lead_head(order, rotation)`: the Plain Bob lead head with a given coursing order.
"""

import dataclasses
import typing

import ringproof.constants
import ringproof.errors
import ringproof.row


HANDSTROKE = "hand"
BACKSTROKE = "back"

# Runs shorter than this in the coursing order are not worth naming.
MIN_RUN_SECTION = 4


def plain_places (stage: int) -> typing.List[int]:

	"""
	Return the places a coursing order is read from, heaviest even place first.

	Example:
		```python
		plain_places(8)  # → [6, 4, 2, 1, 3, 5, 7]
		plain_places(5)  # → [4, 2, 1, 3]
		```
	"""

	if stage < 2:
		raise ringproof.errors.InvalidChange(f"A coursing order needs at least two bells, not {stage}")

	top = ((stage + 1) & ~1) - 2

	return list(range(top, 0, -2)) + list(range(1, stage, 2))


def _zig_zag (start: int, towards: int) -> typing.Iterator[int]:

	"""Yield ``start``, ``towards``, then alternate outwards on either side of ``start``."""

	current, following = start, towards

	while True:
		yield current
		current, following = following, (current - 1 if following > current else current + 1)


@dataclasses.dataclass(frozen=True)
class RunSection:

	"""
	A stretch of the coursing order whose bells are consecutive.

	The bells ``bell_start`` to ``bell_end`` run off the front or back of the
	row at the given stroke in the course where they come together.
	``start`` and ``end`` are (possibly wrapped) indices into the coursing
	order and ``centre`` is the index the run was grown from.
	"""

	start: int
	centre: int
	end: int
	bell_start: int
	bell_end: int
	stroke: str

	def bells (self) -> typing.List[int]:

		"""The bells of the run in the order they are rung."""

		step = 1 if self.bell_end > self.bell_start else -1

		return list(range(self.bell_start, self.bell_end + step, step))

	def __str__ (self) -> str:

		text = "".join(ringproof.constants.bell_to_name(b) for b in self.bells())

		if self.stroke == HANDSTROKE:
			text += "h"

		return text


@dataclasses.dataclass(frozen=True)
class CoursingOrder:

	"""
	A cyclic order of working bells.

	Indexing wraps around, so ``order[-1]`` is the last bell and
	``order[len(order)]`` is the first again.  Orders built from a lead head
	start with the heaviest bell; orders built from text keep the rotation they
	were written in.

	Example:
		```python
		co = CoursingOrder.from_lead_head(Row.from_string("13527486"))
		str(co)    # → "8753246"
		co[-1]     # → 5, the 6
		```
	"""

	order: typing.Tuple[int, ...]

	def __post_init__ (self) -> None:

		order = tuple(self.order)

		if not order:
			raise ringproof.errors.InvalidChange("A coursing order needs at least one bell")

		if len(set(order)) != len(order):
			raise ringproof.errors.InvalidChange(f"A coursing order cannot repeat a bell: {order}")

		object.__setattr__(self, "order", order)

	@classmethod
	def from_string (cls, text: str) -> "CoursingOrder":

		"""Read bell characters as written, e.g. ``"8753246"``."""

		try:
			return cls(tuple(ringproof.constants.name_to_bell(c) for c in text))
		except ValueError as exc:
			raise ringproof.errors.InvalidChange(f"Bad coursing order {text!r}: {exc}") from exc

	@classmethod
	def from_bells (cls, bells: typing.Sequence[int]) -> "CoursingOrder":

		"""Return the cyclic order of ``bells`` rotated to start at the heaviest."""

		if not bells:
			raise ringproof.errors.InvalidChange("A coursing order needs at least one bell")

		heaviest = list(bells).index(max(bells))

		return cls(tuple(bells[heaviest:]) + tuple(bells[:heaviest]))

	@classmethod
	def from_lead_head (cls, lead_head: ringproof.row.Row) -> "CoursingOrder":

		"""Read the bells at the plain places of ``lead_head``."""

		return cls.from_bells([lead_head.bell_at(p) for p in plain_places(lead_head.stage)])

	@classmethod
	def plain (cls, stage: int) -> "CoursingOrder":

		"""The coursing order of rounds, e.g. ``"65324"`` on six bells."""

		return cls.from_lead_head(ringproof.row.Row.rounds(stage))

	def __len__ (self) -> int:

		return len(self.order)

	def __iter__ (self) -> typing.Iterator[int]:

		return iter(self.order)

	def __getitem__ (self, index: int) -> int:

		return self.order[index % len(self.order)]

	def __str__ (self) -> str:

		return "".join(ringproof.constants.bell_to_name(b) for b in self.order)

	def __repr__ (self) -> str:

		return f"<{self}>"

	def _run_from (self, root: int, side: int, step: int) -> typing.Optional[RunSection]:

		"""Grow a run outwards from ``root``, first towards ``side``, with bells changing by ``step``."""

		base = self[root]
		current = last = 0

		for length, index in enumerate(_zig_zag(root, side)):

			if self[index] != base + step * length:
				break

			last, current = current, index

		if length < MIN_RUN_SECTION:
			return None

		return RunSection(
			start = min(current, last),
			centre = root,
			end = max(current, last),
			bell_start = self[current],
			bell_end = self[root],
			stroke = BACKSTROKE if root < side else HANDSTROKE
		)

	def run_sections (self) -> typing.List[RunSection]:

		"""
		Return every run of four or more bells the coursing order brings together.

		Each adjacent pair of consecutive bells is grown outwards in both
		directions.  Sections are ordered by the bell they end on.
		"""

		sections: typing.List[RunSection] = []

		for i in range(len(self.order)):

			a = self[i - 1]
			b = self[i]

			if b - a == 1:
				candidates = (self._run_from(i - 1, i, 1), self._run_from(i, i - 1, -1))
			elif a - b == 1:
				candidates = (self._run_from(i, i - 1, 1), self._run_from(i - 1, i, -1))
			else:
				continue

			sections.extend(section for section in candidates if section is not None)

		return sorted(sections, key=lambda section: section.bell_end)

	def canonical_string (self) -> str:

		"""
		Describe the order without its leading bell, followed by its runs.

		Example:
			```python
			CoursingOrder.from_string("8753462").canonical_string()  # → "CO: <753462> 76543"
			```
		"""

		text = "CO: <" + "".join(ringproof.constants.bell_to_name(b) for b in self.order[1:]) + ">"

		for section in self.run_sections():
			text += f" {section}"

		return text


def plain_bob_lead_head (order: CoursingOrder, rotation: int = 0) -> ringproof.row.Row:

	"""
	Return a Plain Bob lead head whose coursing order is ``order``.

	The treble leads and ``order`` holds every other bell.  ``rotation``
	chooses which of the course's lead heads is returned: rotation 0 puts the
	heaviest bell of ``order`` home, and each further rotation moves one lead
	on through the plain course.

	Raises:
		InvalidChange: If ``order`` does not hold exactly the bells 2 to n.

	Example:
		```python
		co = CoursingOrder.from_string("8753246")
		str(plain_bob_lead_head(co))     # → "12345678"
		str(plain_bob_lead_head(co, 1))  # → "13527486"
		```
	"""

	stage = len(order) + 1

	if sorted(order) != list(range(1, stage)):
		raise ringproof.errors.InvalidChange(f"Coursing order {order} must hold every bell but the treble")

	places = plain_places(stage)
	home = places.index(max(order))
	heaviest = order.order.index(max(order))
	bells = [0] * stage

	for k, place in enumerate(places):
		bells[place] = order[k - home - rotation + heaviest]

	return ringproof.row.Row(tuple(bells))
