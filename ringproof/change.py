"""Changes: the transformations that take one row to the next.

A :class:`Change` is a set of disjoint transpositions over a stage.  Ordinary
changes swap adjacent pairs; discontinuous changes may swap any two places.
Either way a change is its own inverse, so ringing it twice returns to the
starting row.

Changes arrive here already resolved into places.  Reading place-notation
text is left to the caller.
"""

import typing

import ringproof.errors
import ringproof.row


Transposition = typing.Tuple[int, int]


class Change:

	"""
	An immutable set of disjoint place swaps over ``stage`` places.

	Places are zero-based.  Places not named in any swap are made (stay put).

	Example:
		```python
		cross = Change.cross(6)                  # x on six bells
		places = Change.from_places([0, 5], 6)   # 16 on six bells
		jump = Change.from_transpositions([(0, 3)], 6)  # discontinuous swap of 1 and 4
		```
	"""

	__slots__ = ("_stage", "_transpositions", "_row")

	def __init__ (self, transpositions: typing.Iterable[Transposition], stage: int) -> None:

		"""
		Validate and store the swaps.

		Raises:
			InvalidChange: If a place is out of range, swapped with itself, or
				named in more than one swap.
		"""

		if stage < 0:
			raise ringproof.errors.InvalidChange("Stage cannot be negative")

		normalised: typing.List[Transposition] = []
		used: typing.Set[int] = set()

		for pair in transpositions:

			a, b = sorted(pair)

			if a < 0 or b >= stage:
				raise ringproof.errors.InvalidChange(f"Swap {pair} is outside places 0..{stage - 1}")

			if a == b:
				raise ringproof.errors.InvalidChange(f"Place {a} cannot swap with itself")

			if a in used or b in used:
				raise ringproof.errors.InvalidChange(f"Swap {pair} overlaps another swap in the same change")

			used.update((a, b))
			normalised.append((a, b))

		normalised.sort()

		sources = list(range(stage))

		for a, b in normalised:
			sources[a] = b
			sources[b] = a

		object.__setattr__(self, "_stage", stage)
		object.__setattr__(self, "_transpositions", tuple(normalised))
		object.__setattr__(self, "_row", ringproof.row.Row(tuple(sources)))

	@classmethod
	def from_transpositions (cls, transpositions: typing.Iterable[Transposition], stage: int) -> "Change":

		"""Build a change from explicit place pairs."""

		return cls(transpositions, stage)

	@classmethod
	def from_places (cls, places: typing.Iterable[int], stage: int) -> "Change":

		"""
		Build a change from the places that are made.

		Every place not listed swaps with its neighbour, working up from lead.
		An empty ``places`` on an even stage is the cross change.

		Raises:
			InvalidChange: If a place is out of range or the unmade places
				cannot be paired off.
		"""

		made = set(places)

		for place in made:
			if place < 0 or place >= stage:
				raise ringproof.errors.InvalidChange(f"Place {place} is outside 0..{stage - 1}")

		swaps: typing.List[Transposition] = []
		place = 0

		while place < stage:

			if place in made:
				place += 1
				continue

			if place + 1 >= stage or place + 1 in made:
				raise ringproof.errors.InvalidChange(
					f"Place {place} has no neighbour to swap with in places {sorted(made)}"
				)

			swaps.append((place, place + 1))
			place += 2

		return cls(swaps, stage)

	@classmethod
	def cross (cls, stage: int) -> "Change":

		"""Return the change that swaps every adjacent pair (stage must be even)."""

		if stage % 2:
			raise ringproof.errors.InvalidChange(f"A cross change needs an even stage, not {stage}")

		return cls.from_places([], stage)

	@classmethod
	def identity (cls, stage: int) -> "Change":

		"""Return the change in which every bell stays put."""

		return cls([], stage)

	@property
	def stage (self) -> int:

		return self._stage

	@property
	def transpositions (self) -> typing.Tuple[Transposition, ...]:

		"""The swaps, each as ``(low, high)``, in place order."""

		return self._transpositions

	def places (self) -> typing.List[int]:

		"""Return the zero-based places that are made."""

		swapped = {p for pair in self._transpositions for p in pair}
		return [p for p in range(self._stage) if p not in swapped]

	def source (self, place: int) -> int:

		"""Return the place whose bell moves into ``place``."""

		return self._row.bells[place]

	def as_row (self) -> ringproof.row.Row:

		"""Return the change as the row it produces from rounds."""

		return self._row

	def is_identity (self) -> bool:

		return not self._transpositions

	def is_continuous (self) -> bool:

		"""Return True if every swap is between adjacent places."""

		return all(b - a == 1 for a, b in self._transpositions)

	def __setattr__ (self, name: str, value: typing.Any) -> None:

		raise AttributeError(f"Change is immutable; cannot set {name!r}")

	def __delattr__ (self, name: str) -> None:

		raise AttributeError(f"Change is immutable; cannot delete {name!r}")

	def __eq__ (self, other: object) -> bool:

		if not isinstance(other, Change):
			return NotImplemented

		return self._stage == other._stage and self._transpositions == other._transpositions

	def __hash__ (self) -> int:

		return hash((self._stage, self._transpositions))

	def __repr__ (self) -> str:

		return f"Change({list(self._transpositions)!r}, stage={self._stage})"
