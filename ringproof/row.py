"""Rows: immutable permutations of bells.

A :class:`Row` is both a moment of ringing (the order the bells strike in) and
a permutation that can act on other rows.  Bells are numbered from 0 (the
treble) and written with the characters in :data:`ringproof.constants.BELL_NAMES`,
so ``Row.from_string("2143")`` holds the bells ``(1, 0, 3, 2)``.

Module-level helpers:
- `compose(a, b)`: the product ``a * b`` where ``(a * b)[i] == a[b[i]]``.
- `closure(row)`: every power of a row, starting at rounds.
- `extent(stage)`: every row of a stage, lazily, in lexicographic order.
"""

import dataclasses
import itertools
import math
import typing

import ringproof.constants
import ringproof.errors

if typing.TYPE_CHECKING:
	import ringproof.change


@dataclasses.dataclass(frozen=True)
class Row:

	"""
	An immutable permutation of ``stage`` bells.

	Equality and hashing depend only on the bell sequence, so two rows reached
	by different routes always compare and hash identically.  The integer
	:attr:`key` is the same identity in compact form and is what the falseness
	engine stores.

	Example:
		```python
		row = Row.from_string("13527486")
		row.stage        # → 8
		str(row * row)   # → "15738264"
		row.is_rounds()  # → False
		```
	"""

	bells: typing.Tuple[int, ...]

	def __post_init__ (self) -> None:

		bells = tuple(self.bells)

		if len(bells) > ringproof.constants.MAX_STAGE:
			raise ringproof.errors.InvalidChange(
				f"Stage {len(bells)} exceeds the maximum of {ringproof.constants.MAX_STAGE}"
			)

		if sorted(bells) != list(range(len(bells))):
			raise ringproof.errors.InvalidChange(f"Not a permutation of 0..{len(bells) - 1}: {bells}")

		object.__setattr__(self, "bells", bells)

	# -- Construction ------------------------------------------------------

	@classmethod
	def rounds (cls, stage: int) -> "Row":

		"""Return the identity row on ``stage`` bells."""

		if stage < 0:
			raise ringproof.errors.InvalidChange("Stage cannot be negative")

		return cls(tuple(range(stage)))

	@classmethod
	def backrounds (cls, stage: int) -> "Row":

		"""Return the row with the bells in reverse order."""

		return cls(tuple(reversed(range(stage))))

	@classmethod
	def from_string (cls, text: str) -> "Row":

		"""
		Build a row from bell characters, e.g. ``"1234"`` or ``"2143657890ET"``.

		Raises:
			InvalidChange: If a character is not a bell name or the bells
				do not form a permutation.
		"""

		try:
			bells = tuple(ringproof.constants.name_to_bell(c) for c in text)
		except ValueError as exc:
			raise ringproof.errors.InvalidChange(f"Cannot read row {text!r}: {exc}") from exc

		return cls(bells)

	@classmethod
	def from_key (cls, key: int, stage: int) -> "Row":

		"""Rebuild the row whose canonical :attr:`key` is ``key``."""

		if key < 0 or key >= stage ** stage:
			raise ringproof.errors.InvalidChange(f"Key {key} is out of range for stage {stage}")

		bells = []

		for _ in range(stage):
			key, bell = divmod(key, stage)
			bells.append(bell)

		return cls(tuple(reversed(bells)))

	# -- Basic properties ----------------------------------------------------

	@property
	def stage (self) -> int:

		"""The number of bells in the row."""

		return len(self.bells)

	@property
	def key (self) -> int:

		"""
		The canonical integer identity of this row.

		Reads the row as a number in base ``stage``; distinct rows of the same
		stage always have distinct keys.
		"""

		value = 0
		stage = len(self.bells)

		for bell in self.bells:
			value = value * stage + bell

		return value

	def __len__ (self) -> int:

		return len(self.bells)

	def __iter__ (self) -> typing.Iterator[int]:

		return iter(self.bells)

	def __getitem__ (self, place: int) -> int:

		return self.bells[place]

	def __str__ (self) -> str:

		return "".join(ringproof.constants.BELL_NAMES[b] for b in self.bells)

	def __repr__ (self) -> str:

		return f"Row({str(self)!r})"

	def bell_at (self, place: int) -> int:

		"""Return the bell ringing in ``place`` (zero-based)."""

		return self.bells[place]

	def place_of (self, bell: int) -> int:

		"""Return the zero-based place ``bell`` occupies."""

		try:
			return self.bells.index(bell)
		except ValueError:
			raise ValueError(f"Bell {bell} not found in {self}") from None

	# -- Algebra ------------------------------------------------------------

	def apply (self, change: "ringproof.change.Change") -> "Row":

		"""
		Return the row produced by ringing ``change`` from this row.

		The change says which place each new place is filled from, so
		``result[i] == self[change.source(i)]``.

		Raises:
			InvalidChange: If the change is for a different stage.
		"""

		if change.stage != self.stage:
			raise ringproof.errors.InvalidChange(
				f"Cannot apply a stage {change.stage} change to a stage {self.stage} row"
			)

		return Row(tuple(self.bells[source] for source in change.as_row().bells))

	def __mul__ (self, other: "Row") -> "Row":

		if not isinstance(other, Row):
			return NotImplemented

		return compose(self, other)

	def inverse (self) -> "Row":

		"""Return the row that undoes this one, so ``row * row.inverse()`` is rounds."""

		inverse = [0] * self.stage

		for place, bell in enumerate(self.bells):
			inverse[bell] = place

		return Row(tuple(inverse))

	def power (self, exponent: int) -> "Row":

		"""Return this row composed with itself ``exponent`` times (negative allowed)."""

		base = self if exponent >= 0 else self.inverse()
		result = Row.rounds(self.stage)
		remaining = abs(exponent)

		while remaining:
			if remaining & 1:
				result = result * base
			base = base * base
			remaining >>= 1

		return result

	def cycles (self) -> typing.List[typing.Tuple[int, ...]]:

		"""Return the disjoint cycles of the permutation, fixed bells included."""

		seen = [False] * self.stage
		cycles: typing.List[typing.Tuple[int, ...]] = []

		for start in range(self.stage):

			if seen[start]:
				continue

			cycle = []
			bell = start

			while not seen[bell]:
				seen[bell] = True
				cycle.append(bell)
				bell = self.bells[bell]

			cycles.append(tuple(cycle))

		return cycles

	def order (self) -> int:

		"""Return the smallest ``n > 0`` with ``row.power(n)`` equal to rounds."""

		result = 1

		for cycle in self.cycles():
			result = result * len(cycle) // math.gcd(result, len(cycle))

		return result

	def parity (self) -> int:

		"""Return 0 for an even permutation and 1 for an odd one."""

		return sum(len(cycle) - 1 for cycle in self.cycles()) & 1

	# -- Predicates ----------------------------------------------------------

	def is_rounds (self) -> bool:

		"""Return True if every bell is in its home place."""

		return all(bell == place for place, bell in enumerate(self.bells))

	def is_backrounds (self) -> bool:

		"""Return True if the bells are in reverse order."""

		stage = self.stage
		return all(bell == stage - 1 - place for place, bell in enumerate(self.bells))

	def is_continuous_with (self, other: "Row") -> bool:

		"""
		Return True if ``other`` follows this row by swapping only adjacent pairs.

		Rows of different stages are never continuous.
		"""

		if self.stage != other.stage:
			return False

		a = self.bells
		b = other.bells
		i = 0

		while i < len(a):

			if a[i] == b[i]:
				i += 1

			elif i + 1 < len(a) and a[i] == b[i + 1] and a[i + 1] == b[i]:
				i += 2

			else:
				return False

		return True

	def is_full_cyclic (self) -> bool:

		"""Return True if the row is rounds rotated, e.g. ``34567812``."""

		stage = self.stage

		if stage == 0:
			return False

		start = self.bells[0]
		return all(bell == (start + i) % stage for i, bell in enumerate(self.bells))

	def is_reverse_full_cyclic (self) -> bool:

		"""Return True if the row is backrounds rotated, e.g. ``21876543``."""

		stage = self.stage

		if stage == 0:
			return False

		start = self.bells[0] + stage
		return all(bell == (start - i) % stage for i, bell in enumerate(self.bells))

	def is_fixed_treble_cyclic (self) -> bool:

		"""Return True if the treble leads and the rest are rotated rounds, e.g. ``14567823``."""

		stage = self.stage

		if stage <= 2 or self.bells[0] != 0:
			return False

		start = self.bells[1]
		return all(self.bells[i + 1] == _wrap_above_treble(start + i, stage) for i in range(stage - 1))

	def is_reverse_fixed_treble_cyclic (self) -> bool:

		"""Return True if the treble leads and the rest are rotated backrounds, e.g. ``13287654``."""

		stage = self.stage

		if stage <= 2 or self.bells[0] != 0:
			return False

		start = self.bells[-1]
		return all(self.bells[stage - 1 - i] == _wrap_above_treble(start + i, stage) for i in range(stage - 1))

	def run_length_off_front (self) -> int:

		"""Return the length of the stepwise run starting at lead."""

		return _run_length(self.bells)

	def run_length_off_back (self) -> int:

		"""Return the length of the stepwise run ending at the back."""

		return _run_length(tuple(reversed(self.bells)))


def _wrap_above_treble (bell: int, stage: int) -> int:

	return bell - stage + 1 if bell >= stage else bell


def _run_length (bells: typing.Tuple[int, ...]) -> int:

	if not bells:
		return 0

	length = 1

	for previous, current in zip(bells, bells[1:]):
		if current - previous not in (-1, 1):
			break
		length += 1

	return length


def compose (a: Row, b: Row) -> Row:

	"""
	Return the product ``a * b``, defined by ``(a * b)[i] == a[b[i]]``.

	Composing a part head with a row of part 0 gives the matching row of the
	next part.

	Raises:
		InvalidChange: If the rows are of different stages.
	"""

	if a.stage != b.stage:
		raise ringproof.errors.InvalidChange(f"Cannot compose rows of stage {a.stage} and {b.stage}")

	return Row(tuple(a.bells[i] for i in b.bells))


def closure (row: Row) -> typing.List[Row]:

	"""
	Return every power of ``row``, starting with rounds.

	Example:
		```python
		[str(r) for r in closure(Row.from_string("13425678"))]
		# → ["12345678", "13425678", "14235678"]
		```
	"""

	rounds = Row.rounds(row.stage)
	powers = [rounds]
	accum = row

	while accum != rounds:
		powers.append(accum)
		accum = accum * row

	return powers


def extent (stage: int) -> typing.Iterator[Row]:

	"""Yield every row on ``stage`` bells in lexicographic order."""

	for bells in itertools.permutations(range(stage)):
		yield Row(bells)
