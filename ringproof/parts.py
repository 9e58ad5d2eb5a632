"""Multi-part proving.

A k-part composition rings the same part k times, each part transposed by a
part head.  If part 0 has rows ``r_i``, part ``p`` has rows ``h_p * r_i`` where
``h_p`` ranges over the :class:`PartGroup` (the powers of a single part head
``g`` for an ordinary cyclic multi-part).

:class:`MultiPartProver` generates and proves part 0 only, keeping a key map
of its rows.  The other parts are then checked by computing ``h * r`` for each
row and group element and looking the key up, which costs
``O(len(part 0) * k)`` key computations and no memory beyond part 0's keys.

Two rows collide when ``h * r_a == r_b``: row ``a`` of part ``p(h)`` equals row
``b`` of part 0, and by symmetry the same clash repeats between every pair of
parts the same distance apart.  A row fixed by a non-identity part head
(``h * r == r``) is also a clash: that row would be rung in two parts.
"""

import collections
import dataclasses
import logging
import typing

import ringproof.config
import ringproof.errors
import ringproof.falseness
import ringproof.generator
import ringproof.row
import ringproof.touch


logger = logging.getLogger(__name__)


class PartGroup:

	"""
	The set of part heads of a multi-part composition.

	``elements[0]`` is always rounds (part 0).  For a cyclic group built by
	:meth:`cyclic`, ``elements[p]`` is ``g ** p``.

	Example:
		```python
		three_part = PartGroup.cyclic(Row.from_string("1342567"), 3)
		three_part.parts  # → 3
		```
	"""

	def __init__ (
		self,
		elements: typing.Sequence[ringproof.row.Row],
		generators: typing.Sequence[ringproof.row.Row],
		cyclic: bool = False
	) -> None:

		"""
		Store the group elements and the generators they came from.

		A cyclic group (``elements[p] == g ** p``) may repeat elements when
		more parts are asked for than the part head's order; proving then
		reports every row as clashing.

		Raises:
			InvalidPartStructure: If the elements are empty, mixed-stage,
				do not start with rounds, or (for a non-cyclic group) contain
				duplicates.
		"""

		if not elements:
			raise ringproof.errors.InvalidPartStructure("A part group needs at least one element")

		stage = elements[0].stage

		if any(element.stage != stage for element in elements):
			raise ringproof.errors.InvalidPartStructure("Part heads must all have the same stage")

		if not elements[0].is_rounds():
			raise ringproof.errors.InvalidPartStructure("The first part head must be rounds")

		if not cyclic and len(set(elements)) != len(elements):
			raise ringproof.errors.InvalidPartStructure("Part heads must be distinct")

		self.stage = stage
		self.elements: typing.Tuple[ringproof.row.Row, ...] = tuple(elements)
		self.generators: typing.Tuple[ringproof.row.Row, ...] = tuple(generators)
		self.is_cyclic = cyclic
		self._index_of: typing.Dict[ringproof.row.Row, int] = {}

		for number, element in enumerate(self.elements):
			self._index_of.setdefault(element, number)

	@classmethod
	def cyclic (cls, part_head: ringproof.row.Row, parts: int) -> "PartGroup":

		"""
		Return the group ``{g^0, g^1, ..., g^(parts-1)}``.

		Raises:
			InvalidPartStructure: If ``parts < 1`` or ``part_head ** parts``
				is not rounds.
		"""

		if parts < 1:
			raise ringproof.errors.InvalidPartStructure(f"Part count must be at least 1, not {parts}")

		if not part_head.power(parts).is_rounds():
			raise ringproof.errors.InvalidPartStructure(
				f"Part head {part_head} has order {part_head.order()}, which does not divide {parts}"
			)

		if part_head.order() != parts:
			logger.warning(f"Part head {part_head} has order {part_head.order()}, less than the {parts} parts requested")

		return cls([part_head.power(p) for p in range(parts)], (part_head,), cyclic=True)

	@classmethod
	def from_generators (cls, *generators: ringproof.row.Row) -> "PartGroup":

		"""
		Return the group generated by ``generators``, found by breadth-first closure.

		Raises:
			InvalidPartStructure: If no generator is given or stages differ.
		"""

		if not generators:
			raise ringproof.errors.InvalidPartStructure("At least one generator is needed")

		stage = generators[0].stage

		if any(g.stage != stage for g in generators):
			raise ringproof.errors.InvalidPartStructure("Generators must all have the same stage")

		rounds = ringproof.row.Row.rounds(stage)
		elements = [rounds]
		seen = {rounds}
		queue = collections.deque([rounds])

		while queue:

			element = queue.popleft()

			for generator in generators:

				product = element * generator

				if product not in seen:
					seen.add(product)
					elements.append(product)
					queue.append(product)

		return cls(elements, generators, cyclic=len(generators) == 1)

	@classmethod
	def full_cyclic (cls, stage: int) -> "PartGroup":

		"""Return the ``stage``-part group rotating every bell, e.g. ``23456781``."""

		return cls.cyclic(ringproof.row.Row(tuple((b + 1) % stage for b in range(stage))), stage)

	@classmethod
	def fixed_treble_cyclic (cls, stage: int) -> "PartGroup":

		"""Return the ``stage - 1``-part group rotating every bell but the treble, e.g. ``13456782``."""

		if stage < 3:
			raise ringproof.errors.InvalidPartStructure("A fixed-treble cyclic group needs at least three bells")

		bells = (0,) + tuple(b % (stage - 1) + 1 for b in range(1, stage))
		return cls.cyclic(ringproof.row.Row(bells), stage - 1)

	@property
	def parts (self) -> int:

		return len(self.elements)

	@property
	def part_head (self) -> typing.Optional[ringproof.row.Row]:

		"""The single generator of a cyclic group, or None for multi-generator groups."""

		if len(self.generators) == 1:
			return self.generators[0]

		return None

	def part_of (self, element: ringproof.row.Row) -> typing.Optional[int]:

		"""Return the part number whose part head is ``element``, or None."""

		return self._index_of.get(element)

	def inverse_part (self, part: int) -> int:

		"""Return the part number of the inverse of part ``part``'s head."""

		if self.is_cyclic:
			return (self.parts - part) % self.parts

		inverse = self.part_of(self.elements[part].inverse())
		assert inverse is not None
		return inverse


@dataclasses.dataclass(frozen=True)
class CrossPartFalseness:

	"""
	Row ``index_a`` of part ``part_a`` is the same row as ``index_b`` of part ``part_b``.

	The clash also occurs between every other pair of parts the same
	distance apart.
	"""

	part_a: int
	index_a: int
	part_b: int
	index_b: int
	row: ringproof.row.Row


@dataclasses.dataclass(frozen=True)
class PartProofReport:

	"""
	The result of proving a multi-part composition.

	Attributes:
		parts: Number of parts.
		part_report: The proof of part 0 on its own.
		cross_part: Clashes between parts, deduplicated.
		truth: ``"true"``, ``"false"`` or ``"unknown"`` for the whole composition.
		length: Rows in the whole composition (part 0 times ``parts``, plus
			the closing rounds).
	"""

	parts: int
	part_report: ringproof.falseness.ProofReport
	cross_part: typing.Tuple[CrossPartFalseness, ...]
	truth: str
	length: int

	@property
	def is_true (self) -> bool:

		return self.truth == ringproof.falseness.TRUTH_TRUE

	def summary (self) -> str:

		"""Return a one-line description, e.g. ``"5040 rows, 3 parts, true"``."""

		verdict = self.truth

		if self.cross_part:
			verdict += f" ({len(self.cross_part)} clashes between parts)"

		return f"{self.length} rows, {self.parts} parts, {verdict}"


class MultiPartProver:

	"""
	Prove a whole multi-part composition from its first part.

	The touch passed to :meth:`prove` describes part 0.  It is played once
	through its leads; the row it ends on must be the next part's first row.

	Example:
		```python
		prover = MultiPartProver(PartGroup.cyclic(part_head, 3))
		report = prover.prove(part_zero)
		```
	"""

	def __init__ (self, group: PartGroup, config: typing.Optional[ringproof.config.ProverConfig] = None) -> None:

		self.group = group
		self.config = config or ringproof.config.ProverConfig()

	def check_structure (self, touch: ringproof.touch.TouchDefinition) -> None:

		"""
		Check that ``touch`` can be part 0 of this group, without generating any rows.

		Raises:
			InvalidPartStructure: If the stages differ, part 0 does not end
				on a part head applied to its start row, or repeating part 0
				would not visit every part head of the group.
		"""

		if touch.stage != self.group.stage:
			raise ringproof.errors.InvalidPartStructure(
				f"Touch is stage {touch.stage} but the part heads are stage {self.group.stage}"
			)

		start = touch.start_row
		leftover = touch.leftover()

		# Part 1 starts where part 0 ends, so leftover == h * start for its head h.
		element = leftover * start.inverse()
		part = self.group.part_of(element)

		if part is None:
			raise ringproof.errors.InvalidPartStructure(
				f"Part 0 ends at {leftover}, which is not a part head applied to {start}"
			)

		if self.group.part_head is not None and element != self.group.part_head:
			raise ringproof.errors.InvalidPartStructure(
				f"Part 0 ends at {leftover} but the part head {self.group.part_head} leads to "
				f"{self.group.part_head * start}"
			)

		if self.group.parts > 1 and element.is_rounds():
			raise ringproof.errors.InvalidPartStructure("Part 0 comes round on its own, so it cannot be repeated")

		# Repeating part 0 only reaches the powers of its own part head.
		if self.group.part_head is None and element.order() != self.group.parts:
			raise ringproof.errors.InvalidPartStructure(
				f"Part 0 ends on part head {element} of order {element.order()}, which reaches only "
				f"{element.order()} of the {self.group.parts} part heads"
			)

	def prove (self, touch: ringproof.touch.TouchDefinition) -> PartProofReport:

		"""
		Prove the composition whose first part is ``touch``.

		Raises:
			InvalidPartStructure: See :meth:`check_structure`.
			MalformedTouch: If part 0 cannot be generated.
		"""

		self.check_structure(touch)

		part_zero = touch.with_termination(ringproof.touch.TERMINATE_LEADS)
		engine = ringproof.falseness.FalsenessEngine(require_closure=False)
		generator = ringproof.generator.TouchGenerator(part_zero, self.config)

		for generated in generator:

			# The leftover row is the next part's first row, not part of this one.
			if generated.final:
				break

			engine.observe(generated)

		cross_part = self._cross_part_clashes(engine)
		part_report = engine.finish()

		if part_report.falseness or cross_part:
			truth = ringproof.falseness.TRUTH_FALSE
		elif part_report.boundary_rows:
			truth = ringproof.falseness.TRUTH_UNKNOWN
		else:
			truth = ringproof.falseness.TRUTH_TRUE

		report = PartProofReport(
			parts = self.group.parts,
			part_report = part_report,
			cross_part = cross_part,
			truth = truth,
			length = part_report.length * self.group.parts + 1
		)

		logger.info(f"Proved {touch.name or 'touch'}: {report.summary()}")

		return report

	def _cross_part_clashes (self, engine: ringproof.falseness.FalsenessEngine) -> typing.Tuple[CrossPartFalseness, ...]:

		"""Look up every part-0 row under every other part head."""

		stage = engine.stage
		clashes: typing.List[CrossPartFalseness] = []
		seen: typing.Set[typing.Tuple[int, int, int, int]] = set()

		for key, index in engine.first_occurrences():

			row = ringproof.row.Row.from_key(key, stage)

			for part in range(1, self.group.parts):

				transposed = self.group.elements[part] * row
				other_index = engine.lookup(transposed)

				if other_index is None:
					continue

				# The same clash is found again from the other row under the inverse head.
				pair = (index, part, other_index, self.group.inverse_part(part))
				mirrored = (other_index, self.group.inverse_part(part), index, part)
				canonical = min(pair, mirrored)

				if canonical in seen:
					continue

				seen.add(canonical)
				clashes.append(CrossPartFalseness(
					part_a = part,
					index_a = index,
					part_b = 0,
					index_b = other_index,
					row = transposed
				))

		if clashes:
			logger.debug(f"{len(clashes)} clashes between parts")

		return tuple(clashes)
