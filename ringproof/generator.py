"""Lazy touch generation.

:class:`TouchGenerator` turns a :class:`~ringproof.touch.TouchDefinition` into
a stream of :class:`GeneratedRow` values, one change per ``next()`` call.  It
keeps only a cursor (lead, position within the lead, current row), so memory
does not grow with the length of the touch.
"""

import dataclasses
import logging
import typing

import ringproof.call
import ringproof.config
import ringproof.errors
import ringproof.row
import ringproof.touch


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class GeneratedRow:

	"""
	One row of a touch and where it came from.

	Attributes:
		index: Position in the stream, starting at 0.
		row: The row itself.
		part: Part number (0 unless set by the multi-part prover).
		lead: How many leads have started before this one (cycling included).
		lead_index: Position within the lead; 0 is the lead head.
		method: Name of the block being rung.
		call: Name of the call whose change produced this row, if any.
		boundary: True for rows emitted by a boundary-only block.  Their
			interior was skipped, so they cannot be proved true or false.
		span: Rows of the full touch this row stands for (a boundary row
			stands for the whole lead).
		final: True for the last row the generator will emit.
	"""

	index: int
	row: ringproof.row.Row
	part: int = 0
	lead: int = 0
	lead_index: int = 0
	method: str = ""
	call: typing.Optional[str] = None
	boundary: bool = False
	span: int = 1
	final: bool = False


class TouchGenerator:

	"""
	An iterator over the rows of a touch.

	Structural checks (call ranges, the safety bound where it can be known
	in advance) run in the constructor.  In ``"rounds"`` and ``"open"`` mode
	the bound is enforced while generating.

	Example:
		```python
		for generated in TouchGenerator(touch):
			print(generated.index, generated.row)
		```
	"""

	def __init__ (
		self,
		touch: ringproof.touch.TouchDefinition,
		config: typing.Optional[ringproof.config.ProverConfig] = None,
		part: int = 0
	) -> None:

		"""
		Validate the touch against the safety bound and position the cursor on the start row.

		Raises:
			MalformedTouch: If the touch cannot finish within ``config.max_rows``.
		"""

		self.touch = touch
		self.config = config or ringproof.config.ProverConfig()
		self.part = part

		self._resolved: typing.List[typing.List[ringproof.call.CalledChange]] = [lead.resolve() for lead in touch.leads]

		if touch.termination == ringproof.touch.TERMINATE_LENGTH:
			assert touch.length is not None
			if touch.length > self.config.max_rows:
				raise ringproof.errors.MalformedTouch(
					f"Declared length {touch.length} exceeds the safety bound of {self.config.max_rows} rows"
				)

		elif touch.termination == ringproof.touch.TERMINATE_LEADS:
			if touch.pass_length() + 1 > self.config.max_rows:
				raise ringproof.errors.MalformedTouch(
					f"Touch of {touch.pass_length() + 1} rows exceeds the safety bound of {self.config.max_rows} rows"
				)

		self._row = touch.start_row
		self._index = 0
		self._lead_count = 0
		self._lead_number = 0
		self._position = 0
		self._call: typing.Optional[str] = None
		self._exhausted = False
		self._done = False

	def __iter__ (self) -> "TouchGenerator":

		return self

	def __next__ (self) -> GeneratedRow:

		if self._done:
			raise StopIteration

		if self._index >= self.config.max_rows:
			self._done = True
			raise ringproof.errors.MalformedTouch(
				f"Touch {self.touch.name!r} did not reach its end within {self.config.max_rows} rows"
			)

		final = self._is_final()

		lead = self.touch.leads[self._lead_number]
		boundary = not lead.block.is_explicit and not self._exhausted

		generated = GeneratedRow(
			index = self._index,
			row = self._row,
			part = self.part,
			lead = self._lead_count,
			lead_index = 0 if self._exhausted else self._position,
			method = lead.block.name,
			call = self._call,
			boundary = boundary,
			span = lead.block.nominal_length if boundary else 1,
			final = final
		)

		if final:
			self._done = True
			logger.debug(f"Touch {self.touch.name!r} finished after {self._index + 1} rows at {self._row}")
			return generated

		self._advance()

		return generated

	@property
	def index (self) -> int:

		"""Index of the next row to be emitted."""

		return self._index

	def _is_final (self) -> bool:

		termination = self.touch.termination

		if termination == ringproof.touch.TERMINATE_LEADS:
			return self._exhausted

		if termination == ringproof.touch.TERMINATE_LENGTH:
			return self._index == self.touch.length - 1

		if termination == ringproof.touch.TERMINATE_ROUNDS:
			return self._index > 0 and self._row == self.touch.start_row

		return False

	def _advance (self) -> None:

		"""Ring exactly one change (or jump one boundary block)."""

		lead = self.touch.leads[self._lead_number]

		if not lead.block.is_explicit:
			self._row = self._row * lead.block.lead_head
			self._call = None
			self._next_lead()

		else:
			changes = self._resolved[self._lead_number]
			change, call_name = changes[self._position]
			self._row = self._row.apply(change)
			self._call = call_name
			self._position += 1

			if self._position >= len(changes):
				self._next_lead()

		self._index += 1

	def _next_lead (self) -> None:

		self._position = 0
		self._lead_count += 1
		self._lead_number += 1

		if self._lead_number < len(self.touch.leads):
			return

		if self.touch.termination == ringproof.touch.TERMINATE_LEADS:
			# Stay on the last lead so the leftover row can still name its method.
			self._lead_number -= 1
			self._exhausted = True
			return

		self._lead_number = 0
		logger.debug(f"Touch {self.touch.name!r} cycling through its leads again at row {self._index + 1}")


def generate (
	touch: ringproof.touch.TouchDefinition,
	config: typing.Optional[ringproof.config.ProverConfig] = None
) -> typing.Iterator[GeneratedRow]:

	"""Return a fresh generator over ``touch``."""

	return TouchGenerator(touch, config)
