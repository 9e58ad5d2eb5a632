"""The interface music scorers plug into.

ringproof ships no scoring rules.  A scorer is anything with a
``score(row, context)`` method returning a number; :func:`iter_scores` and
:func:`total_score` walk an annotated row stream and hand each row to it,
along with its neighbours and truth annotation.

Example:
	```python
	class FrontRuns:

		def score (self, row, context):
			return 1.0 if row.run_length_off_front() >= 4 else 0.0

	total_score(ringproof.falseness.annotate(touch), FrontRuns())
	```
"""

import dataclasses
import typing

import ringproof.falseness
import ringproof.row


@dataclasses.dataclass(frozen=True)
class ScoreContext:

	"""
	Everything a scorer may know about a row besides the row itself.

	Attributes:
		index: Position in the stream.
		part: Part number.
		status: The falseness annotation (``"true"``, ``"false"``, ...).
		previous: The row before, or None at the start.
		next: The row after, or None at the end.
	"""

	index: int
	part: int
	status: str
	previous: typing.Optional[ringproof.row.Row] = None
	next: typing.Optional[ringproof.row.Row] = None


class Scorer (typing.Protocol):

	"""Protocol for pluggable music scoring rules."""

	def score (self, row: ringproof.row.Row, context: ScoreContext) -> float:
		...


def iter_scores (
	rows: typing.Iterable[ringproof.falseness.AnnotatedRow],
	scorer: Scorer,
	include_false: bool = True
) -> typing.Iterator[typing.Tuple[ringproof.falseness.AnnotatedRow, float]]:

	"""
	Yield ``(annotated_row, score)`` for each row, looking one row ahead for context.

	False rows score 0 when ``include_false`` is False.  Closure rows are
	scored like any other row.
	"""

	previous: typing.Optional[ringproof.row.Row] = None
	iterator = iter(rows)
	current = next(iterator, None)

	while current is not None:

		following = next(iterator, None)

		context = ScoreContext(
			index = current.index,
			part = current.part,
			status = current.status,
			previous = previous,
			next = following.row if following is not None else None
		)

		if current.is_false and not include_false:
			value = 0.0
		else:
			value = float(scorer.score(current.row, context))

		yield current, value

		previous = current.row
		current = following


def total_score (
	rows: typing.Iterable[ringproof.falseness.AnnotatedRow],
	scorer: Scorer,
	include_false: bool = True
) -> float:

	"""Return the sum of ``scorer`` over every row."""

	return sum(value for _, value in iter_scores(rows, scorer, include_false=include_false))
