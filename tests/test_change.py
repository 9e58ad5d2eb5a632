import unittest

import ringproof.change
import ringproof.errors
import ringproof.row


class ChangeTests (unittest.TestCase):

	"""
	Tests for building and applying changes.
	"""

	def test_cross_swaps_every_pair (self) -> None:

		"""
		x on six bells swaps all three pairs.
		"""

		cross = ringproof.change.Change.cross(6)

		self.assertEqual(cross.transpositions, ((0, 1), (2, 3), (4, 5)))
		self.assertEqual(cross.places(), [])
		self.assertEqual(str(ringproof.row.Row.rounds(6).apply(cross)), "214365")


	def test_cross_needs_even_stage (self) -> None:

		with self.assertRaises(ringproof.errors.InvalidChange):
			ringproof.change.Change.cross(5)


	def test_from_places (self) -> None:

		"""
		Unmade places pair off with their upper neighbour.
		"""

		sixteen = ringproof.change.Change.from_places([0, 5], 6)

		self.assertEqual(sixteen.transpositions, ((1, 2), (3, 4)))
		self.assertEqual(sixteen.places(), [0, 5])
		self.assertEqual(ringproof.change.Change.from_places([0], 5).transpositions, ((1, 2), (3, 4)))


	def test_from_places_rejects_unpaired_place (self) -> None:

		"""
		An odd stage with no places made leaves the back bell without a partner.
		"""

		with self.assertRaises(ringproof.errors.InvalidChange):
			ringproof.change.Change.from_places([], 5)

		with self.assertRaises(ringproof.errors.InvalidChange):
			ringproof.change.Change.from_places([6], 6)


	def test_invalid_transpositions (self) -> None:

		"""
		Overlapping, self and out-of-range swaps are rejected.
		"""

		with self.assertRaises(ringproof.errors.InvalidChange):
			ringproof.change.Change.from_transpositions([(0, 1), (1, 2)], 4)

		with self.assertRaises(ringproof.errors.InvalidChange):
			ringproof.change.Change.from_transpositions([(2, 2)], 4)

		with self.assertRaises(ringproof.errors.InvalidChange):
			ringproof.change.Change.from_transpositions([(3, 4)], 4)


	def test_discontinuous_change (self) -> None:

		"""
		A non-adjacent swap is allowed and moves the bells it names.
		"""

		jump = ringproof.change.Change.from_transpositions([(3, 0)], 6)

		self.assertEqual(jump.transpositions, ((0, 3),))
		self.assertFalse(jump.is_continuous())
		self.assertEqual(jump.source(0), 3)
		self.assertEqual(str(ringproof.row.Row.rounds(6).apply(jump)), "423156")


	def test_identity (self) -> None:

		identity = ringproof.change.Change.identity(8)

		self.assertTrue(identity.is_identity())
		self.assertTrue(identity.as_row().is_rounds())
		self.assertEqual(identity.places(), list(range(8)))


	def test_equality_and_hash (self) -> None:

		"""
		Changes with the same swaps are equal whatever order they were given in.
		"""

		a = ringproof.change.Change.from_transpositions([(2, 3), (0, 1)], 6)
		b = ringproof.change.Change.from_places([4, 5], 6)

		self.assertEqual(a, b)
		self.assertEqual(hash(a), hash(b))
		self.assertNotEqual(a, ringproof.change.Change.cross(6))
		self.assertEqual(len({a, b}), 1)


	def test_change_is_immutable (self) -> None:

		"""
		Swaps cannot be reassigned or removed once a change is built.
		"""

		change = ringproof.change.Change.cross(6)

		with self.assertRaises(AttributeError):
			change._stage = 9

		with self.assertRaises(AttributeError):
			del change._transpositions

		self.assertEqual(change.stage, 6)
		self.assertEqual(change.transpositions, ((0, 1), (2, 3), (4, 5)))
