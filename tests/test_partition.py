"""
Tests for ExpensePie.core.partition.

Run:
    python -m unittest tests.test_partition
"""
import math
import random
import unittest

from ExpensePie.core.partition import (
    ANGLE_TOLERANCE,
    FULL_CIRCLE,
    AngularSlice,
    InvalidWeight,
    WeightedEntry,
    partition,
    validate_weight,
)


def entries(*weights):
    return [WeightedEntry(w, f'tag-{i}') for i, w in enumerate(weights)]


class PartitionTests(unittest.TestCase):

    def assert_closed(self, slices):
        self.assertEqual(slices[0].start_angle, 0.0)
        self.assertEqual(slices[-1].end_angle, FULL_CIRCLE)
        for left, right in zip(slices, slices[1:]):
            self.assertEqual(left.end_angle, right.start_angle)

    def test_empty_input(self):
        self.assertEqual(partition([]), [])

    def test_all_zero_weights(self):
        result = partition([WeightedEntry(0, 'A'), WeightedEntry(0, 'B')])
        self.assertEqual(result, [])

    def test_single_entry_takes_full_circle(self):
        result = partition([WeightedEntry(12.5, 'A')])
        self.assertEqual(result, [AngularSlice(0.0, 360.0, 'A')])

    def test_known_split(self):
        result = partition([
            WeightedEntry(1, 'A'),
            WeightedEntry(1, 'B'),
            WeightedEntry(2, 'C'),
        ])
        self.assertEqual(result, [
            AngularSlice(0.0, 90.0, 'A'),
            AngularSlice(90.0, 180.0, 'B'),
            AngularSlice(180.0, 360.0, 'C'),
        ])

    def test_order_is_preserved(self):
        items = entries(5, 1, 3, 0.5, 9)
        result = partition(items)
        self.assertEqual([s.tag for s in result], [e.tag for e in items])

    def test_output_length_matches_input(self):
        items = entries(1, 0, 2, 0, 3)
        self.assertEqual(len(partition(items)), len(items))

    def test_zero_weight_entry_gets_empty_sweep(self):
        result = partition(entries(1, 0, 1))
        self.assertEqual(result[1].sweep, 0.0)
        self.assertEqual(result[1].start_angle, 180.0)
        self.assert_closed(result)

    def test_sweeps_are_proportional(self):
        weights = [3.0, 7.5, 0.25, 12.0, 1.0]
        total = sum(weights)
        result = partition(entries(*weights))
        for weight, s in zip(weights, result):
            self.assertAlmostEqual(s.sweep, FULL_CIRCLE * weight / total, delta=1e-6)

    def test_total_sweep_is_full_circle(self):
        rng = random.Random(1)
        for _ in range(50):
            weights = [rng.uniform(0, 1000) for _ in range(rng.randint(1, 40))]
            result = partition(entries(*weights))
            self.assertAlmostEqual(sum(s.sweep for s in result), FULL_CIRCLE, delta=1e-6)

    def test_closure_with_many_entries(self):
        # Thousands of thirds accumulate rounding drift
        result = partition(entries(*([1.0 / 3.0] * 5000)))
        self.assert_closed(result)

    def test_contiguity_with_random_weights(self):
        rng = random.Random(42)
        for _ in range(20):
            weights = [rng.random() * rng.choice([1e-6, 1.0, 1e6]) for _ in range(200)]
            result = partition(entries(*weights))
            self.assert_closed(result)

    def test_trailing_zero_weight_stays_in_range(self):
        rng = random.Random(7)
        for _ in range(2000):
            weights = [rng.random() for _ in range(rng.randint(1, 60))] + [0.0]
            result = partition(entries(*weights))
            self.assert_closed(result)
            for s in result:
                self.assertGreaterEqual(s.sweep, 0.0)
                self.assertGreaterEqual(s.start_angle, 0.0)
                self.assertLessEqual(s.end_angle, FULL_CIRCLE)
            self.assertEqual(result[-1], AngularSlice(FULL_CIRCLE, FULL_CIRCLE, result[-1].tag))

    def test_trailing_zero_weights_collapse_onto_full_circle(self):
        result = partition(entries(1, 3, 0, 0))
        self.assertEqual(result[1].end_angle, FULL_CIRCLE)
        self.assertEqual([s.sweep for s in result[2:]], [0.0, 0.0])
        self.assertEqual([s.start_angle for s in result[2:]], [FULL_CIRCLE, FULL_CIRCLE])

    def test_huge_weights_do_not_overflow(self):
        result = partition([WeightedEntry(1e308, 'A'), WeightedEntry(1e308, 'B')])
        self.assertEqual(result, [AngularSlice(0.0, 180.0, 'A'), AngularSlice(180.0, 360.0, 'B')])

        result = partition(entries(1e308, 1.0, 1e308))
        self.assert_closed(result)
        self.assertAlmostEqual(result[0].sweep, 180.0, delta=1e-6)

    def test_weight_too_large_for_float_raises(self):
        with self.assertRaises(InvalidWeight) as ctx:
            partition([WeightedEntry(1, 'a'), WeightedEntry(10 ** 400, 'b')])
        self.assertEqual(ctx.exception.index, 1)
        self.assertEqual(ctx.exception.weight, 10 ** 400)

    def test_idempotent(self):
        items = entries(0.1, 0.2, 0.3, 0.4, 1e-9, 123456.789)
        first = partition(items)
        second = partition(items)
        self.assertEqual(first, second)
        for a, b in zip(first, second):
            self.assertEqual(a.start_angle.hex(), b.start_angle.hex())
            self.assertEqual(a.end_angle.hex(), b.end_angle.hex())

    def test_accepts_any_iterable(self):
        result = partition(WeightedEntry(w, i) for i, w in enumerate([1, 1]))
        self.assertEqual(result, [AngularSlice(0.0, 180.0, 0), AngularSlice(180.0, 360.0, 1)])

    def test_tags_are_passed_through(self):
        tag = object()
        result = partition([WeightedEntry(1, tag)])
        self.assertIs(result[0].tag, tag)

    def test_negative_weight_raises(self):
        with self.assertRaises(InvalidWeight) as ctx:
            partition([WeightedEntry(-1, 'A')])
        self.assertEqual(ctx.exception.index, 0)
        self.assertEqual(ctx.exception.weight, -1)

    def test_invalid_weight_is_value_error(self):
        self.assertTrue(issubclass(InvalidWeight, ValueError))

    def test_negative_weight_anywhere_rejects_whole_input(self):
        with self.assertRaises(InvalidWeight) as ctx:
            partition(entries(1, 2, 3, -0.5, 4))
        self.assertEqual(ctx.exception.index, 3)

    def test_non_finite_weights_raise(self):
        for bad in (math.nan, math.inf, -math.inf):
            with self.assertRaises(InvalidWeight):
                partition([WeightedEntry(1, 'A'), WeightedEntry(bad, 'B')])

    def test_non_numeric_weights_raise(self):
        for bad in ('1', None, True):
            with self.assertRaises(InvalidWeight):
                partition([WeightedEntry(bad, 'A')])

    def test_validate_weight_accepts_ints_and_floats(self):
        self.assertEqual(validate_weight(0, 0), 0.0)
        self.assertEqual(validate_weight(1, 3), 3.0)
        self.assertEqual(validate_weight(2, 0.5), 0.5)
        self.assertIsInstance(validate_weight(3, 3), float)

    def test_tolerance_is_tight(self):
        self.assertLess(ANGLE_TOLERANCE, 1e-6)


if __name__ == '__main__':
    unittest.main()
