#!/usr/bin/env python3
"""
Test suite for the performance scorer.
"""

import unittest

from core.matching.performance import experience_part, rating_part, score_performance


class TestRatingPart(unittest.TestCase):

    def test_rating_scaled_to_ten(self):
        for rating in (0.0, 1.3, 2.5, 3.7, 4.2, 4.8, 5.0):
            with self.subTest(rating=rating):
                self.assertEqual(rating_part(rating), round(rating / 5 * 10, 1))

    def test_unrated_is_neutral(self):
        self.assertEqual(rating_part(None), 5.0)

    def test_zero_rating_is_not_unrated(self):
        self.assertEqual(rating_part(0.0), 0.0)

    def test_out_of_range_rating_is_clamped(self):
        self.assertEqual(rating_part(7.0), 10.0)
        self.assertEqual(rating_part(-1.0), 0.0)


class TestExperiencePart(unittest.TestCase):

    def test_bands(self):
        cases = [(0, 0.5), (4, 0.5), (5, 1.0), (9, 1.0), (10, 2.0), (19, 2.0),
                 (20, 3.0), (49, 3.0), (50, 4.0), (99, 4.0), (100, 5.0), (5000, 5.0)]
        for jobs, expected in cases:
            with self.subTest(jobs=jobs):
                self.assertEqual(experience_part(jobs), expected)


class TestScorePerformance(unittest.TestCase):

    def test_rated_experienced(self):
        result = score_performance(4.8, 45)
        self.assertEqual(result.rating_part, 9.6)
        self.assertEqual(result.experience_part, 3.0)
        self.assertAlmostEqual(result.points, 12.6)
        self.assertTrue(result.rated)

    def test_new_cleaner(self):
        result = score_performance(None, 2)
        self.assertEqual(result.points, 5.5)
        self.assertFalse(result.rated)


if __name__ == '__main__':
    unittest.main()
