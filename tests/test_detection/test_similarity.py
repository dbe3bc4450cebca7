"""
Tests for filename similarity.
"""

import unittest

from drivesweep.detection.similarity import levenshtein, similarity


class TestSimilarity(unittest.TestCase):
    def test_identical_strings(self):
        for name in ["report.pdf", "a", "Presentation_backup.pptx"]:
            self.assertEqual(similarity(name, name), 1.0)

    def test_empty_strings(self):
        self.assertEqual(similarity("", ""), 1.0)
        self.assertEqual(similarity("", "abc"), 0.0)

    def test_levenshtein(self):
        self.assertEqual(levenshtein("kitten", "sitting"), 3)
        self.assertEqual(levenshtein("abc", "abc"), 0)
        self.assertEqual(levenshtein("", "abcd"), 4)

    def test_normalized_by_longer_name(self):
        self.assertAlmostEqual(similarity("kitten", "sitting"), 1 - 3 / 7)
        self.assertAlmostEqual(similarity("Invoice_v1.pdf", "Invoice_v2.pdf"), 1 - 1 / 14)

    def test_completely_different(self):
        self.assertEqual(similarity("abc", "xyz"), 0.0)

    def test_bounds_and_symmetry(self):
        names = ["", "a", "report.pdf", "Report.PDF", "budget 2024.xlsx", "notes_old.txt"]
        for a in names:
            for b in names:
                score = similarity(a, b)
                self.assertGreaterEqual(score, 0.0)
                self.assertLessEqual(score, 1.0)
                self.assertAlmostEqual(score, similarity(b, a))


if __name__ == '__main__':
    unittest.main()
