import unittest

from tetris_engine.game import ScoringRules


class ScoringRulesTests(unittest.TestCase):
    def setUp(self):
        self.rules = ScoringRules()

    def test_line_clear_table(self):
        self.assertEqual(
            [self.rules.score_for_lines(n) for n in range(5)],
            [0, 40, 100, 300, 1200],
        )

    def test_points_scale_with_level(self):
        self.assertEqual(self.rules.score_for_lines(1, level=2), 120)
        self.assertEqual(self.rules.score_for_lines(4, level=1), 2400)

    def test_more_than_four_rows_clamps(self):
        self.assertEqual(self.rules.score_for_lines(6), 1200)

    def test_level_curve(self):
        self.assertEqual(self.rules.level_for_rows(0), 0)
        self.assertEqual(self.rules.level_for_rows(9), 0)
        self.assertEqual(self.rules.level_for_rows(10), 1)
        self.assertEqual(self.rules.level_for_rows(35), 3)

    def test_drop_interval_shrinks(self):
        self.assertEqual(self.rules.drop_interval_for_level(0), 1000.0)
        self.assertAlmostEqual(self.rules.drop_interval_for_level(1), 800.0)
        self.assertAlmostEqual(self.rules.drop_interval_for_level(2), 640.0)


if __name__ == "__main__":
    unittest.main()
