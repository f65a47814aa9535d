import io
import unittest
from contextlib import redirect_stdout

from tetris_engine.rl.random_agent import main, run_random


class RandomAgentTests(unittest.TestCase):
    def test_runs_capped_episodes(self):
        results = run_random(episodes=2, max_steps=50, seed=0)
        self.assertEqual(len(results), 2)
        for result in results:
            self.assertLessEqual(result["steps"], 50)
            self.assertEqual(result["level"], result["rows"] // 10)

    def test_cli_prints_one_line_per_episode(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--episodes", "2", "--steps", "20", "--seed", "4"])
        lines = out.getvalue().strip().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("episode 0:"))


if __name__ == "__main__":
    unittest.main()
