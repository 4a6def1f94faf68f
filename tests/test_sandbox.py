from __future__ import annotations

import unittest

from primetime.sandbox import ManualClock, SeededRandom, SystemClock, make_clock


class TestSandbox(unittest.TestCase):
    def test_seeded_random_is_reproducible_and_inclusive(self):
        r1, r2 = SeededRandom(3), SeededRandom(3)
        a = [r1.next_int(1, 6) for _ in range(20)]
        b = [r2.next_int(1, 6) for _ in range(20)]
        self.assertEqual(a, b)
        rng = SeededRandom(11)
        seen = {rng.next_int(1, 3) for _ in range(200)}
        self.assertEqual(seen, {1, 2, 3})
        self.assertEqual(rng.next_int(1, 1), 1)

    def test_seeded_random_rejects_empty_range(self):
        with self.assertRaises(ValueError):
            SeededRandom(0).next_int(5, 4)

    def test_manual_clock(self):
        clock = ManualClock(start=10)
        self.assertEqual(clock.advance(40), 50)
        clock.set(80)
        self.assertEqual(clock.now(), 80)
        with self.assertRaises(ValueError):
            clock.set(70)
        with self.assertRaises(ValueError):
            clock.advance(-1)

    def test_make_clock(self):
        self.assertIsInstance(make_clock("manual", start=5), ManualClock)
        self.assertEqual(make_clock("sim", start=5).now(), 5)
        self.assertIsInstance(make_clock("system"), SystemClock)
        with self.assertRaises(ValueError):
            make_clock("sundial")


if __name__ == "__main__":
    unittest.main()
