from __future__ import annotations

import unittest

from primetime.core.config import GameConfig
from primetime.core.controller import is_prime, percent_elapsed, time_limit, time_remaining, transition
from primetime.core.messages import (
    Answer,
    EnterGame,
    GameEnded,
    GameStarted,
    KeyPressed,
    NavigateAbout,
    NavigateHome,
    RequestCurrentTime,
    RequestRandomInt,
    RoundStarted,
    Tag,
    TimerStarted,
    TimerTick,
)
from primetime.core.state import GameState, Screen


def _in_game(**fields) -> GameState:
    base = {"screen": Screen.GAME, "timer_start": 1000, "timer_latest": 1000}
    base.update(fields)
    return GameState(**base)


class TestInitialState(unittest.TestCase):
    def test_defaults(self):
        s = GameState()
        self.assertIs(s.screen, Screen.HOME)
        self.assertEqual(s.rounds, 0)
        self.assertEqual(s.current_integer, 1)
        self.assertEqual((s.game_start, s.game_end, s.timer_start, s.timer_latest), (0, 0, 0, 0))
        self.assertFalse(s.keyboard_hint)


class TestAnswer(unittest.TestCase):
    def test_correct_answer_increments_rounds_and_starts_round(self):
        state, requests = transition(_in_game(current_integer=7, rounds=3), Answer(is_prime_guess=True))
        self.assertIs(state.screen, Screen.GAME)
        self.assertEqual(state.rounds, 4)
        self.assertEqual(
            requests,
            [
                RequestRandomInt(min=1, max=5, tag=Tag.ROUND_STARTED),
                RequestCurrentTime(tag=Tag.TIMER_STARTED),
            ],
        )

    def test_wrong_answer_ends_game(self):
        state, requests = transition(_in_game(current_integer=7, rounds=3), Answer(is_prime_guess=False))
        self.assertIs(state.screen, Screen.GAME_OVER)
        self.assertEqual(state.rounds, 3)
        self.assertEqual(requests, [RequestCurrentTime(tag=Tag.GAME_ENDED)])

    def test_every_integer_both_guesses(self):
        for n in range(1, 31):
            for guess in (True, False):
                with self.subTest(n=n, guess=guess):
                    before = _in_game(current_integer=n, rounds=n - 1)
                    state, _ = transition(before, Answer(is_prime_guess=guess))
                    if guess == is_prime(n):
                        self.assertIs(state.screen, Screen.GAME)
                        self.assertEqual(state.rounds, before.rounds + 1)
                    else:
                        self.assertIs(state.screen, Screen.GAME_OVER)
                        self.assertEqual(state.rounds, before.rounds)

    def test_range_widens_with_rounds(self):
        _, requests = transition(_in_game(current_integer=4, rounds=4), Answer(is_prime_guess=False))
        self.assertEqual(requests[0], RequestRandomInt(min=1, max=6, tag=Tag.ROUND_STARTED))

    def test_answer_outside_game_is_ignored(self):
        for screen in (Screen.HOME, Screen.ABOUT, Screen.GAME_OVER):
            with self.subTest(screen=screen):
                before = GameState(screen=screen, current_integer=2, rounds=5)
                state, requests = transition(before, Answer(is_prime_guess=True))
                self.assertEqual(state, before)
                self.assertEqual(requests, [])


class TestTimer(unittest.TestCase):
    def test_time_limit_shrinks_then_floors(self):
        self.assertEqual(time_limit(0), 2500)
        self.assertEqual(time_limit(10), 2490)
        self.assertEqual(time_limit(1999), 501)
        self.assertEqual(time_limit(2000), 500)
        self.assertEqual(time_limit(2600), 500)
        self.assertEqual(time_limit(100, GameConfig(min_time_limit=2450)), 2450)

    def test_tick_within_budget_plus_fuzz_keeps_game(self):
        before = _in_game(rounds=3)
        now = 1000 + time_limit(3) + 500
        state, requests = transition(before, TimerTick(now=now))
        self.assertIs(state.screen, Screen.GAME)
        self.assertEqual(state.timer_latest, now)
        self.assertEqual(requests, [])

    def test_tick_past_budget_plus_fuzz_ends_game(self):
        before = _in_game(rounds=3)
        now = 1000 + time_limit(3) + 501
        state, requests = transition(before, TimerTick(now=now))
        self.assertIs(state.screen, Screen.GAME_OVER)
        self.assertEqual(state.timer_latest, now)
        self.assertEqual(state.rounds, 3)
        self.assertEqual(requests, [RequestCurrentTime(tag=Tag.GAME_ENDED)])

    def test_stale_tick_outside_game_never_ends_it_again(self):
        before = GameState(screen=Screen.GAME_OVER, timer_start=0, game_end=4000)
        state, requests = transition(before, TimerTick(now=99999))
        self.assertIs(state.screen, Screen.GAME_OVER)
        self.assertEqual(state.game_end, 4000)
        self.assertEqual(requests, [])

    def test_timer_started_resets_both_timestamps(self):
        state, _ = transition(_in_game(timer_start=10, timer_latest=900), TimerStarted(now=1200))
        self.assertEqual((state.timer_start, state.timer_latest), (1200, 1200))

    def test_percent_elapsed_and_remaining(self):
        s = _in_game(timer_start=0, timer_latest=1250)
        self.assertAlmostEqual(percent_elapsed(s), 50.0)
        self.assertEqual(time_remaining(s), 1250)


class TestKeys(unittest.TestCase):
    def test_s_and_d_are_answers(self):
        for n in (1, 2, 9, 11):
            before = _in_game(current_integer=n)
            self.assertEqual(transition(before, KeyPressed(key="s")), transition(before, Answer(is_prime_guess=True)))
            self.assertEqual(transition(before, KeyPressed(key="d")), transition(before, Answer(is_prime_guess=False)))

    def test_other_key_only_sets_hint(self):
        before = _in_game(current_integer=5, rounds=2)
        state, requests = transition(before, KeyPressed(key="x"))
        self.assertEqual(state, before.replace(keyboard_hint=True))
        self.assertEqual(requests, [])

    def test_custom_answer_keys(self):
        cfg = GameConfig(prime_key="j", composite_key="k")
        before = _in_game(current_integer=3)
        state, _ = transition(before, KeyPressed(key="j"), cfg)
        self.assertEqual(state.rounds, 1)
        state, _ = transition(before, KeyPressed(key="s"), cfg)
        self.assertTrue(state.keyboard_hint)
        self.assertEqual(state.rounds, 0)


class TestNavigation(unittest.TestCase):
    def test_navigate_changes_only_screen(self):
        before = _in_game(rounds=4, current_integer=3, keyboard_hint=True)
        state, requests = transition(before, NavigateAbout())
        self.assertEqual(state, before.replace(screen=Screen.ABOUT))
        self.assertEqual(requests, [])
        state, _ = transition(state, NavigateHome())
        self.assertEqual(state, before.replace(screen=Screen.HOME))

    def test_enter_game_from_game_over_resets_rounds(self):
        before = GameState(screen=Screen.GAME_OVER, rounds=9)
        state, requests = transition(before, EnterGame())
        self.assertIs(state.screen, Screen.GAME)
        self.assertEqual(state.rounds, 0)
        self.assertEqual(requests, [RequestCurrentTime(tag=Tag.GAME_STARTED)])

    def test_rejects_unknown_event(self):
        with self.assertRaises(TypeError):
            transition(GameState(), "enter_game")


class TestEndToEnd(unittest.TestCase):
    def test_first_round(self):
        state, requests = transition(GameState(), EnterGame())
        self.assertEqual(requests, [RequestCurrentTime(tag=Tag.GAME_STARTED)])

        state, requests = transition(state, GameStarted(now=500))
        self.assertEqual(state.game_start, 500)
        self.assertEqual(
            requests,
            [
                RequestRandomInt(min=1, max=1, tag=Tag.ROUND_STARTED),
                RequestCurrentTime(tag=Tag.TIMER_STARTED),
            ],
        )

        state, _ = transition(state, RoundStarted(n=1))
        state, _ = transition(state, TimerStarted(now=500))
        self.assertEqual(state.current_integer, 1)

        state, requests = transition(state, Answer(is_prime_guess=False))
        self.assertEqual(state.rounds, 1)
        self.assertIs(state.screen, Screen.GAME)
        self.assertEqual(requests[0], RequestRandomInt(min=1, max=2, tag=Tag.ROUND_STARTED))

        state, _ = transition(state, Answer(is_prime_guess=True))
        self.assertIs(state.screen, Screen.GAME_OVER)
        state, _ = transition(state, GameEnded(now=900))
        self.assertEqual(state.game_end, 900)


if __name__ == "__main__":
    unittest.main()
