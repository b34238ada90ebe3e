"""Tests for two_way_duel.py"""

import math
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from duelsim.services.duel_engine import DuelResult
from duelsim.services.rng import DeterministicRng, derive_seed
from duelsim.services.ttk_duel_engine import TtkDuelEngine
from duelsim.services.two_way_duel import TeamSide, resolve_two_way

from conftest import make_agent, make_input

# Directions are told apart by distance
A_TO_B_DISTANCE = 10.0
B_TO_A_DISTANCE = 11.0


def kill(ttk: float) -> DuelResult:
    return DuelResult(True, ttk, 5, 3)


class ScriptedEngine:
    """Returns fixed results per direction and records the generators it saw."""

    def __init__(self, a_to_b: DuelResult, b_to_a: DuelResult):
        self.results = {A_TO_B_DISTANCE: a_to_b, B_TO_A_DISTANCE: b_to_a}
        self.seen_states = {}

    def resolve(self, rng, duel_input):
        self.seen_states[duel_input.distance] = rng.state
        return self.results[duel_input.distance]


def run(a_to_b: DuelResult, b_to_a: DuelResult, seed: int = 1):
    engine = ScriptedEngine(a_to_b, b_to_a)
    result = resolve_two_way(
        engine,
        DeterministicRng(seed),
        make_input(distance=A_TO_B_DISTANCE),
        make_input(distance=B_TO_A_DISTANCE),
    )
    return result, engine


class TestTieBreak:
    """Tests for winner selection."""

    def test_no_kills_defender_holds(self):
        result, _ = run(DuelResult.no_kill(40, 2), DuelResult.no_kill(38, 1))
        assert result.winner == TeamSide.DEFEND
        assert not result.simultaneous
        assert result.winner_ttk == math.inf
        assert result.loser_ttk == math.inf

    def test_within_window_is_simultaneous_attacker(self):
        result, _ = run(kill(1.00), kill(1.02))
        assert result.simultaneous
        assert result.winner == TeamSide.ATTACK
        assert result.winner_ttk == 1.00
        assert result.loser_ttk == 1.02

    def test_defender_faster_within_window_still_attacker(self):
        result, _ = run(kill(1.02), kill(1.00))
        assert result.simultaneous
        assert result.winner == TeamSide.ATTACK
        assert result.winner_ttk == 1.02

    def test_exact_window_resolves_to_faster_side(self):
        result, _ = run(kill(1.03), kill(1.00))
        assert not result.simultaneous
        assert result.winner == TeamSide.DEFEND
        assert result.winner_ttk == 1.00
        assert result.loser_ttk == 1.03

    def test_attacker_strictly_faster(self):
        result, _ = run(kill(0.5), kill(0.9))
        assert not result.simultaneous
        assert result.winner == TeamSide.ATTACK

    def test_only_defender_kills(self):
        result, _ = run(DuelResult.no_kill(35, 0), kill(2.0))
        assert result.winner == TeamSide.DEFEND
        assert result.winner_ttk == 2.0
        assert result.loser_ttk == math.inf

    def test_only_attacker_kills(self):
        result, _ = run(kill(3.0), DuelResult.no_kill(35, 0))
        assert result.winner == TeamSide.ATTACK
        assert result.winner_ttk == 3.0

    def test_keeps_both_directions(self):
        a, b = kill(0.5), kill(0.9)
        result, _ = run(a, b)
        assert result.attack_to_defend is a
        assert result.defend_to_attack is b

    def test_to_dict_nulls_infinite_ttk(self):
        result, _ = run(DuelResult.no_kill(), DuelResult.no_kill())
        data = result.to_dict()
        assert data["winner"] == "defend"
        assert data["winner_ttk"] is None
        assert data["attack_to_defend"]["time_to_kill"] is None


class TestDirectionSeeding:
    """Each direction gets its own labeled sub-generator."""

    def test_sub_generators_are_labeled_forks(self):
        _, engine = run(kill(1.0), kill(2.0), seed=99)

        master = DeterministicRng(99)
        expected_a = DeterministicRng(derive_seed("A-to-B", master.next_u64())).state
        expected_b = DeterministicRng(derive_seed("B-to-A", master.next_u64())).state

        assert engine.seen_states[A_TO_B_DISTANCE] == expected_a
        assert engine.seen_states[B_TO_A_DISTANCE] == expected_b

    def test_real_engine_is_reproducible(self):
        engine = TtkDuelEngine(samples=32)
        a_to_b = make_input(shooter=make_agent(aim=0.8), target=make_agent(aim=0.4))
        b_to_a = make_input(shooter=make_agent(aim=0.4), target=make_agent(aim=0.8))

        first = resolve_two_way(engine, DeterministicRng(derive_seed("match", 7)), a_to_b, b_to_a)
        second = resolve_two_way(engine, DeterministicRng(derive_seed("match", 7)), a_to_b, b_to_a)
        assert first == second

    def test_direction_outcome_independent_of_other_direction(self):
        """Changing B's input never changes A's result."""
        engine = TtkDuelEngine(samples=32)
        a_to_b = make_input()

        first = resolve_two_way(engine, DeterministicRng(5), a_to_b, make_input(distance=5.0))
        second = resolve_two_way(engine, DeterministicRng(5), a_to_b, make_input(distance=35.0))
        assert first.attack_to_defend == second.attack_to_defend


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
