"""Tests for ttk_duel_engine.py and raycast_duel_engine.py"""

import math
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from duelsim.services.catalog import DefinitionCatalog
from duelsim.services.duel_engine import AgentRuntime, DuelResult
from duelsim.services.geometry import MapRuntime, Segment, Vec2
from duelsim.services.raycast_duel_engine import RaycastDuelEngine
from duelsim.services.rng import DeterministicRng, derive_seed
from duelsim.services.smoke_field import SmokeField
from duelsim.services.ttk_duel_engine import TtkDuelEngine, hit_probability

from conftest import make_agent, make_input

SEED = derive_seed("test", 12345)


def rng() -> DeterministicRng:
    return DeterministicRng(SEED)


class TestAgentRuntime:
    """Tests for reaction delay."""

    def test_reaction_delay_range(self):
        agent = make_agent()
        # reaction 0.7 -> 0.18 + 0.27 * 0.3
        assert agent.reaction_delay() == pytest.approx(0.18 + 0.27 * 0.3)

    def test_stress_and_extra_penalty(self):
        agent = make_agent()
        agent.stress = 1.0
        # composure 0.6 dampens the 0.15s stress penalty
        assert agent.reaction_delay(0.2) == pytest.approx(0.18 + 0.27 * 0.3 + 0.15 * 0.4 + 0.2)

    def test_from_def(self):
        agent_def = DefinitionCatalog.get_agent("agent.sample.entry")
        weapon = DefinitionCatalog.primary_weapon(agent_def)
        runtime = AgentRuntime.from_def(agent_def, weapon, stress=0.2)
        assert runtime.hp == agent_def.base_hp
        assert runtime.armor == agent_def.base_armor
        assert runtime.weapon.id == "weapon.rifle.ak_like"
        assert runtime.stress == 0.2


class TestTtkDuelEngine:
    """Tests for the analytic Monte Carlo engine."""

    def test_hit_probability(self):
        assert hit_probability(0.015, 0.015) == pytest.approx(1 - math.exp(-0.5))
        assert 0.0 <= hit_probability(0.0, 0.01) <= hit_probability(1.0, 0.0005) <= 1.0

    def test_deterministic(self):
        engine = TtkDuelEngine(samples=64)
        duel_input = make_input()
        assert engine.resolve(rng(), duel_input) == engine.resolve(rng(), duel_input)

    def test_seed_changes_result(self):
        engine = TtkDuelEngine(samples=64)
        duel_input = make_input()
        other = engine.resolve(DeterministicRng(derive_seed("test", 1)), duel_input)
        assert engine.resolve(rng(), duel_input) != other

    def test_parallel_matches_serial(self):
        """Samples seed themselves by index, so threading is invisible."""
        duel_input = make_input()
        serial = TtkDuelEngine(samples=64).resolve(rng(), duel_input)
        parallel = TtkDuelEngine(samples=64, workers=4).resolve(rng(), duel_input)
        assert serial == parallel

    def test_easy_duel_always_kills(self):
        result = TtkDuelEngine(samples=128).resolve(rng(), make_input())
        assert result.target_killed
        assert result.win_prob_hint == 1.0
        assert result.shots_fired >= result.hits >= 1
        assert result.time_to_kill > make_agent().reaction_delay()

    def test_no_kill_with_invulnerable_target(self):
        duel_input = make_input(target=make_agent(hp=1e9), max_time=2.0)
        result = TtkDuelEngine(samples=32).resolve(rng(), duel_input)
        assert result == DuelResult(False, math.inf, 0, 0, 0.0)

    def test_no_kill_with_zero_time_cap(self):
        result = TtkDuelEngine(samples=32).resolve(rng(), make_input(max_time=0.0))
        assert not result.target_killed
        assert result.time_to_kill == math.inf
        assert result.shots_fired == 0
        assert result.hits == 0

    def test_zero_samples(self):
        result = TtkDuelEngine(samples=0).resolve(rng(), make_input())
        assert not result.target_killed

    def test_better_aim_is_not_slower(self):
        engine = TtkDuelEngine(samples=256)
        novice = engine.resolve(rng(), make_input(shooter=make_agent(aim=0.1)))
        expert = engine.resolve(rng(), make_input(shooter=make_agent(aim=0.9)))
        assert expert.time_to_kill <= novice.time_to_kill

    def test_more_exposure_is_not_slower(self):
        engine = TtkDuelEngine(samples=256)
        covered = engine.resolve(rng(), make_input(exposure=0.3))
        exposed = engine.resolve(rng(), make_input(exposure=1.0))
        assert exposed.time_to_kill <= covered.time_to_kill

    def test_input_not_mutated(self):
        target = make_agent(hp=100.0, armor=50.0)
        TtkDuelEngine(samples=16).resolve(rng(), make_input(target=target))
        assert target.hp == 100.0
        assert target.armor == 50.0


class TestRaycastDuelEngine:
    """Tests for the geometry-respecting engine."""

    def test_wall_between_blocks_every_shot(self):
        """Shooter (0,0), target (20,0), wall x=10 from y=-5 to 5."""
        engine = RaycastDuelEngine([Segment(10.0, -5.0, 10.0, 5.0)])
        for i in range(10):
            result = engine.resolve(DeterministicRng(derive_seed("occlusion", i)), make_input(max_time=10.0))
            assert result.shots_fired > 0
            assert result.hits == 0
            assert not result.target_killed
            assert result.time_to_kill == math.inf

    def test_wall_behind_target_does_not_block(self):
        engine = RaycastDuelEngine([Segment(30.0, -5.0, 30.0, 5.0)])
        result = engine.resolve(rng(), make_input())
        assert result.hits > 0
        assert result.target_killed

    def test_open_range_kills(self):
        result = RaycastDuelEngine().resolve(rng(), make_input())
        assert result.target_killed
        assert result.win_prob_hint == 0.0
        assert result.shots_fired >= result.hits

    def test_deterministic(self):
        engine = RaycastDuelEngine(MapRuntime.from_def(DefinitionCatalog.get_map("map.sample.box")))
        duel_input = make_input()
        assert engine.resolve(rng(), duel_input) == engine.resolve(rng(), duel_input)

    def test_smoke_reduces_hits(self):
        duel_input = make_input(target=make_agent(hp=1e9), max_time=10.0)
        clear = RaycastDuelEngine().resolve(rng(), duel_input)

        smoke = SmokeField()
        smoke.add_smoke(Vec2(10.0, 0.0), radius=15.0, falloff=0.0, duration=30.0)
        smoked = RaycastDuelEngine(smoke=smoke).resolve(rng(), duel_input)

        assert clear.shots_fired == smoked.shots_fired
        assert smoked.hits < clear.hits

    def test_zero_exposure_never_hits(self):
        result = RaycastDuelEngine().resolve(rng(), make_input(exposure=0.0, max_time=5.0))
        assert result.hits == 0

    def test_input_not_mutated(self):
        target = make_agent(hp=100.0, armor=50.0)
        RaycastDuelEngine().resolve(rng(), make_input(target=target))
        assert target.hp == 100.0
        assert target.armor == 50.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
