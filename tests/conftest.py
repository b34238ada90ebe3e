"""Shared fixtures for duel engine tests."""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from duelsim.services.curves import Curve
from duelsim.services.definitions import (
    DamageProfile, FireMode, RecoilProfile, SpreadProfile, TraitBlock, WeaponDef
)
from duelsim.services.duel_engine import AgentRuntime, DuelInput


# Wide-spread rifle so hit chances stay well away from 0 and 1 at ~20 units
TEST_RIFLE = WeaponDef(
    id="weapon.test.rifle",
    fire_mode=FireMode.AUTO,
    magazine_size=30,
    rounds_per_minute=600.0,
    reload_time=2.5,
    damage=DamageProfile(base_damage=40.0, head_mult=4.0, leg_mult=0.85, range_multiplier=Curve()),
    spread=SpreadProfile(base_sigma=0.02, crouch_mult=0.85, move_sigma_add=0.01, first_shot_bonus=0.0),
    recoil=RecoilProfile(recoil_per_shot=0.5, max_recoil=5.0, recovery_per_sec=5.0),
)


def make_agent(
    aim: float = 0.75,
    hp: float = 100.0,
    armor: float = 50.0,
    weapon: WeaponDef = TEST_RIFLE,
    **traits,
) -> AgentRuntime:
    return AgentRuntime(
        traits=TraitBlock(aim=aim, recoil_control=0.65, reaction=0.7, composure=0.6, **traits),
        weapon=weapon,
        hp=hp,
        armor=armor,
    )


def make_input(
    shooter: AgentRuntime = None,
    target: AgentRuntime = None,
    distance: float = 20.0,
    exposure: float = 1.0,
    max_time: float = 20.0,
    **kwargs,
) -> DuelInput:
    return DuelInput(
        shooter=shooter or make_agent(),
        target=target or make_agent(),
        distance=distance,
        exposure=exposure,
        max_time=max_time,
        **kwargs,
    )


@pytest.fixture
def rifle() -> WeaponDef:
    return TEST_RIFLE


@pytest.fixture
def duel_input() -> DuelInput:
    return make_input()
