"""Shared duel contract: runtime snapshots, inputs, results and the engine protocol.

A duel is one-directional: the shooter fires at the target until the target
dies or the time cap is reached. Two interchangeable strategies implement it:

- TtkDuelEngine: analytic per-shot hit probability, Monte Carlo over samples
- RaycastDuelEngine: explicit aim-error rays against walls and smoke

Both are selected by configuration (see DuelService) and share the
DuelEngine protocol below.
"""

import math
from dataclasses import dataclass
from typing import Optional, Protocol

from .definitions import AgentDef, TraitBlock, WeaponDef
from .hit_model import HitModel, HitZone
from .rng import DeterministicRng

# Reaction time range in seconds (best to worst reaction trait)
REACTION_FAST = 0.18
REACTION_SLOW = 0.45
STRESS_REACTION_PENALTY = 0.15

# World-space radius of a fully exposed target
TARGET_HIT_RADIUS = 0.30

DEFAULT_MAX_TIME = 3.5


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * max(0.0, min(1.0, t))


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class AgentRuntime:
    """Per-round mutable state of one agent.

    Owned by the caller. Engines copy hp/armor into local accumulators and
    never write back.
    """
    traits: TraitBlock
    weapon: WeaponDef
    hp: float = 100.0
    armor: float = 0.0
    stress: float = 0.0
    reaction_timer: float = 0.0  # extra reaction penalty (flash, concuss, ...)

    @classmethod
    def from_def(
        cls,
        agent: AgentDef,
        weapon: WeaponDef,
        stress: float = 0.0,
        reaction_timer: float = 0.0,
    ) -> "AgentRuntime":
        return cls(
            traits=agent.traits,
            weapon=weapon,
            hp=agent.base_hp,
            armor=agent.base_armor,
            stress=stress,
            reaction_timer=reaction_timer,
        )

    def reaction_delay(self, extra_penalty: float = 0.0) -> float:
        """Seconds before the first shot.

        Interpolated from the reaction trait, plus a stress penalty that
        composure dampens, plus any externally supplied penalty.
        """
        base_rt = _lerp(REACTION_FAST, REACTION_SLOW, 1.0 - self.traits.reaction)
        stress_penalty = STRESS_REACTION_PENALTY * self.stress * (1.0 - self.traits.composure)
        return base_rt + stress_penalty + extra_penalty


@dataclass(frozen=True)
class DuelInput:
    """One-directional encounter parameters.

    exposure is the hittable fraction of the target in [0, 1]; callers clamp
    it before building the input.
    """
    shooter: AgentRuntime
    target: AgentRuntime
    distance: float
    exposure: float
    shooter_speed: float = 0.0
    target_speed: float = 0.0
    shooter_crouched: bool = False
    target_crouched: bool = False
    max_time: float = DEFAULT_MAX_TIME


@dataclass(frozen=True)
class DuelResult:
    target_killed: bool
    time_to_kill: float  # inf when no kill within max_time
    shots_fired: int
    hits: int
    win_prob_hint: float = 0.0  # fraction of Monte Carlo samples with a kill

    @classmethod
    def no_kill(cls, shots_fired: int = 0, hits: int = 0) -> "DuelResult":
        return cls(False, math.inf, shots_fired, hits, 0.0)

    @property
    def effective_ttk(self) -> float:
        return self.time_to_kill if self.target_killed else math.inf

    def to_dict(self) -> dict:
        return {
            "target_killed": self.target_killed,
            "time_to_kill": self.time_to_kill if math.isfinite(self.time_to_kill) else None,
            "shots_fired": self.shots_fired,
            "hits": self.hits,
            "win_prob_hint": self.win_prob_hint,
        }


class DuelEngine(Protocol):
    """Resolves one direction of a duel."""

    def resolve(self, rng: DeterministicRng, duel_input: DuelInput) -> DuelResult:
        ...


def recoil_step(recoil: float, weapon: WeaponDef, traits: TraitBlock, shot_interval: float) -> float:
    """Recoil after one shot: skill-scaled gain up to the cap, then recovery."""
    gain = weapon.recoil.recoil_per_shot * (1.15 - 0.65 * traits.recoil_control)
    recoil = min(weapon.recoil.max_recoil, recoil + gain)
    return max(0.0, recoil - weapon.recoil.recovery_per_sec * shot_interval)


def choose_zone(rng: DeterministicRng, duel_input: DuelInput, sigma: float) -> HitZone:
    """Classify a landed hit as head or torso."""
    share = HitModel.head_share(duel_input.shooter.traits.aim, duel_input.distance, sigma)
    return HitZone.HEAD if rng.next_uniform01() < share else HitZone.TORSO


def target_radius(exposure: float) -> float:
    return TARGET_HIT_RADIUS * clamp01(exposure)


def describe(duel_input: DuelInput, result: Optional[DuelResult] = None) -> str:
    """Short log line for a duel."""
    text = (
        f"{duel_input.shooter.weapon.id} -> hp={duel_input.target.hp:.0f}/"
        f"armor={duel_input.target.armor:.0f} at {duel_input.distance:.1f}u "
        f"exposure={duel_input.exposure:.2f}"
    )
    if result is not None:
        text += (
            f": killed={result.target_killed} ttk={result.time_to_kill:.3f}s "
            f"shots={result.shots_fired} hits={result.hits}"
        )
    return text
