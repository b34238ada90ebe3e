"""Immutable weapon, agent and map definitions consumed by the duel engines.

Definitions are resolved and validated before they reach the engines and are
shared by reference across many duel evaluations, so every type here is a
frozen dataclass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .curves import Curve


class FireMode(Enum):
    SEMI = "semi"
    BURST = "burst"
    AUTO = "auto"


@dataclass(frozen=True)
class TraitBlock:
    """Agent skill traits, each normalized to [0, 1]."""
    aim: float = 0.5
    recoil_control: float = 0.5
    reaction: float = 0.5
    movement: float = 0.5
    game_sense: float = 0.5
    composure: float = 0.5
    teamwork: float = 0.5
    utility: float = 0.5
    discipline: float = 0.5
    aggression: float = 0.5


@dataclass(frozen=True)
class DamageProfile:
    base_damage: float
    head_mult: float = 4.0
    leg_mult: float = 0.75
    # distance -> damage multiplier
    range_multiplier: Curve = field(default_factory=Curve)


@dataclass(frozen=True)
class SpreadProfile:
    base_sigma: float  # radians
    crouch_mult: float = 0.85
    move_sigma_add: float = 0.0  # radians per unit of speed
    jump_sigma_add: float = 0.0
    first_shot_bonus: float = 0.0  # added to sigma on a fresh burst, usually negative


@dataclass(frozen=True)
class RecoilProfile:
    recoil_per_shot: float
    max_recoil: float
    recovery_per_sec: float


@dataclass(frozen=True)
class PenetrationProfile:
    can_penetrate: bool = False
    pen_power: float = 0.0
    damage_loss_per_unit: float = 0.0


@dataclass(frozen=True)
class WeaponDef:
    """Statistics for a single weapon."""
    id: str
    fire_mode: FireMode
    magazine_size: int
    rounds_per_minute: float
    reload_time: float
    damage: DamageProfile
    spread: SpreadProfile
    recoil: RecoilProfile
    penetration: PenetrationProfile = field(default_factory=PenetrationProfile)
    credit_cost: int = 0

    @property
    def shot_interval(self) -> float:
        """Seconds between consecutive shots."""
        return 60.0 / self.rounds_per_minute


@dataclass(frozen=True)
class AgentDef:
    id: str
    display_name: str
    traits: TraitBlock
    base_hp: float = 100.0
    base_armor: float = 0.0
    loadout_weapon_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class WallSeg:
    ax: float
    ay: float
    bx: float
    by: float


@dataclass(frozen=True)
class MapDef:
    id: str
    name: str
    walls: Tuple[WallSeg, ...] = ()
