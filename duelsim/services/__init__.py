# Core modules (no web dependencies)
from .rng import DeterministicRng, derive_seed
from .curves import Curve
from .definitions import (
    TraitBlock, WeaponDef, DamageProfile, SpreadProfile, RecoilProfile,
    PenetrationProfile, AgentDef, MapDef, WallSeg, FireMode,
)
from .geometry import Vec2, Segment, MapRuntime, intersect_segment, first_hit_t, has_line_of_sight
from .smoke_field import SmokeField, SmokeVolume
from .hit_model import HitModel, HitZone
from .damage import Damage
from .duel_engine import AgentRuntime, DuelInput, DuelResult, DuelEngine
from .ttk_duel_engine import TtkDuelEngine
from .raycast_duel_engine import RaycastDuelEngine
from .two_way_duel import TeamSide, TwoWayDuelResult, resolve_two_way
from .catalog import DefinitionCatalog
from .duel_service import DuelService, MatchupSummary

__all__ = [
    "DeterministicRng",
    "derive_seed",
    "Curve",
    "TraitBlock",
    "WeaponDef",
    "DamageProfile",
    "SpreadProfile",
    "RecoilProfile",
    "PenetrationProfile",
    "AgentDef",
    "MapDef",
    "WallSeg",
    "FireMode",
    "Vec2",
    "Segment",
    "MapRuntime",
    "intersect_segment",
    "first_hit_t",
    "has_line_of_sight",
    "SmokeField",
    "SmokeVolume",
    "HitModel",
    "HitZone",
    "Damage",
    "AgentRuntime",
    "DuelInput",
    "DuelResult",
    "DuelEngine",
    "TtkDuelEngine",
    "RaycastDuelEngine",
    "TeamSide",
    "TwoWayDuelResult",
    "resolve_two_way",
    "DefinitionCatalog",
    "DuelService",
    "MatchupSummary",
]
