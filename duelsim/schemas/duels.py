from pydantic import BaseModel, Field
from typing import Optional, List, Dict


class AgentSpec(BaseModel):
    """Agent for a duel: definition id plus per-round state overrides."""
    agent_id: str
    weapon_id: Optional[str] = None  # defaults to the agent's primary weapon
    hp: Optional[float] = Field(default=None, ge=0)
    armor: Optional[float] = Field(default=None, ge=0)
    stress: float = Field(default=0.0, ge=0, le=1)
    reaction_timer: float = Field(default=0.0, ge=0)  # extra reaction penalty (s)


class EncounterSpec(BaseModel):
    """One-directional encounter parameters, from the shooter's point of view."""
    distance: float = Field(gt=0)
    exposure: float = Field(default=1.0, ge=0, le=1)
    shooter_speed: float = Field(default=0.0, ge=0)
    target_speed: float = Field(default=0.0, ge=0)
    shooter_crouched: bool = False
    target_crouched: bool = False
    max_time: Optional[float] = Field(default=None, gt=0)


class SmokeSpec(BaseModel):
    """Smoke volume in the shooter's local frame (shooter at origin, target on +X)."""
    x: float
    y: float
    radius: float = Field(gt=0)
    falloff: float = Field(default=0.5, ge=0, le=1)
    duration: float = Field(default=15.0, gt=0)


class EngineOptions(BaseModel):
    engine: Optional[str] = None  # "ttk" or "raycast", defaults to settings
    map_id: Optional[str] = None  # raycast only
    smokes: List[SmokeSpec] = []  # raycast only
    seed: Optional[int] = None


class OneWayDuelRequest(EngineOptions):
    shooter: AgentSpec
    target: AgentSpec
    encounter: EncounterSpec


class TwoWayDuelRequest(EngineOptions):
    attacker: AgentSpec
    defender: AgentSpec
    attack_to_defend: EncounterSpec
    # Mirrors attack_to_defend with shooter/target roles swapped when omitted
    defend_to_attack: Optional[EncounterSpec] = None


class MatchupRequest(TwoWayDuelRequest):
    rounds: Optional[int] = Field(default=None, gt=0)


class DuelResultResponse(BaseModel):
    target_killed: bool
    time_to_kill: Optional[float] = None  # null when no kill within max_time
    shots_fired: int
    hits: int
    win_prob_hint: float = 0.0


class TwoWayDuelResponse(BaseModel):
    engine: str
    winner: str  # 'attack' or 'defend'
    winner_ttk: Optional[float] = None
    loser_ttk: Optional[float] = None
    simultaneous: bool
    attack_to_defend: DuelResultResponse
    defend_to_attack: DuelResultResponse


class OneWayDuelResponse(DuelResultResponse):
    engine: str


class MatchupResponse(BaseModel):
    engine: str
    rounds: int
    attack_wins: int
    defend_wins: int
    simultaneous: int
    attack_win_rate: float
    defend_win_rate: float
    simultaneous_rate: float
    mean_winner_ttk: Optional[float] = None
    median_winner_ttk: Optional[float] = None
    mean_attack_ttk: Optional[float] = None
    mean_defend_ttk: Optional[float] = None


class CatalogResponse(BaseModel):
    weapons: List[str]
    agents: List[str]
    maps: List[str]
    engines: List[str]
    defaults: Dict[str, str]
