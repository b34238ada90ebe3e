from .duels import (
    AgentSpec, EncounterSpec, SmokeSpec, EngineOptions,
    OneWayDuelRequest, TwoWayDuelRequest, MatchupRequest,
    DuelResultResponse, OneWayDuelResponse, TwoWayDuelResponse,
    MatchupResponse, CatalogResponse,
)

__all__ = [
    "AgentSpec", "EncounterSpec", "SmokeSpec", "EngineOptions",
    "OneWayDuelRequest", "TwoWayDuelRequest", "MatchupRequest",
    "DuelResultResponse", "OneWayDuelResponse", "TwoWayDuelResponse",
    "MatchupResponse", "CatalogResponse",
]
