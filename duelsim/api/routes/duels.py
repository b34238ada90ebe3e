from fastapi import APIRouter, Depends, HTTPException
from typing import Optional, Tuple

from ...config import Settings, get_settings
from ...schemas.duels import (
    AgentSpec, EncounterSpec, EngineOptions,
    OneWayDuelRequest, TwoWayDuelRequest, MatchupRequest,
    OneWayDuelResponse, TwoWayDuelResponse, MatchupResponse, CatalogResponse,
)
from ...services.catalog import DefinitionCatalog
from ...services.duel_engine import AgentRuntime, DuelEngine, DuelInput
from ...services.duel_service import DuelService, ENGINE_KINDS, ENGINE_RAYCAST
from ...services.geometry import MapRuntime, Vec2
from ...services.smoke_field import SmokeField

router = APIRouter()


def _build_runtime(spec: AgentSpec) -> AgentRuntime:
    """Resolve an agent spec into a fresh runtime snapshot."""
    agent = DefinitionCatalog.get_agent(spec.agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail=f"Agent {spec.agent_id} not found")

    if spec.weapon_id:
        weapon = DefinitionCatalog.get_weapon(spec.weapon_id)
        if weapon is None:
            raise HTTPException(status_code=404, detail=f"Weapon {spec.weapon_id} not found")
    else:
        weapon = DefinitionCatalog.primary_weapon(agent)
        if weapon is None:
            raise HTTPException(status_code=404, detail=f"Agent {spec.agent_id} has no usable weapon")

    runtime = AgentRuntime.from_def(agent, weapon, stress=spec.stress, reaction_timer=spec.reaction_timer)
    if spec.hp is not None:
        runtime.hp = spec.hp
    if spec.armor is not None:
        runtime.armor = spec.armor
    return runtime


def _build_input(
    shooter: AgentRuntime,
    target: AgentRuntime,
    encounter: EncounterSpec,
    settings: Settings,
) -> DuelInput:
    return DuelInput(
        shooter=shooter,
        target=target,
        distance=encounter.distance,
        exposure=encounter.exposure,
        shooter_speed=encounter.shooter_speed,
        target_speed=encounter.target_speed,
        shooter_crouched=encounter.shooter_crouched,
        target_crouched=encounter.target_crouched,
        max_time=encounter.max_time or settings.default_max_time,
    )


def _mirror(encounter: EncounterSpec) -> EncounterSpec:
    """Same encounter seen from the other side."""
    return EncounterSpec(
        distance=encounter.distance,
        exposure=encounter.exposure,
        shooter_speed=encounter.target_speed,
        target_speed=encounter.shooter_speed,
        shooter_crouched=encounter.target_crouched,
        target_crouched=encounter.shooter_crouched,
        max_time=encounter.max_time,
    )


def _build_engine(options: EngineOptions, service: DuelService) -> Tuple[str, DuelEngine]:
    kind = (options.engine or service.settings.duel_engine).strip().lower()
    if kind not in ENGINE_KINDS:
        raise HTTPException(status_code=400, detail=f"Unknown engine '{kind}', expected one of {list(ENGINE_KINDS)}")

    map_runtime: Optional[MapRuntime] = None
    smoke: Optional[SmokeField] = None
    if kind == ENGINE_RAYCAST:
        map_id = options.map_id or service.settings.default_map_id
        map_def = DefinitionCatalog.get_map(map_id)
        if map_def is None:
            raise HTTPException(status_code=404, detail=f"Map {map_id} not found")
        map_runtime = MapRuntime.from_def(map_def)

        smoke = SmokeField()
        for s in options.smokes:
            smoke.add_smoke(Vec2(s.x, s.y), s.radius, s.falloff, s.duration)

    return kind, service.build_engine(kind, map_runtime=map_runtime, smoke=smoke)


def _two_way_inputs(request: TwoWayDuelRequest, settings: Settings) -> Tuple[DuelInput, DuelInput]:
    attacker = _build_runtime(request.attacker)
    defender = _build_runtime(request.defender)
    back = request.defend_to_attack or _mirror(request.attack_to_defend)
    return (
        _build_input(attacker, defender, request.attack_to_defend, settings),
        _build_input(defender, attacker, back, settings),
    )


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog(settings: Settings = Depends(get_settings)):
    """List the weapons, agents, maps and engines available for duels."""
    return CatalogResponse(
        **DefinitionCatalog.summary(),
        engines=list(ENGINE_KINDS),
        defaults={
            "engine": settings.duel_engine,
            "map_id": settings.default_map_id,
        },
    )


@router.post("/one-way", response_model=OneWayDuelResponse)
def resolve_one_way(request: OneWayDuelRequest, settings: Settings = Depends(get_settings)):
    """Resolve a single shooter -> target direction."""
    service = DuelService(settings)
    kind, engine = _build_engine(request, service)

    shooter = _build_runtime(request.shooter)
    target = _build_runtime(request.target)
    duel_input = _build_input(shooter, target, request.encounter, settings)

    result = service.resolve_one_way(engine, duel_input, seed=request.seed)
    return OneWayDuelResponse(engine=kind, **result.to_dict())


@router.post("/two-way", response_model=TwoWayDuelResponse)
def resolve_two_way(request: TwoWayDuelRequest, settings: Settings = Depends(get_settings)):
    """Resolve attacker vs defender in both directions and pick a winner."""
    service = DuelService(settings)
    kind, engine = _build_engine(request, service)
    a_to_b, b_to_a = _two_way_inputs(request, settings)

    result = service.resolve_two_way(engine, a_to_b, b_to_a, seed=request.seed)
    return TwoWayDuelResponse(engine=kind, **result.to_dict())


@router.post("/matchup", response_model=MatchupResponse)
def run_matchup(request: MatchupRequest, settings: Settings = Depends(get_settings)):
    """Evaluate the same two-way duel over many independently seeded rounds."""
    rounds = request.rounds or settings.matchup_rounds
    if rounds > settings.max_matchup_rounds:
        raise HTTPException(
            status_code=400,
            detail=f"rounds must be <= {settings.max_matchup_rounds}",
        )

    service = DuelService(settings)
    kind, engine = _build_engine(request, service)
    a_to_b, b_to_a = _two_way_inputs(request, settings)

    summary = service.run_matchup(engine, a_to_b, b_to_a, rounds=rounds, seed=request.seed)
    return MatchupResponse(engine=kind, **summary.to_dict())
