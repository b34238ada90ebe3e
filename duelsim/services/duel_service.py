"""Duel service: engine selection by configuration and balance sweeps.

The engine strategy is chosen from Settings.duel_engine ("ttk" or "raycast")
rather than by subclassing; callers just get something satisfying the
DuelEngine protocol.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..config import Settings, get_settings
from .catalog import DefinitionCatalog
from .duel_engine import DuelEngine, DuelInput, DuelResult
from .geometry import MapRuntime
from .raycast_duel_engine import RaycastDuelEngine
from .rng import DeterministicRng, derive_seed
from .smoke_field import SmokeField
from .ttk_duel_engine import TtkDuelEngine
from .two_way_duel import TeamSide, TwoWayDuelResult, resolve_two_way

logger = logging.getLogger(__name__)

ENGINE_TTK = "ttk"
ENGINE_RAYCAST = "raycast"
ENGINE_KINDS = (ENGINE_TTK, ENGINE_RAYCAST)


@dataclass(frozen=True)
class MatchupSummary:
    """Aggregate of many independently seeded two-way duels."""
    rounds: int
    attack_wins: int
    defend_wins: int
    simultaneous: int
    attack_win_rate: float
    defend_win_rate: float
    simultaneous_rate: float
    mean_winner_ttk: Optional[float]
    median_winner_ttk: Optional[float]
    mean_attack_ttk: Optional[float]
    mean_defend_ttk: Optional[float]

    def to_dict(self) -> dict:
        return {
            "rounds": self.rounds,
            "attack_wins": self.attack_wins,
            "defend_wins": self.defend_wins,
            "simultaneous": self.simultaneous,
            "attack_win_rate": self.attack_win_rate,
            "defend_win_rate": self.defend_win_rate,
            "simultaneous_rate": self.simultaneous_rate,
            "mean_winner_ttk": self.mean_winner_ttk,
            "median_winner_ttk": self.median_winner_ttk,
            "mean_attack_ttk": self.mean_attack_ttk,
            "mean_defend_ttk": self.mean_defend_ttk,
        }


def _finite_mean(values: np.ndarray) -> Optional[float]:
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return None
    return float(np.mean(finite))


def _finite_median(values: np.ndarray) -> Optional[float]:
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return None
    return float(np.median(finite))


def summarize(results: List[TwoWayDuelResult]) -> MatchupSummary:
    rounds = len(results)
    winners = np.array([r.winner == TeamSide.ATTACK for r in results], dtype=bool)
    simultaneous = np.array([r.simultaneous for r in results], dtype=bool)
    winner_ttk = np.array([r.winner_ttk for r in results], dtype=float)
    attack_ttk = np.array([r.attack_to_defend.effective_ttk for r in results], dtype=float)
    defend_ttk = np.array([r.defend_to_attack.effective_ttk for r in results], dtype=float)

    attack_wins = int(winners.sum())
    defend_wins = rounds - attack_wins
    simultaneous_count = int(simultaneous.sum())

    return MatchupSummary(
        rounds=rounds,
        attack_wins=attack_wins,
        defend_wins=defend_wins,
        simultaneous=simultaneous_count,
        attack_win_rate=attack_wins / rounds if rounds else 0.0,
        defend_win_rate=defend_wins / rounds if rounds else 0.0,
        simultaneous_rate=simultaneous_count / rounds if rounds else 0.0,
        mean_winner_ttk=_finite_mean(winner_ttk),
        median_winner_ttk=_finite_median(winner_ttk),
        mean_attack_ttk=_finite_mean(attack_ttk),
        mean_defend_ttk=_finite_mean(defend_ttk),
    )


class DuelService:
    """Builds engines from settings and evaluates duels and matchups."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def build_engine(
        self,
        kind: Optional[str] = None,
        map_runtime: Optional[MapRuntime] = None,
        smoke: Optional[SmokeField] = None,
    ) -> DuelEngine:
        """Create the configured duel engine.

        Raises:
            ValueError: If the engine kind is unknown
        """
        kind = (kind or self.settings.duel_engine).strip().lower()

        if kind == ENGINE_TTK:
            return TtkDuelEngine(
                samples=self.settings.ttk_samples,
                workers=self.settings.ttk_workers,
            )
        if kind == ENGINE_RAYCAST:
            if map_runtime is None:
                map_runtime = self.load_map(self.settings.default_map_id)
            return RaycastDuelEngine(map_runtime, smoke)

        raise ValueError(f"Unknown duel engine '{kind}', expected one of {ENGINE_KINDS}")

    @staticmethod
    def load_map(map_id: str) -> MapRuntime:
        map_def = DefinitionCatalog.get_map(map_id)
        if map_def is None:
            raise ValueError(f"Unknown map '{map_id}'")
        return MapRuntime.from_def(map_def)

    def resolve_one_way(self, engine: DuelEngine, duel_input: DuelInput, seed: Optional[int] = None) -> DuelResult:
        seed = self.settings.default_seed if seed is None else seed
        rng = DeterministicRng(derive_seed("duel", seed))
        return engine.resolve(rng, duel_input)

    def resolve_two_way(
        self,
        engine: DuelEngine,
        a_to_b: DuelInput,
        b_to_a: DuelInput,
        seed: Optional[int] = None,
    ) -> TwoWayDuelResult:
        seed = self.settings.default_seed if seed is None else seed
        rng = DeterministicRng(derive_seed("duel", seed))
        return resolve_two_way(engine, rng, a_to_b, b_to_a)

    def run_matchup(
        self,
        engine: DuelEngine,
        a_to_b: DuelInput,
        b_to_a: DuelInput,
        rounds: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> MatchupSummary:
        """Evaluate the same encounter over many independently seeded rounds."""
        rounds = self.settings.matchup_rounds if rounds is None else rounds
        seed = self.settings.default_seed if seed is None else seed

        results = []
        for i in range(rounds):
            rng = DeterministicRng(derive_seed("round", seed, i))
            results.append(resolve_two_way(engine, rng, a_to_b, b_to_a))

        summary = summarize(results)
        mean_ttk = summary.mean_winner_ttk if summary.mean_winner_ttk is not None else math.inf
        logger.info(
            f"Matchup {a_to_b.shooter.weapon.id} vs {b_to_a.shooter.weapon.id} "
            f"over {rounds} rounds: attack {summary.attack_win_rate:.1%}, "
            f"simultaneous {summary.simultaneous_rate:.1%}, mean winner TTK {mean_ttk:.3f}s"
        )
        return summary
