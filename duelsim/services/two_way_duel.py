"""Two-way duel composition.

Resolves "both shoot each other" by running an engine once in each direction
and comparing times-to-kill. Side A is the attacker, side B the defender.

Tie-break policy:
- Neither side kills within the time cap: the defender holds and wins.
- Both kill and the TTKs differ by less than SIMULTANEOUS_WINDOW: the trade
  is flagged simultaneous and the attacker is the nominal winner.
- Otherwise the strictly faster side wins.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from .duel_engine import DuelEngine, DuelInput, DuelResult
from .rng import DeterministicRng, derive_seed

logger = logging.getLogger(__name__)

SIMULTANEOUS_WINDOW = 0.03  # seconds


class TeamSide(Enum):
    ATTACK = "attack"
    DEFEND = "defend"


@dataclass(frozen=True)
class TwoWayDuelResult:
    winner: TeamSide
    winner_ttk: float
    loser_ttk: float
    simultaneous: bool
    attack_to_defend: DuelResult
    defend_to_attack: DuelResult

    def to_dict(self) -> dict:
        def _finite(value: float):
            return value if math.isfinite(value) else None

        return {
            "winner": self.winner.value,
            "winner_ttk": _finite(self.winner_ttk),
            "loser_ttk": _finite(self.loser_ttk),
            "simultaneous": self.simultaneous,
            "attack_to_defend": self.attack_to_defend.to_dict(),
            "defend_to_attack": self.defend_to_attack.to_dict(),
        }


def resolve_two_way(
    engine: DuelEngine,
    rng: DeterministicRng,
    a_to_b: DuelInput,
    b_to_a: DuelInput,
) -> TwoWayDuelResult:
    """Run both directions and pick a winner.

    Both direction generators are forked before either engine call, so the
    order in which directions are evaluated never affects their outcomes.
    """
    rng_a = DeterministicRng(derive_seed("A-to-B", rng.next_u64()))
    rng_b = DeterministicRng(derive_seed("B-to-A", rng.next_u64()))

    a2b = engine.resolve(rng_a, a_to_b)
    b2a = engine.resolve(rng_b, b_to_a)

    a_ttk = a2b.effective_ttk
    b_ttk = b2a.effective_ttk

    if math.isinf(a_ttk) and math.isinf(b_ttk):
        result = TwoWayDuelResult(TeamSide.DEFEND, b_ttk, a_ttk, False, a2b, b2a)
    elif abs(a_ttk - b_ttk) < SIMULTANEOUS_WINDOW:
        result = TwoWayDuelResult(TeamSide.ATTACK, a_ttk, b_ttk, True, a2b, b2a)
    elif a_ttk < b_ttk:
        result = TwoWayDuelResult(TeamSide.ATTACK, a_ttk, b_ttk, False, a2b, b2a)
    else:
        result = TwoWayDuelResult(TeamSide.DEFEND, b_ttk, a_ttk, False, a2b, b2a)

    logger.debug(
        f"Two-way duel: winner={result.winner.value} simultaneous={result.simultaneous} "
        f"a_ttk={a_ttk:.3f} b_ttk={b_ttk:.3f}"
    )
    return result
