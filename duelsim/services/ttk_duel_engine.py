"""Analytic duel engine: no geometry, Monte Carlo over shot timelines.

Each shot's hit probability comes from a Gaussian-disk approximation of the
target's angular size against the shooter's sigma:

    p_hit = 1 - exp(-r_ang^2 / (2 * sigma^2)),  r_ang = atan2(r_world, distance)

Many independent timelines are sampled and the kill statistics averaged.
Every sample derives its own seed from (base draw, sample index), so samples
can run in any order or in parallel without changing the result.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from .damage import Damage
from .duel_engine import (
    DuelInput,
    DuelResult,
    choose_zone,
    describe,
    recoil_step,
    target_radius,
)
from .hit_model import HitModel
from .rng import DeterministicRng, derive_seed

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES = 128
MIN_DISTANCE = 0.1


@dataclass(frozen=True)
class SampleOutcome:
    """One simulated timeline."""
    killed: bool
    time: float
    shots: int
    hits: int


def hit_probability(angular_radius: float, sigma: float) -> float:
    p = 1.0 - math.exp(-(angular_radius * angular_radius) / (2.0 * sigma * sigma))
    return max(0.0, min(1.0, p))


class TtkDuelEngine:
    """Fast duel solver estimating mean time-to-kill.

    Args:
        samples: Number of Monte Carlo timelines per resolve
        workers: Threads used to evaluate samples; 1 runs serially
    """

    def __init__(self, samples: int = DEFAULT_SAMPLES, workers: int = 1):
        self.samples = samples
        self.workers = workers

    def resolve(self, rng: DeterministicRng, duel_input: DuelInput) -> DuelResult:
        base_seed = rng.next_u64()

        if self.workers > 1 and self.samples > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                outcomes = list(pool.map(
                    lambda i: self.run_sample(base_seed, i, duel_input),
                    range(self.samples),
                ))
        else:
            outcomes = [self.run_sample(base_seed, i, duel_input) for i in range(self.samples)]

        result = self._aggregate(outcomes)
        logger.debug(f"TTK duel ({self.samples} samples) {describe(duel_input, result)}")
        return result

    def run_sample(self, base_seed: int, index: int, duel_input: DuelInput) -> SampleOutcome:
        """Simulate a single timeline seeded from (base_seed, index)."""
        sim_rng = DeterministicRng(derive_seed("ttk", base_seed, index))

        shooter = duel_input.shooter
        weapon = shooter.weapon
        shot_interval = weapon.shot_interval

        # Target angular size is fixed for the whole duel
        r_world = target_radius(duel_input.exposure)
        r_ang = math.atan2(r_world, max(MIN_DISTANCE, duel_input.distance))

        hp = duel_input.target.hp
        armor = duel_input.target.armor
        recoil = 0.0
        t = shooter.reaction_delay(extra_penalty=shooter.reaction_timer)

        shots = 0
        hits = 0

        while hp > 0 and t < duel_input.max_time:
            sigma = HitModel.compute_sigma(
                weapon,
                duel_input.shooter_speed,
                duel_input.shooter_crouched,
                recoil,
                shooter.stress,
                shooter.traits,
            )
            p_hit = hit_probability(r_ang, sigma)

            shots += 1
            if sim_rng.next_uniform01() < p_hit:
                hits += 1
                zone = choose_zone(sim_rng, duel_input, sigma)
                dmg = HitModel.shot_damage(weapon, duel_input.distance, zone)
                hp, armor = Damage.apply(hp, armor, dmg)

            recoil = recoil_step(recoil, weapon, shooter.traits, shot_interval)
            t += shot_interval

        return SampleOutcome(killed=hp <= 0, time=t, shots=shots, hits=hits)

    def _aggregate(self, outcomes) -> DuelResult:
        kills = [o for o in outcomes if o.killed]
        if not kills:
            return DuelResult.no_kill()

        kill_count = len(kills)
        return DuelResult(
            target_killed=True,
            time_to_kill=sum(o.time for o in kills) / kill_count,
            shots_fired=sum(o.shots for o in kills) // kill_count,
            hits=sum(o.hits for o in kills) // kill_count,
            win_prob_hint=kill_count / self.samples,
        )
