"""Geometry-respecting duel engine.

Samples an explicit aim-error angle per shot and raycasts it against the map
walls and a target hit-circle, with smoke along the sightline inflating sigma.
Use this for "on-camera" duels where peeks and cover matter.

Local frame precondition: the shooter stands at the origin and the target at
(distance, 0). Callers with real battlefield positions must translate and
rotate walls and smokes into this frame before building the engine.
"""

import logging
import math
from typing import Iterable, Optional, Union

from .damage import Damage
from .duel_engine import (
    DuelInput,
    DuelResult,
    choose_zone,
    describe,
    recoil_step,
    target_radius,
)
from .geometry import MapRuntime, Segment, Vec2, first_hit_t, intersect_circle
from .hit_model import HitModel
from .rng import DeterministicRng
from .smoke_field import SmokeField

logger = logging.getLogger(__name__)

SMOKE_SAMPLES = 8
# Full opacity cuts landing chance hard; the floor caps sigma inflation at 5x
SMOKE_ACCURACY_PENALTY = 0.85
MIN_SMOKE_MULT = 0.2
# Rays extend this far past the target
RAY_OVERSHOOT = 20.0


class RaycastDuelEngine:
    """Single-timeline duel against explicit wall geometry and smoke."""

    def __init__(
        self,
        walls: Union[MapRuntime, Iterable[Segment]] = (),
        smoke: Optional[SmokeField] = None,
    ):
        if isinstance(walls, MapRuntime):
            self.map_id = walls.id
            self.walls = walls.walls
        else:
            self.map_id = None
            self.walls = tuple(walls)
        self.smoke = smoke if smoke is not None else SmokeField()

    def resolve(self, rng: DeterministicRng, duel_input: DuelInput) -> DuelResult:
        shooter = duel_input.shooter
        weapon = shooter.weapon
        shot_interval = weapon.shot_interval

        hp = duel_input.target.hp
        armor = duel_input.target.armor

        t = shooter.reaction_delay(extra_penalty=shooter.reaction_timer)
        recoil = 0.0

        shots = 0
        hits = 0

        origin = Vec2(0.0, 0.0)
        target_pos = Vec2(duel_input.distance, 0.0)
        radius = target_radius(duel_input.exposure)
        ray_len = duel_input.distance + RAY_OVERSHOOT

        while hp > 0 and t < duel_input.max_time:
            shots += 1

            # Smokes may be ticked between calls, so re-read per shot
            opacity = self.smoke.integrate_opacity(origin, target_pos, samples=SMOKE_SAMPLES)
            smoke_mult = 1.0 - SMOKE_ACCURACY_PENALTY * opacity

            sigma = HitModel.compute_sigma(
                weapon,
                duel_input.shooter_speed,
                duel_input.shooter_crouched,
                recoil,
                shooter.stress,
                shooter.traits,
            )
            sigma /= max(MIN_SMOKE_MULT, smoke_mult)

            ang_err = rng.next_normal(0.0, sigma)
            ex = origin.x + math.cos(ang_err) * ray_len
            ey = origin.y + math.sin(ang_err) * ray_len

            wall_t = first_hit_t(self.walls, origin.x, origin.y, ex, ey)
            hit_t = intersect_circle(origin.x, origin.y, ex, ey, target_pos.x, target_pos.y, radius)

            # A wall only occludes when it is closer than the target
            if hit_t is not None and hit_t < wall_t:
                hits += 1
                zone = choose_zone(rng, duel_input, sigma)
                dmg = HitModel.shot_damage(weapon, duel_input.distance, zone)
                hp, armor = Damage.apply(hp, armor, dmg)

            recoil = recoil_step(recoil, weapon, shooter.traits, shot_interval)
            t += shot_interval

        if hp <= 0:
            result = DuelResult(True, t, shots, hits)
        else:
            result = DuelResult.no_kill(shots_fired=shots, hits=hits)

        logger.debug(f"Raycast duel on {self.map_id or 'ad-hoc walls'} {describe(duel_input, result)}")
        return result
