"""Hit model: aim error, range falloff and hit-zone multipliers.

Sigma is the standard deviation of the simulated aim-error angle in radians.
It starts from the weapon's base spread and is shaped by movement, stance,
recoil, aim skill and stress:

    sigma = (base + speed * move_add + recoil * 0.0035)
            * crouch_mult (if crouched)
            * (1.15 - 0.65 * aim)
            * (1 + 0.75 * stress * (1 - composure))
            + first_shot_bonus (if recoil < 0.05)

floored at 5e-4 so a shot is never a certainty.
"""

from enum import Enum

from .definitions import TraitBlock, WeaponDef

RECOIL_TO_SIGMA = 0.0035
FRESH_BURST_RECOIL = 0.05
MIN_SIGMA = 0.0005

# Aim skill: no skill = 1.15x spread, full skill = 0.5x
AIM_SIGMA_BASE = 1.15
AIM_SIGMA_SLOPE = 0.65

STRESS_SIGMA_PENALTY = 0.75

# Head share tuning
HEAD_SHARE_BASE = 0.10
HEAD_SHARE_AIM_WEIGHT = 0.35
HEAD_SHARE_FALLOFF_DISTANCE = 45.0
HEAD_SHARE_REFERENCE_SIGMA = 0.012
HEAD_SHARE_MIN = 0.08
HEAD_SHARE_MAX = 0.55


class HitZone(Enum):
    HEAD = "head"
    TORSO = "torso"
    LEGS = "legs"


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class HitModel:
    """Converts weapon, stance and skill into aiming error and damage multipliers."""

    @staticmethod
    def compute_sigma(
        weapon: WeaponDef,
        speed: float,
        crouched: bool,
        recoil: float,
        stress: float,
        traits: TraitBlock,
    ) -> float:
        spread = weapon.spread

        sigma = spread.base_sigma
        sigma += speed * spread.move_sigma_add
        sigma += recoil * RECOIL_TO_SIGMA
        if crouched:
            sigma *= spread.crouch_mult

        sigma *= AIM_SIGMA_BASE - AIM_SIGMA_SLOPE * traits.aim
        # Composure dampens the stress penalty
        sigma *= 1.0 + STRESS_SIGMA_PENALTY * stress * (1.0 - traits.composure)

        if recoil < FRESH_BURST_RECOIL:
            sigma += spread.first_shot_bonus

        return max(MIN_SIGMA, sigma)

    @staticmethod
    def range_mult(weapon: WeaponDef, distance: float) -> float:
        return weapon.damage.range_multiplier.evaluate(distance)

    @staticmethod
    def zone_mult(weapon: WeaponDef, zone: HitZone) -> float:
        if zone == HitZone.HEAD:
            return weapon.damage.head_mult
        if zone == HitZone.LEGS:
            return weapon.damage.leg_mult
        return 1.0

    @staticmethod
    def head_share(aim: float, distance: float, sigma: float) -> float:
        """Probability that a landed hit is a headshot.

        Rises with aim skill and proximity, falls as sigma grows.
        """
        dist_factor = _clamp(1.0 - distance / HEAD_SHARE_FALLOFF_DISTANCE, 0.1, 1.0)
        sigma_factor = _clamp(HEAD_SHARE_REFERENCE_SIGMA / max(MIN_SIGMA, sigma), 0.4, 1.2)
        raw = HEAD_SHARE_BASE + HEAD_SHARE_AIM_WEIGHT * aim * dist_factor * sigma_factor
        return _clamp(raw, HEAD_SHARE_MIN, HEAD_SHARE_MAX)

    @staticmethod
    def shot_damage(weapon: WeaponDef, distance: float, zone: HitZone) -> float:
        """Raw damage of one landed hit before armor."""
        return (
            weapon.damage.base_damage
            * HitModel.range_mult(weapon, distance)
            * HitModel.zone_mult(weapon, zone)
        )
