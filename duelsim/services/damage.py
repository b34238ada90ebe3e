"""Armor-mitigated damage application."""

from typing import Tuple

# Share of raw damage absorbed by armor while any armor remains
ARMOR_ABSORB_RATIO = 0.35


class Damage:

    @staticmethod
    def apply(hp: float, armor: float, raw: float) -> Tuple[float, float]:
        """Apply raw damage to an hp/armor pool.

        While armor > 0, 35% of the raw damage goes to armor and 65% to hp.
        Without armor everything goes to hp. Armor floors at zero; hp is not
        floored, callers treat hp <= 0 as death.

        Returns:
            Tuple of (new_hp, new_armor)
        """
        mitigation = ARMOR_ABSORB_RATIO if armor > 0 else 0.0
        to_hp = raw * (1.0 - mitigation)
        to_armor = raw * mitigation

        return hp - to_hp, max(0.0, armor - to_armor)
