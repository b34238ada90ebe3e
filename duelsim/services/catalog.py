"""Built-in sample definitions for duel evaluation.

Stand-ins for externally loaded definition files: a handful of weapon
archetypes, agent archetypes and one small map, with lookup helpers.
Distances are in map units (~1 unit per meter).
"""

from typing import Dict, List, Optional

from .curves import Curve
from .definitions import (
    AgentDef,
    DamageProfile,
    FireMode,
    MapDef,
    PenetrationProfile,
    RecoilProfile,
    SpreadProfile,
    TraitBlock,
    WallSeg,
    WeaponDef,
)


class DefinitionCatalog:
    """Catalog of sample weapons, agents and maps."""

    WEAPONS: Dict[str, WeaponDef] = {
        "weapon.pistol.classic_like": WeaponDef(
            id="weapon.pistol.classic_like",
            fire_mode=FireMode.SEMI,
            credit_cost=0,
            magazine_size=12,
            rounds_per_minute=400.0,
            reload_time=1.75,
            damage=DamageProfile(
                base_damage=26.0,
                head_mult=3.0,
                leg_mult=0.85,
                range_multiplier=Curve([(0.0, 1.0), (30.0, 1.0), (50.0, 0.77)]),
            ),
            spread=SpreadProfile(
                base_sigma=0.010,
                crouch_mult=0.85,
                move_sigma_add=0.004,
                jump_sigma_add=0.05,
                first_shot_bonus=-0.003,
            ),
            recoil=RecoilProfile(recoil_per_shot=0.8, max_recoil=6.0, recovery_per_sec=6.0),
            penetration=PenetrationProfile(can_penetrate=False),
        ),
        "weapon.smg.spectre_like": WeaponDef(
            id="weapon.smg.spectre_like",
            fire_mode=FireMode.AUTO,
            credit_cost=1600,
            magazine_size=30,
            rounds_per_minute=800.0,
            reload_time=2.25,
            damage=DamageProfile(
                base_damage=26.0,
                head_mult=3.0,
                leg_mult=0.85,
                range_multiplier=Curve([(0.0, 1.0), (20.0, 1.0), (50.0, 0.77)]),
            ),
            spread=SpreadProfile(
                base_sigma=0.011,
                crouch_mult=0.85,
                move_sigma_add=0.002,
                jump_sigma_add=0.04,
                first_shot_bonus=-0.002,
            ),
            recoil=RecoilProfile(recoil_per_shot=0.6, max_recoil=7.0, recovery_per_sec=5.0),
            penetration=PenetrationProfile(can_penetrate=True, pen_power=0.5, damage_loss_per_unit=0.4),
        ),
        "weapon.rifle.ak_like": WeaponDef(
            id="weapon.rifle.ak_like",
            fire_mode=FireMode.AUTO,
            credit_cost=2900,
            magazine_size=25,
            rounds_per_minute=600.0,
            reload_time=2.5,
            damage=DamageProfile(
                base_damage=40.0,
                head_mult=4.0,
                leg_mult=0.85,
                range_multiplier=Curve([(0.0, 1.0), (50.0, 1.0)]),
            ),
            spread=SpreadProfile(
                base_sigma=0.008,
                crouch_mult=0.85,
                move_sigma_add=0.006,
                jump_sigma_add=0.08,
                first_shot_bonus=-0.003,
            ),
            recoil=RecoilProfile(recoil_per_shot=1.0, max_recoil=10.0, recovery_per_sec=8.0),
            penetration=PenetrationProfile(can_penetrate=True, pen_power=1.0, damage_loss_per_unit=0.25),
        ),
        "weapon.rifle.m4_like": WeaponDef(
            id="weapon.rifle.m4_like",
            fire_mode=FireMode.AUTO,
            credit_cost=2900,
            magazine_size=30,
            rounds_per_minute=660.0,
            reload_time=2.5,
            damage=DamageProfile(
                base_damage=39.0,
                head_mult=4.0,
                leg_mult=0.85,
                range_multiplier=Curve([(0.0, 1.0), (15.0, 1.0), (30.0, 0.9), (50.0, 0.85)]),
            ),
            spread=SpreadProfile(
                base_sigma=0.007,
                crouch_mult=0.85,
                move_sigma_add=0.005,
                jump_sigma_add=0.08,
                first_shot_bonus=-0.002,
            ),
            recoil=RecoilProfile(recoil_per_shot=0.8, max_recoil=8.0, recovery_per_sec=8.0),
            penetration=PenetrationProfile(can_penetrate=True, pen_power=1.0, damage_loss_per_unit=0.25),
        ),
        "weapon.sniper.awp_like": WeaponDef(
            id="weapon.sniper.awp_like",
            fire_mode=FireMode.SEMI,
            credit_cost=4700,
            magazine_size=5,
            rounds_per_minute=41.0,
            reload_time=3.7,
            damage=DamageProfile(
                base_damage=150.0,
                head_mult=1.7,
                leg_mult=0.85,
                range_multiplier=Curve(),
            ),
            spread=SpreadProfile(
                base_sigma=0.004,
                crouch_mult=0.9,
                move_sigma_add=0.03,
                jump_sigma_add=0.2,
                first_shot_bonus=-0.002,
            ),
            recoil=RecoilProfile(recoil_per_shot=6.0, max_recoil=6.0, recovery_per_sec=4.0),
            penetration=PenetrationProfile(can_penetrate=True, pen_power=2.0, damage_loss_per_unit=0.1),
        ),
    }

    AGENTS: Dict[str, AgentDef] = {
        "agent.sample.entry": AgentDef(
            id="agent.sample.entry",
            display_name="Entry",
            base_hp=100.0,
            base_armor=50.0,
            traits=TraitBlock(
                aim=0.75, recoil_control=0.65, reaction=0.8, movement=0.8, game_sense=0.55,
                composure=0.5, teamwork=0.5, utility=0.4, discipline=0.45, aggression=0.85,
            ),
            loadout_weapon_ids=("weapon.rifle.ak_like", "weapon.pistol.classic_like"),
        ),
        "agent.sample.anchor": AgentDef(
            id="agent.sample.anchor",
            display_name="Anchor",
            base_hp=100.0,
            base_armor=50.0,
            traits=TraitBlock(
                aim=0.65, recoil_control=0.7, reaction=0.6, movement=0.45, game_sense=0.75,
                composure=0.8, teamwork=0.7, utility=0.6, discipline=0.8, aggression=0.3,
            ),
            loadout_weapon_ids=("weapon.rifle.m4_like", "weapon.pistol.classic_like"),
        ),
        "agent.sample.awper": AgentDef(
            id="agent.sample.awper",
            display_name="AWPer",
            base_hp=100.0,
            base_armor=50.0,
            traits=TraitBlock(
                aim=0.85, recoil_control=0.5, reaction=0.75, movement=0.5, game_sense=0.7,
                composure=0.75, teamwork=0.5, utility=0.3, discipline=0.7, aggression=0.4,
            ),
            loadout_weapon_ids=("weapon.sniper.awp_like", "weapon.pistol.classic_like"),
        ),
        "agent.sample.rookie": AgentDef(
            id="agent.sample.rookie",
            display_name="Rookie",
            base_hp=100.0,
            base_armor=0.0,
            traits=TraitBlock(
                aim=0.3, recoil_control=0.25, reaction=0.35, movement=0.4, game_sense=0.3,
                composure=0.3, teamwork=0.4, utility=0.3, discipline=0.3, aggression=0.6,
            ),
            loadout_weapon_ids=("weapon.pistol.classic_like",),
        ),
    }

    # A box room with a pillar in the middle of the shooter's +X lane
    MAPS: Dict[str, MapDef] = {
        "map.sample.box": MapDef(
            id="map.sample.box",
            name="Sample Box",
            walls=(
                WallSeg(-5.0, -30.0, 60.0, -30.0),
                WallSeg(60.0, -30.0, 60.0, 30.0),
                WallSeg(60.0, 30.0, -5.0, 30.0),
                WallSeg(-5.0, 30.0, -5.0, -30.0),
                WallSeg(25.0, 2.0, 25.0, 6.0),
            ),
        ),
        "map.sample.open": MapDef(id="map.sample.open", name="Open Range"),
    }

    @classmethod
    def get_weapon(cls, weapon_id: str) -> Optional[WeaponDef]:
        """Get a weapon by id (case-insensitive)."""
        return cls.WEAPONS.get(weapon_id.strip().lower())

    @classmethod
    def get_agent(cls, agent_id: str) -> Optional[AgentDef]:
        return cls.AGENTS.get(agent_id.strip().lower())

    @classmethod
    def get_map(cls, map_id: str) -> Optional[MapDef]:
        return cls.MAPS.get(map_id.strip().lower())

    @classmethod
    def primary_weapon(cls, agent: AgentDef) -> Optional[WeaponDef]:
        """First resolvable weapon in the agent's loadout."""
        for weapon_id in agent.loadout_weapon_ids:
            weapon = cls.get_weapon(weapon_id)
            if weapon is not None:
                return weapon
        return None

    @classmethod
    def summary(cls) -> Dict[str, List[str]]:
        return {
            "weapons": sorted(cls.WEAPONS),
            "agents": sorted(cls.AGENTS),
            "maps": sorted(cls.MAPS),
        }
