# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Central configuration for engine tuning parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


def _default_attack_weights() -> Dict[str, float]:
    """Return the per-position attacking involvement weights.

    Returns
    -------
    Dict[str, float]
        Mapping from position code to a weight in ``[0.01, 0.9]``.
    """
    return {
        "GK": 0.01,
        "CB": 0.05,
        "LB": 0.15,
        "RB": 0.15,
        "CDM": 0.2,
        "CM": 0.4,
        "CAM": 0.6,
        "LW": 0.7,
        "RW": 0.7,
        "ST": 0.9,
    }


def _default_defense_weights() -> Dict[str, float]:
    """Return the per-position defensive involvement weights.

    Returns
    -------
    Dict[str, float]
        Mapping from position code to a weight in ``[0.1, 0.95]``.
    """
    return {
        "GK": 0.95,
        "CB": 0.85,
        "LB": 0.7,
        "RB": 0.7,
        "CDM": 0.75,
        "CM": 0.5,
        "CAM": 0.3,
        "LW": 0.2,
        "RW": 0.2,
        "ST": 0.1,
    }


def _default_substitution_fallbacks() -> Dict[str, Tuple[str, ...]]:
    """Return the ordered replacement positions accepted for each position.

    Returns
    -------
    Dict[str, Tuple[str, ...]]
        Mapping from the outgoing player's position to bench positions in
        order of preference.
    """
    return {
        "GK": ("GK",),
        "CB": ("CB", "CDM", "RB", "LB"),
        "LB": ("LB", "LW", "CB"),
        "RB": ("RB", "RW", "CB"),
        "CDM": ("CDM", "CM", "CB"),
        "CM": ("CM", "CDM", "CAM"),
        "CAM": ("CAM", "CM", "RW", "LW"),
        "LW": ("LW", "CAM", "ST", "LB"),
        "RW": ("RW", "CAM", "ST", "RB"),
        "ST": ("ST", "CAM", "RW", "LW"),
    }


@dataclass(slots=True, frozen=True)
class SimulationConfig:
    """Per-match timing and probability controls.

    Parameters
    ----------
    match_duration_ms : float, default=60000.0
        Wall-clock milliseconds mapped onto the 90 simulated minutes.
    event_frequency : float, default=1.5
        Expected number of event passes per simulated minute.
    injury_probability : float, default=0.02
        Chance that an event pass produces an injury.
    card_probability : float, default=0.05
        Chance that a foul is punished with a card.
    """

    match_duration_ms: float = 60000.0
    event_frequency: float = 1.5
    injury_probability: float = 0.02
    card_probability: float = 0.05

    def __post_init__(self) -> None:
        """Reject values the scheduler or event rolls cannot work with."""
        if self.match_duration_ms <= 0:
            raise ValueError("match_duration_ms must be positive")
        if self.event_frequency < 0:
            raise ValueError("event_frequency must not be negative")
        for name in ("injury_probability", "card_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1")

    @property
    def minute_interval(self) -> float:
        """Return the wall-clock seconds that elapse per simulated minute."""
        return self.match_duration_ms / 90 / 1000


@dataclass(slots=True)
class EventProbabilityConfig:
    """Thresholds for the single roll that picks the primary event of a pass.

    Parameters
    ----------
    chance_threshold : float, default=0.15
        Scaled by chance quality; rolls below it create a goal chance.
    foul_threshold : float, default=0.25
        Upper bound of the foul band.
    corner_threshold : float, default=0.30
        Upper bound of the corner band.
    tackle_threshold : float, default=0.35
        Upper bound of the tackle band; anything above yields no event.
    goal_factor : float, default=0.4
        Multiplier applied to the goal chance when rolling for a goal.
    save_factor : float, default=0.7
        Multiplier applied to shot quality when rolling for an on-target save.
    default_goalkeeper_factor : float, default=0.3
        Goalkeeper factor used when the defending side has no goalkeeper in the lineup.
    shot_position_bonus : float, default=30.0
        Weight of the position attack weight inside the shot quality formula.
    shot_quality_scale : float, default=130.0
        Normaliser applied to the raw shot quality.
    assist_probability : float, default=0.7
        Chance that a goal is credited with an assist.
    straight_red_probability : float, default=0.1
        Chance that a first carded offence is a straight red.
    """

    chance_threshold: float = 0.15
    foul_threshold: float = 0.25
    corner_threshold: float = 0.30
    tackle_threshold: float = 0.35
    goal_factor: float = 0.4
    save_factor: float = 0.7
    default_goalkeeper_factor: float = 0.3
    shot_position_bonus: float = 30.0
    shot_quality_scale: float = 130.0
    assist_probability: float = 0.7
    straight_red_probability: float = 0.1


@dataclass(slots=True)
class StaminaConfig:
    """Fatigue parameters applied on every event pass.

    Parameters
    ----------
    drain_min : float, default=0.3
        Lower bound of the per-pass stamina drain.
    drain_max : float, default=0.5
        Upper bound (exclusive) of the per-pass stamina drain.
    low_warning : float, default=30.0
        Crossing below this level triggers a performance note.
    injury_eligible_below : float, default=70.0
        Only players below this stamina can pick up an injury.
    half_time_warning : float, default=50.0
        Players below this level are named in the half-time note.
    """

    drain_min: float = 0.3
    drain_max: float = 0.5
    low_warning: float = 30.0
    injury_eligible_below: float = 70.0
    half_time_warning: float = 50.0


@dataclass(slots=True)
class PossessionConfig:
    """Drift applied to the possession split when a side acts.

    Parameters
    ----------
    max_shift : float, default=5.0
        Upper bound of the uniform shift toward the acting side.
    cap : float, default=70.0
        Maximum share a single side can hold.
    """

    max_shift: float = 5.0
    cap: float = 70.0


@dataclass(slots=True)
class BallConfig:
    """Ball movement on the 0-100 percentage pitch.

    Parameters
    ----------
    home_attack_x : float, default=60.0
        Baseline x target when the home side acts.
    away_attack_x : float, default=40.0
        Baseline x target when the away side acts.
    x_variance : float, default=35.0
        Half-width of the uniform spread around the x baseline.
    y_min : float, default=10.0
        Lowest y target.
    y_max : float, default=90.0
        Highest y target.
    base_speed : float, default=0.5
        Easing factor toward the target before chance quality is added.
    intensity_speed : float, default=0.3
        Extra easing per unit of chance quality.
    jitter : float, default=8.0
        Width of the uniform jitter added on each axis.
    min_coord : float, default=5.0
        Lower clamp for both axes.
    max_coord : float, default=95.0
        Upper clamp for both axes.
    """

    home_attack_x: float = 60.0
    away_attack_x: float = 40.0
    x_variance: float = 35.0
    y_min: float = 10.0
    y_max: float = 90.0
    base_speed: float = 0.5
    intensity_speed: float = 0.3
    jitter: float = 8.0
    min_coord: float = 5.0
    max_coord: float = 95.0


@dataclass(slots=True)
class SubstitutionConfig:
    """Quota and timing of automatic substitutions.

    Parameters
    ----------
    max_substitutions : int, default=5
        Substitutions allowed per side.
    scheduled_minutes : Tuple[int, ...], default=(55, 62, 70, 78, 85)
        Minutes at which each side makes one forced change.
    final_push_minutes : Tuple[int, ...], default=(88, 89)
        Minutes at which each side uses every remaining change.
    emergency_after : int, default=45
        Emergency checks only run after this minute.
    emergency_every : int, default=5
        Emergency checks run on minutes divisible by this value.
    """

    max_substitutions: int = 5
    scheduled_minutes: Tuple[int, ...] = (55, 62, 70, 78, 85)
    final_push_minutes: Tuple[int, ...] = (88, 89)
    emergency_after: int = 45
    emergency_every: int = 5


@dataclass(slots=True)
class MatchTimelineConfig:
    """Simulated minutes at which the match changes phase.

    Parameters
    ----------
    half_time_minute : int, default=45
        Minute at which the half-time whistle blows.
    second_half_minute : int, default=46
        Minute at which the second half kicks off.
    full_time_minute : int, default=90
        Minute at which the match ends.
    """

    half_time_minute: int = 45
    second_half_minute: int = 46
    full_time_minute: int = 90


@dataclass(slots=True)
class PositionConfig:
    """Lookup tables keyed by position code.

    Parameters
    ----------
    attack_weights : Dict[str, float]
        Attacking involvement per position.
    defense_weights : Dict[str, float]
        Defensive involvement per position.
    defensive_positions : Tuple[str, ...], default=("CB", "CDM", "LB", "RB")
        Positions eligible to make a tackle.
    substitution_fallbacks : Dict[str, Tuple[str, ...]]
        Ordered replacement positions used by emergency substitutions.
    """

    attack_weights: Dict[str, float] = field(default_factory=_default_attack_weights)
    defense_weights: Dict[str, float] = field(default_factory=_default_defense_weights)
    defensive_positions: Tuple[str, ...] = ("CB", "CDM", "LB", "RB")
    substitution_fallbacks: Dict[str, Tuple[str, ...]] = field(default_factory=_default_substitution_fallbacks)


@dataclass(slots=True)
class EngineConfig:
    """Top-level container for all engine tuning structures.

    Parameters
    ----------
    simulation : SimulationConfig, default=SimulationConfig()
        Default per-match timing and probabilities.
    events : EventProbabilityConfig, default=EventProbabilityConfig()
        Primary event thresholds and shot factors.
    stamina : StaminaConfig, default=StaminaConfig()
        Fatigue settings.
    possession : PossessionConfig, default=PossessionConfig()
        Possession drift.
    ball : BallConfig, default=BallConfig()
        Ball movement.
    substitutions : SubstitutionConfig, default=SubstitutionConfig()
        Substitution quota and windows.
    timeline : MatchTimelineConfig, default=MatchTimelineConfig()
        Phase transition minutes.
    positions : PositionConfig, default=PositionConfig()
        Position weight and fallback tables.
    """

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    events: EventProbabilityConfig = field(default_factory=EventProbabilityConfig)
    stamina: StaminaConfig = field(default_factory=StaminaConfig)
    possession: PossessionConfig = field(default_factory=PossessionConfig)
    ball: BallConfig = field(default_factory=BallConfig)
    substitutions: SubstitutionConfig = field(default_factory=SubstitutionConfig)
    timeline: MatchTimelineConfig = field(default_factory=MatchTimelineConfig)
    positions: PositionConfig = field(default_factory=PositionConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the engine configuration."""
