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
"""Stochastic generation of in-match events from team and player attributes.

One call to :meth:`EventGenerator.generate` is one event pass. A pass picks
the acting side from the overall strengths, drifts possession toward it and
makes a single roll against ordered thresholds to decide the primary event
(goal chance, foul, corner, tackle or nothing). Independently of that roll it
may injure a tired player, then it moves the ball and drains stamina.
"""

from __future__ import annotations

import random
from typing import List, Optional

from matchcast.engine.config import ENGINE_CONFIG, SimulationConfig
from matchcast.engine.events import MatchEvent, Side, other_side
from matchcast.engine.notifications import NotificationHub
from matchcast.engine.sampling import weighted_choice
from matchcast.engine.state import MatchState
from matchcast.engine.strength import attack_strength, attack_weight, defense_strength, overall_strength
from matchcast.models.player import Player


class EventGenerator:
    """Produce the events of a single pass and apply their side effects.

    Parameters
    ----------
    state : MatchState
        Match state mutated by the generated events.
    config : SimulationConfig
        Per-match probabilities (cards, injuries).
    hub : NotificationHub
        Destination for commentary and manager notes.
    rng : random.Random
        Random source for every roll.
    """

    def __init__(
        self,
        state: MatchState,
        config: SimulationConfig,
        hub: NotificationHub,
        rng: random.Random,
    ) -> None:
        """Bind the generator to a match.

        Parameters
        ----------
        state : MatchState
            Match state mutated by the generated events.
        config : SimulationConfig
            Per-match probabilities (cards, injuries).
        hub : NotificationHub
            Destination for commentary and manager notes.
        rng : random.Random
            Random source for every roll.
        """
        self.state = state
        self.config = config
        self.hub = hub
        self.rng = rng

    def generate(self) -> List[MatchEvent]:
        """Run one event pass.

        Returns
        -------
        List[MatchEvent]
            Zero, one or two events in log order: an injury (if any) followed
            by the primary event (if any). Empty, with nothing mutated, when
            neither side has an active player.
        """
        home_strength = overall_strength(self.state.home_team)
        away_strength = overall_strength(self.state.away_team)
        total_strength = home_strength + away_strength
        if total_strength <= 0:
            return []

        acting: Side = "home" if self.rng.random() < home_strength / total_strength else "away"
        attacking_team = self.state.team_for_side(acting)
        defending_team = self.state.team_for_side(other_side(acting))

        self.update_possession(acting)

        attack = attack_strength(attacking_team)
        defense = defense_strength(defending_team)
        chance_quality = attack / (attack + defense) if attack + defense > 0 else 0.0

        cfg = ENGINE_CONFIG.events
        roll = self.rng.random()
        primary: Optional[MatchEvent] = None
        if roll < cfg.chance_threshold * chance_quality:
            primary = self.resolve_chance(acting)
        elif roll < cfg.foul_threshold:
            primary = self.resolve_foul(acting)
        elif roll < cfg.corner_threshold:
            primary = self.resolve_corner(acting)
        elif roll < cfg.tackle_threshold:
            primary = self.resolve_tackle(acting)

        events: List[MatchEvent] = []
        injury = self.resolve_injury()
        if injury:
            events.append(injury)

        self.update_ball(acting, chance_quality)
        self.drain_stamina()

        if primary:
            events.append(primary)
        return events

    def resolve_chance(self, side: Side) -> Optional[MatchEvent]:
        """Turn a created chance into a goal, a save or a miss.

        Parameters
        ----------
        side : {"home", "away"}
            Side that created the chance.

        Returns
        -------
        MatchEvent | None
            ``goal``, ``shot_saved`` or ``shot_missed``; ``None`` when the
            side has nobody to shoot.
        """
        cfg = ENGINE_CONFIG.events
        attacking_team = self.state.team_for_side(side)
        defending_side = other_side(side)
        attacker = weighted_choice(attacking_team.active_players(), attack_weight, self.rng)
        if attacker is None:
            return None

        goalkeeper = self.state.team_for_side(defending_side).goalkeeper()
        if goalkeeper:
            goalkeeper_factor = goalkeeper.rating * (goalkeeper.stamina / 100) / 100
        else:
            goalkeeper_factor = cfg.default_goalkeeper_factor

        shot_quality = (
            attacker.rating * (attacker.stamina / 100) + attack_weight(attacker) * cfg.shot_position_bonus
        ) / cfg.shot_quality_scale
        goal_chance = shot_quality * (1 - goalkeeper_factor * 0.5)
        shot_roll = self.rng.random()
        minute = self.state.current_minute

        if shot_roll < goal_chance * cfg.goal_factor:
            assister = self._select_assister(side, attacker)
            attacker.goals += 1
            if assister:
                assister.assists += 1

            self.state.record_goal(side)
            self.state.shots.increment(side)
            self.state.shots_on_target.increment(side)

            if assister:
                description = (
                    f"GOAL! {attacker.name} scores for {attacking_team.name}! Assisted by {assister.name}."
                )
            else:
                description = f"GOAL! {attacker.name} scores for {attacking_team.name}!"
            self.hub.add_commentary(minute, description, True)
            self.hub.add_manager_note(
                defending_side,
                minute,
                "tactical",
                "Conceded a goal. Consider defensive adjustments.",
                "high",
            )
            return MatchEvent(minute, "goal", side, description, player=attacker, assist_player=assister)

        if shot_roll < shot_quality * cfg.save_factor:
            self.state.shots.increment(side)
            self.state.shots_on_target.increment(side)
            keeper_name = goalkeeper.name if goalkeeper else "The goalkeeper"
            description = f"Save! {keeper_name} denies {attacker.name}'s effort."
            self.hub.add_commentary(minute, description, False)
            return MatchEvent(minute, "shot_saved", side, description, player=attacker)

        self.state.shots.increment(side)
        description = f"{attacker.name} shoots but it goes wide!"
        self.hub.add_commentary(minute, description, False)
        return MatchEvent(minute, "shot_missed", side, description, player=attacker)

    def _select_assister(self, side: Side, scorer: Player) -> Optional[Player]:
        """Pick the teammate credited with the assist, if any.

        Parameters
        ----------
        side : {"home", "away"}
            Scoring side.
        scorer : Player
            Goal scorer, excluded from the draw.

        Returns
        -------
        Player | None
            The assister, or ``None`` for an unassisted goal.
        """
        candidates = [p for p in self.state.team_for_side(side).active_players() if p.player_id != scorer.player_id]
        if not candidates or self.rng.random() > ENGINE_CONFIG.events.assist_probability:
            return None
        return weighted_choice(candidates, lambda p: attack_weight(p) * 0.8 + 0.2, self.rng)

    def resolve_foul(self, side: Side) -> Optional[MatchEvent]:
        """Record a foul by the defending side and decide on a card.

        Parameters
        ----------
        side : {"home", "away"}
            Side in possession; the opposing side commits the foul.

        Returns
        -------
        MatchEvent | None
            ``foul``, ``yellow_card`` or ``red_card`` credited to the fouling
            side; ``None`` when either side has no active player.
        """
        defending_side = other_side(side)
        defending_team = self.state.team_for_side(defending_side)
        fouler = weighted_choice(defending_team.active_players(), attack_weight, self.rng)
        fouled = weighted_choice(self.state.team_for_side(side).active_players(), attack_weight, self.rng)
        if fouler is None or fouled is None:
            return None

        minute = self.state.current_minute
        self.state.fouls.increment(defending_side)

        if self.rng.random() >= self.config.card_probability:
            description = f"Foul by {fouler.name} on {fouled.name}."
            self.hub.add_commentary(minute, description, False)
            return MatchEvent(minute, "foul", defending_side, description, player=fouler)

        if fouler.yellow_cards > 0 or self.rng.random() < ENGINE_CONFIG.events.straight_red_probability:
            if fouler.yellow_cards > 0:
                fouler.yellow_cards += 1
                description = f"Second yellow! RED CARD! {fouler.name} is sent off!"
            else:
                description = f"RED CARD! {fouler.name} is sent off!"
            fouler.red_card = True
            self.hub.add_commentary(minute, description, True)
            self.hub.add_manager_note(
                defending_side,
                minute,
                "warning",
                f"{fouler.name} has been sent off! You are down to "
                f"{len(defending_team.active_players())} players.",
                "high",
            )
            return MatchEvent(minute, "red_card", defending_side, description, player=fouler)

        fouler.yellow_cards += 1
        description = f"Yellow card for {fouler.name}."
        self.hub.add_commentary(minute, description, False)
        if fouler.yellow_cards == 1:
            self.hub.add_manager_note(
                defending_side,
                minute,
                "warning",
                f"{fouler.name} is on a yellow card. Consider substitution to avoid red.",
                "medium",
            )
        return MatchEvent(minute, "yellow_card", defending_side, description, player=fouler)

    def resolve_corner(self, side: Side) -> MatchEvent:
        """Award a corner to ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Side taking the corner.

        Returns
        -------
        MatchEvent
            The ``corner`` event.
        """
        self.state.corners.increment(side)
        description = f"Corner kick for {self.state.team_for_side(side).name}."
        self.hub.add_commentary(self.state.current_minute, description, False)
        return MatchEvent(self.state.current_minute, "corner", side, description)

    def resolve_tackle(self, side: Side) -> MatchEvent:
        """Let the defending side win the ball back with a tackle.

        Parameters
        ----------
        side : {"home", "away"}
            Side in possession; the opposing side makes the tackle.

        Returns
        -------
        MatchEvent
            A ``tackle`` by the first active defensive player of the
            opposing side, or a ``corner`` for ``side`` when there is none.
        """
        defending_side = other_side(side)
        defensive_positions = ENGINE_CONFIG.positions.defensive_positions
        defender = next(
            (
                p
                for p in self.state.team_for_side(defending_side).active_players()
                if p.position in defensive_positions
            ),
            None,
        )
        if defender is None:
            return self.resolve_corner(side)

        description = f"Great tackle by {defender.name}!"
        self.hub.add_commentary(self.state.current_minute, description, False)
        return MatchEvent(self.state.current_minute, "tackle", defending_side, description, player=defender)

    def resolve_injury(self) -> Optional[MatchEvent]:
        """Possibly injure a tired player on a random side.

        Returns
        -------
        MatchEvent | None
            The ``injury`` event, or ``None`` when the roll fails or no
            player on the chosen side is eligible.
        """
        if self.rng.random() >= self.config.injury_probability:
            return None

        side: Side = "home" if self.rng.random() < 0.5 else "away"
        threshold = ENGINE_CONFIG.stamina.injury_eligible_below
        eligible = [p for p in self.state.team_for_side(side).active_players() if p.stamina < threshold]
        if not eligible:
            return None

        minute = self.state.current_minute
        player = eligible[self.rng.randrange(len(eligible))]
        player.is_injured = True
        player.injury_minute = minute

        description = f"Injury concern! {player.name} is down and may need to be substituted."
        self.hub.add_commentary(minute, description, True)
        self.hub.add_manager_note(
            side,
            minute,
            "injury",
            f"{player.name} is injured! Consider making a substitution.",
            "high",
        )
        return MatchEvent(minute, "injury", side, description, player=player)

    def update_possession(self, side: Side) -> None:
        """Drift the possession split toward the acting side.

        Parameters
        ----------
        side : {"home", "away"}
            Acting side.
        """
        cfg = ENGINE_CONFIG.possession
        self.state.possession.shift_toward(side, self.rng.random() * cfg.max_shift, cfg.cap)

    def update_ball(self, side: Side, intensity: float) -> None:
        """Ease the ball toward the acting side's half with some jitter.

        Parameters
        ----------
        side : {"home", "away"}
            Acting side; the ball is pulled toward its attacking end.
        intensity : float
            Chance quality of the pass; higher values move the ball faster.
        """
        cfg = ENGINE_CONFIG.ball
        ball = self.state.ball_position
        base_x = cfg.home_attack_x if side == "home" else cfg.away_attack_x
        target_x = base_x + (self.rng.random() - 0.5) * cfg.x_variance * 2
        target_y = cfg.y_min + self.rng.random() * (cfg.y_max - cfg.y_min)

        move_speed = cfg.base_speed + intensity * cfg.intensity_speed
        ball.x += (target_x - ball.x) * move_speed
        ball.y += (target_y - ball.y) * move_speed

        ball.x += (self.rng.random() - 0.5) * cfg.jitter
        ball.y += (self.rng.random() - 0.5) * cfg.jitter
        ball.clamp(cfg.min_coord, cfg.max_coord)

    def drain_stamina(self) -> None:
        """Apply one pass of fatigue to every active player on both sides."""
        cfg = ENGINE_CONFIG.stamina
        drain = cfg.drain_min + self.rng.random() * (cfg.drain_max - cfg.drain_min)

        for side in ("home", "away"):
            for player in self.state.team_for_side(side).active_players():
                before = player.stamina
                after = player.drain_stamina(drain)
                # Fires once: stamina never recovers during a match.
                if before >= cfg.low_warning > after:
                    self.hub.add_manager_note(
                        side,
                        self.state.current_minute,
                        "performance",
                        f"{player.name} is running low on stamina ({round(after)}%). Consider substitution.",
                        "medium",
                    )
