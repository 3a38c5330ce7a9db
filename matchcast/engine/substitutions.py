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
"""Manual, scheduled and emergency substitutions under a per-team quota."""

from __future__ import annotations

from typing import Callable, Optional

from matchcast.engine.config import ENGINE_CONFIG
from matchcast.engine.events import MatchEvent, Side
from matchcast.engine.notifications import NotificationHub
from matchcast.engine.state import MatchState
from matchcast.models.player import Player
from matchcast.models.team import Team


def best_substitute(team: Team, player_out: Player) -> Optional[Player]:
    """Find the bench player that best covers ``player_out``'s position.

    Parameters
    ----------
    team : Team
        Team making the change.
    player_out : Player
        Player who needs replacing.

    Returns
    -------
    Player | None
        The first fit, uninjured substitute following the position fallback
        table, otherwise any fit substitute, otherwise ``None``.
    """
    available = [p for p in team.available_substitutes() if not p.is_injured]
    fallbacks = ENGINE_CONFIG.positions.substitution_fallbacks.get(player_out.position, (player_out.position,))
    for position in fallbacks:
        match = next((p for p in available if p.position == position), None)
        if match:
            return match
    return available[0] if available else None


class SubstitutionPolicy:
    """Apply substitutions to a match and enforce the quota.

    Every trigger goes through :meth:`substitute`, so the quota, bench and
    lineup checks live in one place. When two triggers target the same
    player in one minute the first one wins and the second simply fails.

    Parameters
    ----------
    state : MatchState
        Match state whose teams are modified.
    hub : NotificationHub
        Destination for commentary and manager notes.
    record_event : Callable[[MatchEvent], None]
        Appends a substitution event to the match log and publishes it.
    """

    def __init__(
        self,
        state: MatchState,
        hub: NotificationHub,
        record_event: Callable[[MatchEvent], None],
    ) -> None:
        """Bind the policy to a match.

        Parameters
        ----------
        state : MatchState
            Match state whose teams are modified.
        hub : NotificationHub
            Destination for commentary and manager notes.
        record_event : Callable[[MatchEvent], None]
            Appends a substitution event to the match log and publishes it.
        """
        self.state = state
        self.hub = hub
        self.record_event = record_event

    def substitute(self, side: Side, player_out_id: str, player_in_id: str) -> bool:
        """Replace a lineup player with a bench player.

        Parameters
        ----------
        side : {"home", "away"}
            Team making the change.
        player_out_id : str
            Id of a lineup player who has not been sent off.
        player_in_id : str
            Id of any bench player, including one substituted off earlier.

        Returns
        -------
        bool
            ``False``, with nothing changed, when the match is over, the
            quota is used up or either id is not eligible.
        """
        if self.state.is_full_time:
            return False

        team = self.state.team_for_side(side)
        if team.substitutions_made >= team.max_substitutions:
            return False

        player_out = team.find_in_lineup(player_out_id)
        player_in = team.find_on_bench(player_in_id)
        if player_out is None or player_out.red_card:
            return False
        if player_in is None:
            return False

        team.swap(player_out, player_in)

        minute = self.state.current_minute
        description = f"Substitution for {team.name}: {player_in.name} comes on for {player_out.name}."
        self.record_event(
            MatchEvent(minute, "substitution", side, description, player=player_in, replaced_player=player_out)
        )
        self.hub.add_commentary(minute, description, False)
        self.hub.add_manager_note(
            side,
            minute,
            "substitution",
            f"{player_in.name} ({player_in.position}, {player_in.rating}) replaces {player_out.name}.",
            "low",
        )
        return True

    def force_substitution(self, side: Side) -> bool:
        """Make one automatic change for ``side``.

        The outgoing player is the outfield player with the highest priority:
        injured first, then booked, then the most tired.

        Parameters
        ----------
        side : {"home", "away"}
            Team making the change.

        Returns
        -------
        bool
            ``True`` when a substitution was made.
        """
        team = self.state.team_for_side(side)
        if not team.can_substitute:
            return False

        eligible = [p for p in team.lineup if not p.red_card and p.position != "GK"]
        if not eligible:
            return False

        player_out = min(eligible, key=lambda p: (not p.is_injured, p.yellow_cards == 0, p.stamina))
        available = team.available_substitutes()
        player_in = next((p for p in available if not p.is_injured), available[0])
        return self.substitute(side, player_out.player_id, player_in.player_id)

    def complete_substitutions(self, side: Side) -> int:
        """Use every remaining change for ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Team making the changes.

        Returns
        -------
        int
            Number of substitutions made.
        """
        made = 0
        while self.state.team_for_side(side).can_substitute:
            if not self.force_substitution(side):
                break
            made += 1
        return made

    def emergency_substitution(self, side: Side) -> bool:
        """Replace the first injured player of ``side`` with a positional fit.

        Parameters
        ----------
        side : {"home", "away"}
            Team making the change.

        Returns
        -------
        bool
            ``True`` when an injured player was replaced.
        """
        team = self.state.team_for_side(side)
        if not team.can_substitute:
            return False

        injured = next((p for p in team.lineup if p.is_injured and not p.red_card), None)
        if injured is None:
            return False

        substitute = best_substitute(team, injured)
        if substitute is None:
            return False
        return self.substitute(side, injured.player_id, substitute.player_id)

    def run_scheduled(self, minute: int) -> None:
        """Fire the forced substitutions due at ``minute``.

        Parameters
        ----------
        minute : int
            Simulated minute just reached.
        """
        cfg = ENGINE_CONFIG.substitutions
        if minute in cfg.scheduled_minutes:
            self.force_substitution("home")
            self.force_substitution("away")
        if minute in cfg.final_push_minutes:
            self.complete_substitutions("home")
            self.complete_substitutions("away")

    def run_emergency(self, minute: int) -> None:
        """Replace injured players when an emergency check is due.

        Parameters
        ----------
        minute : int
            Simulated minute just reached.
        """
        cfg = ENGINE_CONFIG.substitutions
        if minute > cfg.emergency_after and minute % cfg.emergency_every == 0:
            self.emergency_substitution("home")
            self.emergency_substitution("away")
