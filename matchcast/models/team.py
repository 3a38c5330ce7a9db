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
"""Team domain model: a starting eleven, a bench and the substitution quota."""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from matchcast.models.player import Player

FORMATIONS: Tuple[str, ...] = ("4-3-3", "4-4-2", "3-5-2", "4-2-3-1", "5-3-2")

LINEUP_SIZE = 11


@dataclass
class Team:
    """Squad taking part in a single match.

    Sent-off players stay in ``lineup`` so the array keeps its eleven slots;
    every "active" computation filters them out instead.

    Parameters
    ----------
    team_id : str
        Unique identifier for the team.
    name : str
        Display name for the squad.
    lineup : List[Player]
        The eleven players on the pitch, in display order.
    bench : List[Player]
        Substitutes, in order of preference.
    short_name : str, default=""
        Three-letter style abbreviation used on scoreboards.
    color : str, default="#FFFFFF"
        Primary kit colour as a hex string.
    manager : str, default=""
        Name of the manager.
    formation : str, default="4-3-3"
        Display-only formation tag, one of ``FORMATIONS``.
    substitutions_made : int, default=0
        Number of substitutions already used.
    max_substitutions : int, default=5
        Substitution quota for the match.
    """

    team_id: str
    name: str
    lineup: List[Player]
    bench: List[Player]
    short_name: str = ""
    color: str = "#FFFFFF"
    manager: str = ""
    formation: str = "4-3-3"
    substitutions_made: int = 0
    max_substitutions: int = 5

    def __post_init__(self) -> None:
        """Validate that the roster can start a match."""
        if len(self.lineup) != LINEUP_SIZE:
            raise ValueError("Team must have exactly 11 players in the lineup")
        if not self.bench:
            raise ValueError("Team must have at least one substitute on the bench")
        if self.formation not in FORMATIONS:
            raise ValueError(f"Unsupported formation: {self.formation}")
        ids = [p.player_id for p in self.lineup + self.bench]
        if len(ids) != len(set(ids)):
            raise ValueError("Player ids must be unique within a team")
        if not self.short_name:
            self.short_name = self.name[:3].upper()

    @property
    def can_substitute(self) -> bool:
        """Return ``True`` while quota and an unused substitute remain."""
        return self.substitutions_made < self.max_substitutions and bool(self.available_substitutes())

    def active_players(self) -> List[Player]:
        """Return lineup players who are neither injured nor sent off.

        Returns
        -------
        List[Player]
            Active players in lineup order.
        """
        return [p for p in self.lineup if p.is_active]

    def available_substitutes(self) -> List[Player]:
        """Return bench players the automatic triggers may bring on.

        Players already substituted off are left out here; a manual change
        may still bring them back.

        Returns
        -------
        List[Player]
            Bench players in bench order that may still come on.
        """
        return [p for p in self.bench if not p.substituted_off]

    def find_in_lineup(self, player_id: str) -> Optional[Player]:
        """Look up a lineup player by id.

        Parameters
        ----------
        player_id : str
            Identifier to search for.

        Returns
        -------
        Player | None
            The matching player, or ``None`` when not in the lineup.
        """
        return next((p for p in self.lineup if p.player_id == player_id), None)

    def find_on_bench(self, player_id: str) -> Optional[Player]:
        """Look up a bench player by id.

        Parameters
        ----------
        player_id : str
            Identifier to search for.

        Returns
        -------
        Player | None
            The matching player, or ``None`` when not on the bench.
        """
        return next((p for p in self.bench if p.player_id == player_id), None)

    def goalkeeper(self) -> Optional[Player]:
        """Return the first goalkeeper in the lineup, whatever their condition.

        Returns
        -------
        Player | None
            The keeper, or ``None`` when the lineup has no ``GK``.
        """
        return next((p for p in self.lineup if p.position == "GK"), None)

    def swap(self, player_out: Player, player_in: Player) -> None:
        """Move ``player_in`` into the lineup slot held by ``player_out``.

        The outgoing player is appended to the bench and flagged so the
        automatic triggers skip them. Callers validate quota and membership first.

        Parameters
        ----------
        player_out : Player
            Lineup player leaving the pitch.
        player_in : Player
            Bench player entering the pitch.
        """
        slot = self.lineup.index(player_out)
        self.bench.remove(player_in)
        player_in.is_on_bench = False
        player_out.is_on_bench = True
        player_out.substituted_off = True
        self.lineup[slot] = player_in
        self.bench.append(player_out)
        self.substitutions_made += 1

    def reset_for_match(self, max_substitutions: int = 5) -> None:
        """Restore per-match player state and the substitution counter.

        Parameters
        ----------
        max_substitutions : int
            Quota to apply for the coming match.
        """
        for player in self.lineup:
            player.reset_for_match(on_bench=False)
        for player in self.bench:
            player.reset_for_match(on_bench=True)
        self.substitutions_made = 0
        self.max_substitutions = max_substitutions
