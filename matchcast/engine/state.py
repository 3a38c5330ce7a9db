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
"""Aggregate match state: the single source of truth for a running match."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from matchcast.engine.events import MatchEvent, Side
from matchcast.models.team import Team

MatchPhase = Literal["pre_match", "first_half", "half_time", "second_half", "full_time"]


@dataclass
class SideCounter:
    """Non-negative per-side tally such as shots or corners.

    Parameters
    ----------
    home : int, default=0
        Tally for the home side.
    away : int, default=0
        Tally for the away side.
    """

    home: int = 0
    away: int = 0

    def increment(self, side: Side, amount: int = 1) -> None:
        """Add ``amount`` to the tally of ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Side whose tally grows.
        amount : int
            Non-negative increment.
        """
        if side == "home":
            self.home += max(0, amount)
        else:
            self.away += max(0, amount)

    def for_side(self, side: Side) -> int:
        """Return the tally of ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Side to read.

        Returns
        -------
        int
            Current tally.
        """
        return self.home if side == "home" else self.away


@dataclass
class Possession:
    """Possession split in percent; the two shares always sum to 100.

    Parameters
    ----------
    home : float, default=50.0
        Home share.
    away : float, default=50.0
        Away share.
    """

    home: float = 50.0
    away: float = 50.0

    def shift_toward(self, side: Side, amount: float, cap: float) -> None:
        """Move possession toward ``side`` without exceeding ``cap``.

        Parameters
        ----------
        side : {"home", "away"}
            Side gaining possession.
        amount : float
            Percentage points to add to that side.
        cap : float
            Largest share a side may hold.
        """
        if side == "home":
            self.home = min(cap, self.home + amount)
            self.away = 100.0 - self.home
        else:
            self.away = min(cap, self.away + amount)
            self.home = 100.0 - self.away


@dataclass
class BallPosition:
    """Ball location in percentage coordinates of the pitch.

    Parameters
    ----------
    x : float, default=50.0
        Position along the length of the pitch, home goal at 0.
    y : float, default=50.0
        Position across the width of the pitch.
    """

    x: float = 50.0
    y: float = 50.0

    def clamp(self, low: float, high: float) -> None:
        """Keep both coordinates inside ``[low, high]``.

        Parameters
        ----------
        low : float
            Smallest allowed coordinate.
        high : float
            Largest allowed coordinate.
        """
        self.x = max(low, min(high, self.x))
        self.y = max(low, min(high, self.y))


@dataclass
class MatchState:
    """Everything the engine knows about a match in progress.

    Parameters
    ----------
    home_team : Team
        Home squad.
    away_team : Team
        Away squad.
    home_score : int, default=0
        Goals scored by the home side.
    away_score : int, default=0
        Goals scored by the away side.
    current_minute : int, default=0
        Last simulated minute processed.
    events : List[MatchEvent]
        Append-only event log.
    possession : Possession
        Possession split.
    shots : SideCounter
        Shots per side.
    shots_on_target : SideCounter
        Shots on target per side.
    corners : SideCounter
        Corners per side.
    fouls : SideCounter
        Fouls committed per side.
    is_half_time : bool, default=False
        ``True`` during the half-time interval.
    is_full_time : bool, default=False
        ``True`` once the final whistle has gone.
    is_paused : bool, default=False
        ``True`` while the clock is suspended.
    ball_position : BallPosition
        Current ball location.
    phase : str, default="pre_match"
        Phase of the match state machine.
    """

    home_team: Team
    away_team: Team
    home_score: int = 0
    away_score: int = 0
    current_minute: int = 0
    events: List[MatchEvent] = field(default_factory=list)
    possession: Possession = field(default_factory=Possession)
    shots: SideCounter = field(default_factory=SideCounter)
    shots_on_target: SideCounter = field(default_factory=SideCounter)
    corners: SideCounter = field(default_factory=SideCounter)
    fouls: SideCounter = field(default_factory=SideCounter)
    is_half_time: bool = False
    is_full_time: bool = False
    is_paused: bool = False
    ball_position: BallPosition = field(default_factory=BallPosition)
    phase: MatchPhase = "pre_match"

    def team_for_side(self, side: Side) -> Team:
        """Return the squad playing as ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Side to look up.

        Returns
        -------
        Team
            The matching team.
        """
        return self.home_team if side == "home" else self.away_team

    def side_for_team(self, team: Team) -> Side:
        """Return which side ``team`` plays as.

        Parameters
        ----------
        team : Team
            One of the two squads in this match.

        Returns
        -------
        Side
            ``"home"`` when ``team`` is the home squad, otherwise ``"away"``.
        """
        return "home" if team is self.home_team else "away"

    def record_goal(self, side: Side) -> None:
        """Increment the score of ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Scoring side.
        """
        if side == "home":
            self.home_score += 1
        else:
            self.away_score += 1

    def score_line(self) -> str:
        """Format the scoreline for commentary.

        Returns
        -------
        str
            For example ``"FC Barcelona 1 - 0 Real Madrid"``.
        """
        return f"{self.home_team.name} {self.home_score} - {self.away_score} {self.away_team.name}"
