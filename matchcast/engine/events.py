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
"""Event, manager note and commentary records produced during a match."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from matchcast.models.player import Player

Side = Literal["home", "away"]

EventType = Literal[
    "goal",
    "shot_saved",
    "shot_missed",
    "foul",
    "yellow_card",
    "red_card",
    "injury",
    "substitution",
    "corner",
    "free_kick",
    "penalty",
    "penalty_saved",
    "offside",
    "half_time",
    "full_time",
    "kick_off",
    "chance_created",
    "tackle",
    "interception",
]

NoteType = Literal["tactical", "injury", "performance", "substitution", "warning"]

NotePriority = Literal["low", "medium", "high"]


def other_side(side: Side) -> Side:
    """Return the opposing side.

    Parameters
    ----------
    side : {"home", "away"}
        Side to flip.

    Returns
    -------
    Side
        ``"away"`` for ``"home"`` and vice versa.
    """
    return "away" if side == "home" else "home"


@dataclass(frozen=True)
class MatchEvent:
    """Snapshot of a noteworthy moment during a simulation.

    Parameters
    ----------
    minute : int
        Simulated minute in which the event happened.
    event_type : str
        Category of event (for example ``"goal"`` or ``"corner"``).
    side : {"home", "away"}
        Side credited with the event.
    description : str
        Human-readable summary of what happened.
    player : Player | None, optional
        Main player involved (scorer, fouler, incoming substitute...).
    assist_player : Player | None, optional
        Provider of the final pass for goals.
    replaced_player : Player | None, optional
        Player leaving the pitch for substitutions.
    """

    minute: int
    event_type: EventType
    side: Side
    description: str
    player: Optional[Player] = None
    assist_player: Optional[Player] = None
    replaced_player: Optional[Player] = None


@dataclass(frozen=True)
class ManagerNote:
    """Advisory message addressed to one side's manager.

    Parameters
    ----------
    minute : int
        Simulated minute in which the note was raised.
    note_type : str
        Category of advice (``"tactical"``, ``"injury"``...).
    message : str
        Text shown to the manager.
    priority : {"low", "medium", "high"}
        How urgently the note should be surfaced.
    """

    minute: int
    note_type: NoteType
    message: str
    priority: NotePriority


@dataclass(frozen=True)
class Commentary:
    """Line of match commentary.

    Parameters
    ----------
    minute : int
        Simulated minute of the commentary.
    text : str
        Commentary text.
    is_highlight : bool
        Whether presentation layers should emphasise the line.
    """

    minute: int
    text: str
    is_highlight: bool
