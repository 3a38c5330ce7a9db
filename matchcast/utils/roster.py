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
"""Utilities for constructing team rosters from serialized data sources.

The helpers translate plain dictionaries or JSON payloads into the ``Player``
and ``Team`` objects the match engine understands. They back the CLI
entrypoint and the test fixtures, and fall back to sensible values for
optional fields so hand-written squad files stay short.
"""
import json
from pathlib import Path
from typing import List, Tuple

from matchcast.models.player import Player
from matchcast.models.team import Team


def player_from_dict(d: dict) -> Player:
    """Build a ``Player`` from a plain dictionary payload.

    Parameters
    ----------
    d
        A mapping containing the serialized player information. ``id``,
        ``position`` and ``rating`` are required; ``name`` defaults to a label
        derived from the id.

    Returns
    -------
    Player
        A player at full stamina with an empty match record.

    Raises
    ------
    KeyError
        Raised when a required key is missing.
    """
    player_id = str(d["id"])
    return Player(
        player_id=player_id,
        name=d.get("name", f"player_{player_id}"),
        position=d["position"],
        rating=int(d["rating"]),
    )


def team_from_dict(d: dict) -> Team:
    """Build a ``Team`` from a plain dictionary payload.

    Parameters
    ----------
    d
        A mapping with ``id``, ``name``, ``lineup`` and ``bench`` entries plus
        optional ``short_name``, ``color``, ``manager`` and ``formation``.

    Returns
    -------
    Team
        A squad ready to be handed to the engine.

    Raises
    ------
    KeyError
        Raised when a required key is missing.
    """
    lineup = [player_from_dict(p) for p in d["lineup"]]
    bench = [player_from_dict(p) for p in d["bench"]]
    for player in bench:
        player.is_on_bench = True

    return Team(
        team_id=str(d["id"]),
        name=d["name"],
        lineup=lineup,
        bench=bench,
        short_name=d.get("short_name", ""),
        color=d.get("color", "#FFFFFF"),
        manager=d.get("manager", ""),
        formation=d.get("formation", "4-3-3"),
    )


def load_teams_from_json(path: str | Path) -> List[Team]:
    """Load every squad from a JSON document following ``data/teams.json``.

    Parameters
    ----------
    path
        The filesystem path to the JSON document.

    Returns
    -------
    List[Team]
        Squads in file order.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    KeyError
        Raised when the payload has no ``teams`` section.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Teams JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    return [team_from_dict(t) for t in data["teams"]]


def load_fixture(path: str | Path, home_id: str, away_id: str) -> Tuple[Team, Team]:
    """Load the two squads of a fixture from a teams file.

    Parameters
    ----------
    path
        The filesystem path to the JSON document.
    home_id
        Identifier of the home squad.
    away_id
        Identifier of the away squad.

    Returns
    -------
    tuple[Team, Team]
        A pair of ``Team`` objects in ``(home, away)`` order.

    Raises
    ------
    ValueError
        Raised when an id is unknown or both ids name the same squad.
    """
    if home_id == away_id:
        raise ValueError("A fixture needs two different teams")

    teams = {team.team_id: team for team in load_teams_from_json(path)}
    missing = [team_id for team_id in (home_id, away_id) if team_id not in teams]
    if missing:
        raise ValueError(f"Unknown team id(s): {', '.join(missing)}. Available: {', '.join(teams)}")
    return teams[home_id], teams[away_id]
