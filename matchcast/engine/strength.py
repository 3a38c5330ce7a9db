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
"""Team strength figures derived from the players currently on the pitch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from matchcast.engine.config import ENGINE_CONFIG
from matchcast.models.player import Player
from matchcast.models.team import LINEUP_SIZE, Team


@dataclass(slots=True)
class TeamStrength:
    """Strength figures for one team at one instant.

    Parameters
    ----------
    overall : float
        Rating scaled by fatigue and numerical disadvantage.
    attack : float
        Position-weighted attacking threat.
    defense : float
        Position-weighted defensive solidity.
    """

    overall: float
    attack: float
    defense: float


def attack_weight(player: Player) -> float:
    """Return the attacking involvement weight of a player's position.

    Parameters
    ----------
    player : Player
        Player to weigh.

    Returns
    -------
    float
        Weight from the position attack table.
    """
    return ENGINE_CONFIG.positions.attack_weights[player.position]


def defense_weight(player: Player) -> float:
    """Return the defensive involvement weight of a player's position.

    Parameters
    ----------
    player : Player
        Player to weigh.

    Returns
    -------
    float
        Weight from the position defense table.
    """
    return ENGINE_CONFIG.positions.defense_weights[player.position]


def overall_strength(team: Team) -> float:
    """Average rating scaled by average stamina and active head count.

    Parameters
    ----------
    team : Team
        Team to evaluate.

    Returns
    -------
    float
        ``0.0`` when no player is active.
    """
    active = team.active_players()
    if not active:
        return 0.0

    avg_rating = sum(p.rating for p in active) / len(active)
    stamina_factor = sum(p.stamina for p in active) / (len(active) * 100)
    player_count_factor = len(active) / LINEUP_SIZE
    return avg_rating * stamina_factor * player_count_factor


def _weighted_average(players: List[Player], weights: Dict[str, float]) -> float:
    """Average ``rating * weight(position) * stamina`` over ``players``.

    Parameters
    ----------
    players : List[Player]
        Active players to include.
    weights : Dict[str, float]
        Position weight table.

    Returns
    -------
    float
        ``0.0`` for an empty list.
    """
    if not players:
        return 0.0
    total = sum(p.rating * weights[p.position] * (p.stamina / 100) for p in players)
    return total / len(players)


def attack_strength(team: Team) -> float:
    """Position-weighted attacking strength of the active players.

    Parameters
    ----------
    team : Team
        Team to evaluate.

    Returns
    -------
    float
        ``0.0`` when no player is active.
    """
    return _weighted_average(team.active_players(), ENGINE_CONFIG.positions.attack_weights)


def defense_strength(team: Team) -> float:
    """Position-weighted defensive strength of the active players.

    Parameters
    ----------
    team : Team
        Team to evaluate.

    Returns
    -------
    float
        ``0.0`` when no player is active.
    """
    return _weighted_average(team.active_players(), ENGINE_CONFIG.positions.defense_weights)


def evaluate(team: Team) -> TeamStrength:
    """Compute all three strength figures for ``team``.

    Parameters
    ----------
    team : Team
        Team to evaluate.

    Returns
    -------
    TeamStrength
        Figures computed from the current lineup state.
    """
    return TeamStrength(
        overall=overall_strength(team),
        attack=attack_strength(team),
        defense=defense_strength(team),
    )
