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
"""Utilities that synthesise players and teams for quick simulations."""
import random
from typing import Dict, List, Optional, Tuple

from matchcast.models.player import POSITIONS, Player
from matchcast.models.team import Team

FORMATION_POSITIONS: Dict[str, Tuple[str, ...]] = {
    "4-3-3": ("GK", "RB", "CB", "CB", "LB", "CM", "CDM", "CM", "RW", "ST", "LW"),
    "4-4-2": ("GK", "RB", "CB", "CB", "LB", "RW", "CM", "CM", "LW", "ST", "ST"),
    "3-5-2": ("GK", "CB", "CB", "CB", "RW", "CM", "CDM", "CM", "LW", "ST", "ST"),
    "4-2-3-1": ("GK", "RB", "CB", "CB", "LB", "CDM", "CDM", "RW", "CAM", "LW", "ST"),
    "5-3-2": ("GK", "RB", "CB", "CB", "CB", "LB", "CM", "CDM", "CM", "ST", "ST"),
}

BENCH_POSITIONS: Tuple[str, ...] = ("GK", "CB", "RB", "CM", "CAM", "RW", "ST")

FIRST_NAMES = ["John", "James", "David", "Michael", "Robert", "Carlos", "Juan", "Luis"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Rodriguez"]


def generate_random_player(
    player_id: str,
    name: Optional[str] = None,
    position: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Player:
    """Generate a player with a random rating.

    Parameters
    ----------
    player_id : str
        Unique identifier assigned to the created player.
    name : Optional[str]
        Human-readable name to apply; a pseudo-random name is chosen when omitted.
    position : Optional[str]
        Position code; random when ``None``.
    rng : Optional[random.Random]
        Random source; a fresh unseeded generator is used when omitted.

    Returns
    -------
    Player
        A newly constructed player with a rating between 60 and 90.
    """
    rng = rng or random.Random()
    if name is None:
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
    if position is None:
        position = rng.choice(POSITIONS)
    return Player(player_id=player_id, name=name, position=position, rating=rng.randint(60, 90))


def generate_team(
    team_id: str,
    name: Optional[str] = None,
    formation: str = "4-3-3",
    bench_size: int = 7,
    rng: Optional[random.Random] = None,
) -> Team:
    """Generate a team with random players using the specified formation.

    Parameters
    ----------
    team_id : str
        Unique identifier assigned to the generated team; also prefixes the
        player ids.
    name : Optional[str]
        Squad name to apply; synthesised when ``None``.
    formation : str
        Formation blueprint whose positions fill the starting eleven.
    bench_size : int
        Number of substitutes to create.
    rng : Optional[random.Random]
        Random source; a fresh unseeded generator is used when omitted.

    Returns
    -------
    Team
        Team populated with a starting eleven and substitutes.
    """
    if formation not in FORMATION_POSITIONS:
        raise ValueError(f"Unsupported formation: {formation}")
    if bench_size < 1:
        raise ValueError("bench_size must be at least 1")

    rng = rng or random.Random()
    if name is None:
        suffixes = ["FC", "United", "City", "Athletic", "Sporting"]
        cities = ["London", "Madrid", "Paris", "Milan", "Munich"]
        name = f"{rng.choice(cities)} {rng.choice(suffixes)}"

    lineup: List[Player] = [
        generate_random_player(f"{team_id}-{index}", position=position, rng=rng)
        for index, position in enumerate(FORMATION_POSITIONS[formation], start=1)
    ]

    bench: List[Player] = []
    for offset in range(bench_size):
        position = BENCH_POSITIONS[offset % len(BENCH_POSITIONS)]
        player = generate_random_player(f"{team_id}-{len(lineup) + offset + 1}", position=position, rng=rng)
        player.is_on_bench = True
        bench.append(player)

    return Team(team_id=team_id, name=name, lineup=lineup, bench=bench, formation=formation)
