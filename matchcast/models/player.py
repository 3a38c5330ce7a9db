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
"""Domain model representing a football player taking part in a match."""
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Position = Literal["GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "LW", "RW", "ST"]

POSITIONS: Tuple[str, ...] = ("GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "LW", "RW", "ST")

MAX_STAMINA = 100.0


@dataclass
class Player:
    """Roster entry plus the per-match state the engine mutates.

    Parameters
    ----------
    player_id : str
        Unique identifier for the player within the fixture.
    name : str
        Human-readable player name.
    position : str
        Position code, one of ``POSITIONS`` (for example ``"CM"``).
    rating : int
        Overall ability on a 1-99 scale.
    stamina : float, default=100.0
        Remaining energy as a percentage; only decreases during play.
    is_injured : bool, default=False
        Whether the player has picked up an injury this match.
    injury_minute : int | None, optional
        Simulated minute of the injury, when injured.
    is_on_bench : bool, default=False
        ``True`` while the player sits on the bench.
    goals : int, default=0
        Goals scored this match.
    assists : int, default=0
        Assists provided this match.
    yellow_cards : int, default=0
        Yellow cards shown this match (0-2).
    red_card : bool, default=False
        Whether the player has been sent off.
    substituted_off : bool, default=False
        Whether the player has already been replaced; the automatic
        substitution triggers skip such players.
    """

    player_id: str
    name: str
    position: Position
    rating: int
    stamina: float = MAX_STAMINA
    is_injured: bool = False
    injury_minute: Optional[int] = None
    is_on_bench: bool = False
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_card: bool = False
    substituted_off: bool = False

    def __post_init__(self) -> None:
        """Validate the position code, rating scale and stamina range."""
        if self.position not in POSITIONS:
            raise ValueError(f"Unknown position '{self.position}'. Known positions: {', '.join(POSITIONS)}")
        if not 1 <= self.rating <= 99:
            raise ValueError("rating must be between 1 and 99")
        if not 0.0 <= self.stamina <= MAX_STAMINA:
            raise ValueError("stamina must be between 0 and 100")

    @property
    def is_active(self) -> bool:
        """Return ``True`` when the player can take part in play."""
        return not self.is_injured and not self.red_card

    def drain_stamina(self, amount: float) -> float:
        """Reduce stamina by ``amount`` without dropping below zero.

        Parameters
        ----------
        amount : float
            Non-negative quantity of stamina to remove.

        Returns
        -------
        float
            The stamina level after the drain.
        """
        self.stamina = max(0.0, self.stamina - max(0.0, amount))
        return self.stamina

    def reset_for_match(self, on_bench: bool) -> None:
        """Restore every per-match field to its kick-off value.

        Parameters
        ----------
        on_bench : bool
            Whether the player starts the match among the substitutes.
        """
        self.stamina = MAX_STAMINA
        self.is_injured = False
        self.injury_minute = None
        self.is_on_bench = on_bench
        self.goals = 0
        self.assists = 0
        self.yellow_cards = 0
        self.red_card = False
        self.substituted_off = False
