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
"""Match state machine, event generation and substitution policy."""
from __future__ import annotations

from .events import Commentary, ManagerNote, MatchEvent
from .match_engine import MatchSimulationEngine
from .notifications import NotificationHub, Subscription
from .state import MatchState

__all__ = [
    "Commentary",
    "ManagerNote",
    "MatchEvent",
    "MatchSimulationEngine",
    "MatchState",
    "NotificationHub",
    "Subscription",
]
