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
"""Shared fixtures for the match engine tests."""

import random
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Tuple

import pytest

from matchcast.engine.events import Commentary, ManagerNote, MatchEvent, Side
from matchcast.engine.match_engine import MatchSimulationEngine
from matchcast.engine.notifications import NotificationHub
from matchcast.engine.state import MatchState
from matchcast.models.team import Team
from matchcast.utils.debug import MatchDebugger
from matchcast.utils.roster import load_fixture

ROSTER_PATH = Path(__file__).resolve().parent.parent / "data" / "teams.json"


class ScriptedRandom(random.Random):
    """Random source whose ``random()`` replays a fixed script.

    Once the script runs out every draw returns ``default``.
    """

    def __init__(self, values: Iterable[float], default: float = 0.99) -> None:
        super().__init__(0)
        self.values: List[float] = list(values)
        self.default = default

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def roster_path() -> Path:
    return ROSTER_PATH


@pytest.fixture
def teams() -> Tuple[Team, Team]:
    home, away = load_fixture(ROSTER_PATH, "barcelona", "real-madrid")
    home.reset_for_match()
    away.reset_for_match()
    return home, away


@pytest.fixture
def debugger() -> Iterator[MatchDebugger]:
    dbg = MatchDebugger(output_dir=None)
    yield dbg
    dbg.close()


@pytest.fixture
def hub(debugger: MatchDebugger) -> NotificationHub:
    return NotificationHub(debugger)


@pytest.fixture
def state(teams: Tuple[Team, Team]) -> MatchState:
    home, away = teams
    return MatchState(home, away)


@pytest.fixture
def scripted() -> Callable[..., ScriptedRandom]:
    return ScriptedRandom


@pytest.fixture
def engine(teams: Tuple[Team, Team], debugger: MatchDebugger) -> Iterator[MatchSimulationEngine]:
    home, away = teams
    eng = MatchSimulationEngine(home, away, rng=random.Random(1234), debugger=debugger)
    yield eng
    eng.stop()


class Recorder:
    """Collects everything an engine publishes."""

    def __init__(self) -> None:
        self.states: List[MatchState] = []
        self.events: List[MatchEvent] = []
        self.commentary: List[Commentary] = []
        self.notes: List[Tuple[Side, ManagerNote]] = []

    def attach(self, eng: MatchSimulationEngine) -> "Recorder":
        eng.on_state_change(self.states.append)
        eng.on_event(self.events.append)
        eng.on_commentary(self.commentary.append)
        eng.on_manager_note(lambda side, note: self.notes.append((side, note)))
        return self


@pytest.fixture
def recorder(engine: MatchSimulationEngine) -> Recorder:
    return Recorder().attach(engine)
