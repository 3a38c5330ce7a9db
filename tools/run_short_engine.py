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
"""Run a headless match simulation using teams from teams.json."""
import random
from pathlib import Path
from typing import Optional

from matchcast.engine.match_engine import MatchSimulationEngine
from matchcast.utils.roster import load_fixture


def run_short_simulation(minutes: int = 90, seed: Optional[int] = None) -> None:
    """Run a match by ticking the engine directly instead of in real time.

    Parameters
    ----------
    minutes : int
        Number of simulated minutes to process (default a full match).
    seed : Optional[int]
        Seed for the random source; unseeded when ``None``.
    """
    data_path = Path(__file__).parent.parent / "data" / "teams.json"
    home, away = load_fixture(data_path, "barcelona", "real-madrid")

    engine = MatchSimulationEngine(home, away, rng=random.Random(seed))

    ticks = 0
    while ticks < minutes and engine.tick():
        ticks += 1

    engine.stop()
    engine.debugger.close()
    state = engine.get_state()
    print(f"Done running {ticks} minutes: {state.score_line()} ({len(state.events)} events)")
    if engine.debugger.log_path is not None:
        print(f"Log written to {engine.debugger.log_path}")


if __name__ == "__main__":
    run_short_simulation(seed=7)
