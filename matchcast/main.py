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
"""Entry point for manual match simulations and the optional visualiser."""
import argparse
import random
import time
from pathlib import Path
from typing import List, Optional, Tuple

from matchcast.engine.config import ENGINE_CONFIG, SimulationConfig
from matchcast.engine.events import Commentary
from matchcast.engine.match_engine import MatchSimulationEngine
from matchcast.engine.state import MatchState
from matchcast.models.team import Team
from matchcast.utils.generator import generate_team  # Fallback if no roster file
from matchcast.utils.roster import load_fixture

DEFAULT_ROSTER = Path(__file__).resolve().parent.parent / "data" / "teams.json"


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the demo options.
    """
    parser = argparse.ArgumentParser(description="Simulate an accelerated football match.")
    parser.add_argument(
        "--duration-ms",
        type=float,
        default=ENGINE_CONFIG.simulation.match_duration_ms,
        help="Real-time length of the 90 simulated minutes in milliseconds.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible match.")
    parser.add_argument("--home", default="barcelona", help="Home team id from the roster file.")
    parser.add_argument("--away", default="real-madrid", help="Away team id from the roster file.")
    parser.add_argument("--roster", type=Path, default=DEFAULT_ROSTER, help="Path to a teams JSON file.")
    parser.add_argument("--headless", action="store_true", help="Do not open the pygame window.")
    return parser


def load_teams(roster: Path, home_id: str, away_id: str, rng: random.Random) -> Tuple[Team, Team]:
    """Load the fixture from ``roster``, falling back to generated teams.

    Parameters
    ----------
    roster : Path
        Teams JSON file.
    home_id : str
        Home team id.
    away_id : str
        Away team id.
    rng : random.Random
        Random source for generated teams.

    Returns
    -------
    Tuple[Team, Team]
        Home and away squads.
    """
    try:
        return load_fixture(roster, home_id, away_id)
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error loading teams from {roster}: {e}")
        print("Falling back to generated teams...")
    home = generate_team("home", "Manchester United", "4-3-3", rng=rng)
    away = generate_team("away", "Liverpool FC", "4-4-2", rng=rng)
    return home, away


def print_commentary(line: Commentary) -> None:
    """Print a commentary line as it arrives.

    Parameters
    ----------
    line : Commentary
        Commentary published by the engine.
    """
    marker = "*" if line.is_highlight else " "
    print(f"{marker} {line.minute:>2}' {line.text}")


def print_final_stats(state: MatchState) -> None:
    """Print the final score and the match statistics.

    Parameters
    ----------
    state : MatchState
        Final match snapshot.
    """
    home, away = state.home_team, state.away_team
    print(f"\nFinal Score: {home.name} {state.home_score} - {state.away_score} {away.name}")
    print("\nMatch Statistics:")
    rows = [
        ("Possession", f"{state.possession.home:.0f}%", f"{state.possession.away:.0f}%"),
        ("Shots", state.shots.home, state.shots.away),
        ("On target", state.shots_on_target.home, state.shots_on_target.away),
        ("Corners", state.corners.home, state.corners.away),
        ("Fouls", state.fouls.home, state.fouls.away),
        ("Substitutions", home.substitutions_made, away.substitutions_made),
    ]
    print(f"{'':<15}{home.short_name:>8}{away.short_name:>8}")
    for label, home_value, away_value in rows:
        print(f"{label:<15}{home_value!s:>8}{away_value!s:>8}")

    scorers = [e for e in state.events if e.event_type == "goal"]
    if scorers:
        print("\nGoals:")
        for event in scorers:
            print(f"  {event.minute}' {event.description}")


def main(argv: Optional[List[str]] = None) -> None:
    """Spin up a demo match, wiring the engine to optional visual outputs.

    Parameters
    ----------
    argv : Optional[List[str]]
        Command line arguments; ``sys.argv`` is used when omitted.
    """
    args = build_parser().parse_args(argv)
    rng = random.Random(args.seed)

    home_team, away_team = load_teams(args.roster, args.home, args.away, rng)
    config = SimulationConfig(match_duration_ms=args.duration_ms)
    engine = MatchSimulationEngine(home_team, away_team, config, rng=rng)
    engine.on_commentary(print_commentary)

    visualizer = None
    if not args.headless:
        from matchcast.visualizer import visualizer

        if visualizer.pygame is None:
            print("pygame is not installed; running headless.")
            visualizer = None

    try:
        if visualizer is not None:
            print("Visualizer started. Press Start Match in the window to begin the simulation.")
            # pygame must own the main thread; the match clock ticks in the background.
            visualizer.start_visualizer(engine)
        else:
            engine.start()
            while engine.is_running:
                time.sleep(0.1)
    except KeyboardInterrupt:
        print("\nMatch simulation interrupted.")
    finally:
        engine.stop()
        engine.debugger.close()

    print_final_stats(engine.get_state())


if __name__ == "__main__":
    main()
