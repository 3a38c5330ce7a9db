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
"""Tests for utility modules (generator, roster, debug)."""

import json
import random
from pathlib import Path

import pytest

from matchcast.models.player import POSITIONS
from matchcast.models.team import FORMATIONS
from matchcast.utils.debug import MatchDebugger
from matchcast.utils.generator import FORMATION_POSITIONS, generate_random_player, generate_team
from matchcast.utils.roster import load_fixture, load_teams_from_json, player_from_dict, team_from_dict


class TestGenerator:
    """Tests for generator utility functions."""

    def test_generate_random_player(self) -> None:
        """Test generating a random player."""
        player = generate_random_player("x-1", rng=random.Random(0))
        assert player.player_id == "x-1"
        assert len(player.name) > 0
        assert player.position in POSITIONS
        assert 60 <= player.rating <= 90

    def test_generate_random_player_with_position(self) -> None:
        """Test generating a random player for a specific position."""
        player = generate_random_player("x-2", name="Given Name", position="ST")
        assert player.position == "ST"
        assert player.name == "Given Name"

    @pytest.mark.parametrize("formation", FORMATIONS)
    def test_generate_team_for_each_formation(self, formation: str) -> None:
        """Every supported formation yields a valid squad."""
        team = generate_team("gen", name="Test FC", formation=formation, rng=random.Random(1))
        assert team.name == "Test FC"
        assert team.formation == formation
        assert [p.position for p in team.lineup] == list(FORMATION_POSITIONS[formation])
        assert team.lineup[0].position == "GK"
        assert len(team.bench) == 7
        assert all(p.is_on_bench for p in team.bench)

    def test_generate_team_unknown_formation(self) -> None:
        """Unsupported formations raise."""
        with pytest.raises(ValueError):
            generate_team("gen", formation="2-3-5")

    def test_generated_ids_are_unique(self) -> None:
        """Player ids do not collide within a squad."""
        team = generate_team("gen", bench_size=3, rng=random.Random(2))
        ids = [p.player_id for p in team.lineup + team.bench]
        assert len(ids) == len(set(ids)) == 14


class TestRoster:
    """Tests for roster loading."""

    def test_player_from_dict(self) -> None:
        """Test building a player from a dict."""
        player = player_from_dict({"id": "abc", "name": "Tester", "position": "CAM", "rating": 84})
        assert player.player_id == "abc"
        assert player.name == "Tester"
        assert player.position == "CAM"
        assert player.rating == 84
        assert player.stamina == 100

    def test_player_from_dict_requires_rating(self) -> None:
        """Missing required keys raise ``KeyError``."""
        with pytest.raises(KeyError):
            player_from_dict({"id": "abc", "position": "CM"})

    def test_team_from_dict_defaults(self) -> None:
        """Optional team fields fall back to defaults."""
        payload = {
            "id": "t",
            "name": "Dict Town",
            "lineup": [{"id": f"p{i}", "position": "CM", "rating": 70} for i in range(11)],
            "bench": [{"id": "s1", "position": "GK", "rating": 65}],
        }
        team = team_from_dict(payload)
        assert team.short_name == "DIC"
        assert team.formation == "4-3-3"
        assert team.bench[0].is_on_bench

    def test_load_shipped_teams(self, roster_path: Path) -> None:
        """The shipped file contains the four sample squads."""
        teams = load_teams_from_json(roster_path)
        assert [t.team_id for t in teams] == ["barcelona", "real-madrid", "bayern", "man-city"]
        for team in teams:
            assert len(team.lineup) == 11
            assert len(team.bench) == 5
            assert team.lineup[0].position == "GK"
        bayern = teams[2]
        assert bayern.formation == "4-2-3-1"
        assert bayern.manager == "Hansi Flick"
        assert bayern.find_in_lineup("bay-10").name == "Kane"

    def test_load_fixture(self, roster_path: Path) -> None:
        """A fixture returns the requested squads in home/away order."""
        home, away = load_fixture(roster_path, "man-city", "bayern")
        assert home.name == "Manchester City"
        assert away.name == "Bayern Munich"

    def test_load_fixture_unknown_team(self, roster_path: Path) -> None:
        """Unknown ids are reported."""
        with pytest.raises(ValueError):
            load_fixture(roster_path, "barcelona", "wrexham")
        with pytest.raises(ValueError):
            load_fixture(roster_path, "barcelona", "barcelona")

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing roster file raises ``FileNotFoundError``."""
        with pytest.raises(FileNotFoundError):
            load_teams_from_json(tmp_path / "nope.json")

    def test_missing_section(self, tmp_path: Path) -> None:
        """A payload without ``teams`` raises ``KeyError``."""
        path = tmp_path / "teams.json"
        path.write_text(json.dumps({"squads": []}), encoding="utf-8")
        with pytest.raises(KeyError):
            load_teams_from_json(path)


class TestMatchDebugger:
    """Tests for the match debugger."""

    def test_writes_session_file(self, tmp_path: Path) -> None:
        """Entries land in a session file under the output directory."""
        debugger = MatchDebugger(output_dir=tmp_path / "logs")
        debugger.log_tick(12, "first_half", 1, 0, 55.0)
        debugger.log_match_event(12, "goal", "GOAL! Somebody scores")
        debugger.close()

        assert debugger.log_path is not None
        content = debugger.log_path.read_text(encoding="utf-8")
        assert debugger.log_path.name.startswith("match_debug_")
        assert "GOAL! Somebody scores" in content
        assert "first_half" in content

    def test_memory_only_buffer(self) -> None:
        """Without an output directory entries stay in memory."""
        debugger = MatchDebugger(output_dir=None)
        assert debugger.log_path is None
        for minute in range(30):
            debugger.log_match_event(minute, "foul", f"foul {minute}")
        debugger.log_player_state(30, "bar-6", "FC Barcelona", "CM", 41.5, yellow_cards=1)
        debugger.log_error("subscriber", "listener failed")

        recent = debugger.get_recent_events(limit=5)
        assert len(recent) == 5
        assert "listener failed" in recent[-1]
        assert "bar-6" in recent[-2]
        assert recent[0].startswith("00028")
