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
"""Tests for the per-pass event generator."""

import random

import pytest

from matchcast.engine.config import ENGINE_CONFIG, SimulationConfig
from matchcast.engine.event_generator import EventGenerator
from matchcast.engine.notifications import NotificationHub
from matchcast.engine.state import MatchState


def _generator(state: MatchState, hub: NotificationHub, rng: random.Random) -> EventGenerator:
    return EventGenerator(state, SimulationConfig(), hub, rng)


def _bench_everyone_but(state: MatchState, side: str, keep_index: int) -> None:
    for index, player in enumerate(state.team_for_side(side).lineup):
        if index != keep_index:
            player.is_injured = True


class TestGenerate:
    """Tests for a full event pass."""

    def test_no_active_players_produces_nothing(self, state: MatchState, hub: NotificationHub) -> None:
        """With no strength on either side the pass is a no-op."""
        for team in (state.home_team, state.away_team):
            for player in team.lineup:
                player.is_injured = True
        stamina_before = [p.stamina for p in state.home_team.lineup + state.away_team.lineup]

        events = _generator(state, hub, random.Random(0)).generate()

        assert events == []
        assert (state.possession.home, state.possession.away) == (50.0, 50.0)
        assert (state.ball_position.x, state.ball_position.y) == (50.0, 50.0)
        assert [p.stamina for p in state.home_team.lineup + state.away_team.lineup] == stamina_before
        assert hub.get_commentaries() == []

    def test_many_passes_keep_state_consistent(self, state: MatchState, hub: NotificationHub) -> None:
        """Possession, stamina, ball and score stay within their invariants."""
        generator = _generator(state, hub, random.Random(3))
        cap = ENGINE_CONFIG.possession.cap
        previous = {p.player_id: p.stamina for p in state.home_team.lineup + state.away_team.lineup}
        all_events = []

        for minute in range(1, 301):
            state.current_minute = minute
            all_events.extend(generator.generate())

            assert state.possession.home + state.possession.away == pytest.approx(100.0)
            assert 100.0 - cap - 1e-9 <= state.possession.home <= cap + 1e-9
            assert 5.0 <= state.ball_position.x <= 95.0
            assert 5.0 <= state.ball_position.y <= 95.0
            for player in state.home_team.lineup + state.away_team.lineup:
                assert 0.0 <= player.stamina <= previous[player.player_id]
                previous[player.player_id] = player.stamina

        goals = [e for e in all_events if e.event_type == "goal"]
        assert state.home_score == sum(1 for e in goals if e.side == "home")
        assert state.away_score == sum(1 for e in goals if e.side == "away")
        assert state.shots.home >= state.shots_on_target.home >= state.home_score
        assert state.shots.away >= state.shots_on_target.away >= state.away_score

    def test_injury_is_reported_before_primary_event(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """An injury in the same pass is logged ahead of the primary event."""
        tired = state.away_team.lineup[6]
        tired.stamina = 40.0
        # acting side, possession drift, event roll (corner), injury roll, injury side (away)
        rng = scripted([0.0, 0.5, 0.27, 0.0, 0.9], default=0.5)

        events = _generator(state, hub, rng).generate()

        assert [e.event_type for e in events] == ["injury", "corner"]
        assert events[0].player is tired
        assert tired.is_injured


class TestResolveFoul:
    """Tests for fouls and cards."""

    def test_second_yellow_becomes_red(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """A booked player who is carded again is sent off."""
        _bench_everyone_but(state, "away", keep_index=9)
        offender = state.away_team.lineup[9]
        offender.yellow_cards = 1

        event = _generator(state, hub, scripted([0.0, 0.0, 0.0])).resolve_foul("home")

        assert event is not None
        assert event.event_type == "red_card"
        assert event.side == "away"
        assert event.player is offender
        assert "Second yellow" in event.description
        assert offender.red_card
        assert offender.yellow_cards == 2
        assert not offender.is_active
        assert state.fouls.away == 1
        notes = hub.get_manager_notes("away")
        assert notes[-1].note_type == "warning"
        assert notes[-1].priority == "high"

    def test_first_yellow_warns_manager(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """A first booking raises a medium warning note."""
        _bench_everyone_but(state, "away", keep_index=3)
        offender = state.away_team.lineup[3]

        event = _generator(state, hub, scripted([0.0, 0.0, 0.0, 0.5])).resolve_foul("home")

        assert event is not None
        assert event.event_type == "yellow_card"
        assert offender.yellow_cards == 1
        assert not offender.red_card
        note = hub.get_manager_notes("away")[-1]
        assert note.note_type == "warning"
        assert note.priority == "medium"

    def test_straight_red(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """A low straight-red roll sends off an unbooked player."""
        _bench_everyone_but(state, "away", keep_index=3)
        offender = state.away_team.lineup[3]

        event = _generator(state, hub, scripted([0.0, 0.0, 0.0, 0.05])).resolve_foul("home")

        assert event is not None
        assert event.event_type == "red_card"
        assert offender.red_card
        assert offender.yellow_cards == 0

    def test_foul_without_card(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """Most fouls are only counted."""
        event = _generator(state, hub, scripted([0.0, 0.0, 0.5])).resolve_foul("away")

        assert event is not None
        assert event.event_type == "foul"
        assert event.side == "home"
        assert state.fouls.home == 1
        assert state.fouls.away == 0


class TestResolveOther:
    """Tests for chances, tackles, corners and injuries."""

    def test_goal_updates_score_and_records(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """A converted chance credits scorer, assister and the team."""
        event = _generator(state, hub, scripted([0.0, 0.0, 0.0, 0.0])).resolve_chance("home")

        assert event is not None
        assert event.event_type == "goal"
        assert state.home_score == 1
        assert state.shots.home == 1
        assert state.shots_on_target.home == 1
        assert event.player.goals == 1
        assert event.assist_player is not None
        assert event.assist_player is not event.player
        assert event.assist_player.assists == 1
        assert hub.get_manager_notes("away")[-1].note_type == "tactical"
        assert hub.get_commentaries()[-1].is_highlight

    def test_missed_shot_counts_only_as_shot(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """A shot roll above both thresholds goes wide."""
        event = _generator(state, hub, scripted([0.0, 0.99])).resolve_chance("away")

        assert event is not None
        assert event.event_type == "shot_missed"
        assert state.shots.away == 1
        assert state.shots_on_target.away == 0
        assert state.away_score == 0

    def test_saved_shot_counts_on_target(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """A roll between the goal and save thresholds is kept out by the keeper."""
        event = _generator(state, hub, scripted([0.0, 0.2])).resolve_chance("home")

        assert event is not None
        assert event.event_type == "shot_saved"
        assert state.shots.home == 1
        assert state.shots_on_target.home == 1
        assert state.home_score == 0
        assert "Courtois" in event.description
        assert not hub.get_commentaries()[-1].is_highlight

    def test_missing_goalkeeper_uses_default_factor(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """Without a GK in the lineup the same roll beats the weaker default factor."""
        state.away_team.lineup[0].position = "CB"

        event = _generator(state, hub, scripted([0.0, 0.2])).resolve_chance("home")

        assert event is not None
        assert event.event_type == "goal"
        assert state.home_score == 1
        assert state.shots_on_target.home == 1

    def test_injured_goalkeeper_still_faces_the_shot(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """An injured keeper stays in goal and still counts against the shot."""
        state.away_team.lineup[0].is_injured = True

        event = _generator(state, hub, scripted([0.0, 0.2])).resolve_chance("home")

        assert event is not None
        assert event.event_type == "shot_saved"
        assert state.home_score == 0

    def test_tackle_by_first_defender(self, state: MatchState, hub: NotificationHub) -> None:
        """The first active defensive player of the other side makes the tackle."""
        event = _generator(state, hub, random.Random(0)).resolve_tackle("home")

        assert event.event_type == "tackle"
        assert event.side == "away"
        assert event.player is state.away_team.lineup[1]

    def test_tackle_without_defenders_becomes_corner(self, state: MatchState, hub: NotificationHub) -> None:
        """With no defender available the attacking side wins a corner instead."""
        for player in state.away_team.lineup:
            if player.position in ENGINE_CONFIG.positions.defensive_positions:
                player.is_injured = True

        event = _generator(state, hub, random.Random(0)).resolve_tackle("home")

        assert event.event_type == "corner"
        assert event.side == "home"
        assert state.corners.home == 1

    def test_injury_only_hits_tired_players(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """Fresh squads are never injured; tired players can be."""
        assert _generator(state, hub, scripted([0.0, 0.1])).resolve_injury() is None

        tired = state.home_team.lineup[5]
        tired.stamina = 60.0
        state.current_minute = 33
        event = _generator(state, hub, scripted([0.0, 0.1])).resolve_injury()

        assert event is not None
        assert event.player is tired
        assert tired.is_injured
        assert tired.injury_minute == 33
        assert hub.get_manager_notes("home")[-1].note_type == "injury"

    def test_low_stamina_note_fires_once(self, state: MatchState, hub: NotificationHub, scripted) -> None:
        """Crossing the low-stamina line warns the manager exactly once."""
        player = state.home_team.lineup[4]
        player.stamina = 30.2
        generator = _generator(state, hub, scripted([], default=0.0))

        generator.drain_stamina()
        generator.drain_stamina()

        notes = [n for n in hub.get_manager_notes("home") if player.name in n.message]
        assert len(notes) == 1
        assert notes[0].note_type == "performance"
