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
import copy
import random
import threading
from typing import Callable, List, Optional

from matchcast.engine.clock import MatchClock
from matchcast.engine.config import ENGINE_CONFIG, SimulationConfig
from matchcast.engine.event_generator import EventGenerator
from matchcast.engine.events import Commentary, ManagerNote, MatchEvent, Side
from matchcast.engine.notifications import NotificationHub, Subscription
from matchcast.engine.state import MatchPhase, MatchState
from matchcast.engine.substitutions import SubstitutionPolicy
from matchcast.models.team import Team
from matchcast.utils.debug import MatchDebugger


class MatchSimulationEngine:
    """Run an accelerated match between two squads on a real-time clock.

    The engine works on private copies of the squads it is given. The clock
    thread and :meth:`make_substitution` are the only writers of the match
    state; both take the engine lock, and consumers only ever receive deep
    copies through :meth:`get_state`, the state channel or the event channel.

    Parameters
    ----------
    home_team : Team
        Home squad with an eleven-player lineup and a bench.
    away_team : Team
        Away squad with an eleven-player lineup and a bench.
    config : SimulationConfig | None, optional
        Timing and probability settings; defaults to
        ``ENGINE_CONFIG.simulation``.
    rng : random.Random | None, optional
        Random source; pass a seeded instance for reproducible matches.
    debugger : MatchDebugger | None, optional
        Logger for match telemetry; a file-backed one is created when omitted.
    """

    def __init__(
        self,
        home_team: Team,
        away_team: Team,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        debugger: Optional[MatchDebugger] = None,
    ) -> None:
        """Copy the squads and build a fresh pre-match state.

        Parameters
        ----------
        home_team : Team
            Home squad with an eleven-player lineup and a bench.
        away_team : Team
            Away squad with an eleven-player lineup and a bench.
        config : SimulationConfig | None, optional
            Timing and probability settings.
        rng : random.Random | None, optional
            Random source for every roll.
        debugger : MatchDebugger | None, optional
            Logger for match telemetry.
        """
        self.config = config if config is not None else ENGINE_CONFIG.simulation
        self.rng = rng if rng is not None else random.Random()
        self.debugger = debugger if debugger is not None else MatchDebugger()
        self.hub = NotificationHub(self.debugger)
        self._rosters = (copy.deepcopy(home_team), copy.deepcopy(away_team))
        self._lock = threading.RLock()
        self._clock: Optional[MatchClock] = None
        self._kicked_off = False
        self._build_match()

    def _build_match(self) -> None:
        """Create a new match state and the components that act on it."""
        home, away = (copy.deepcopy(team) for team in self._rosters)
        max_substitutions = ENGINE_CONFIG.substitutions.max_substitutions
        home.reset_for_match(max_substitutions)
        away.reset_for_match(max_substitutions)

        self.state = MatchState(home, away)
        self.generator = EventGenerator(self.state, self.config, self.hub, self.rng)
        self.substitutions = SubstitutionPolicy(self.state, self.hub, self._record_event)

    @property
    def is_running(self) -> bool:
        """Return ``True`` while the match clock is ticking."""
        return self._clock is not None and self._clock.is_running

    @property
    def phase(self) -> MatchPhase:
        """Return the current phase of the match state machine."""
        return self.state.phase

    def start(self) -> None:
        """Kick off (first call) or continue the match on the real-time clock.

        Does nothing while the clock is already running or after full time.
        """
        with self._lock:
            if self.is_running or self.state.is_full_time:
                return

            if not self._kicked_off:
                self._kick_off()

            clock = MatchClock(self.config.minute_interval, lambda: self._on_clock_tick(clock), self.debugger)
            self._clock = clock
            clock.start()

    def _kick_off(self) -> None:
        """Log the opening kick-off and notify state subscribers."""
        self._kicked_off = True
        self.state.phase = "first_half"
        description = f"Kick off! {self.state.home_team.name} vs {self.state.away_team.name}"
        self._record_event(MatchEvent(0, "kick_off", "home", description))
        self.hub.add_commentary(0, description, True)
        self.hub.publish_state(self.state)

    def _on_clock_tick(self, clock: MatchClock) -> None:
        """Handle a tick from ``clock`` unless it has since been stopped.

        Parameters
        ----------
        clock : MatchClock
            Clock that fired; stale clocks are ignored.
        """
        with self._lock:
            if clock is not self._clock or not clock.is_running:
                return
            self._advance_minute()

    def tick(self) -> bool:
        """Simulate one minute immediately, independent of the real-time clock.

        Returns
        -------
        bool
            ``False`` when the match is paused or already finished, in which
            case nothing changes.
        """
        with self._lock:
            return self._advance_minute()

    def _advance_minute(self) -> bool:
        """Process one simulated minute; the caller holds the engine lock.

        Returns
        -------
        bool
            Whether the minute was processed.
        """
        state = self.state
        if state.is_paused or state.is_full_time:
            return False
        if not self._kicked_off:
            self._kicked_off = True
            state.phase = "first_half"

        state.current_minute += 1
        minute = state.current_minute
        timeline = ENGINE_CONFIG.timeline

        if minute == timeline.half_time_minute:
            self._start_half_time()
        if minute == timeline.second_half_minute:
            self._start_second_half()
        if minute >= timeline.full_time_minute:
            self._finish_match()
            return True

        passes = int(self.rng.random() * self.config.event_frequency + 0.5)
        for _ in range(passes):
            for event in self.generator.generate():
                self._record_event(event)

        self.substitutions.run_scheduled(minute)
        self.substitutions.run_emergency(minute)

        self.debugger.log_tick(minute, state.phase, state.home_score, state.away_score, state.possession.home)
        self.hub.publish_state(state)
        return True

    def _start_half_time(self) -> None:
        """Blow for half time and brief both managers."""
        state = self.state
        state.is_half_time = True
        state.phase = "half_time"
        description = f"Half time! {state.score_line()}"
        self._record_event(MatchEvent(state.current_minute, "half_time", "home", description))
        self.hub.add_commentary(state.current_minute, description, True)
        self._log_squads()
        self._half_time_notes()

    def _half_time_notes(self) -> None:
        """Flag tired players per side and push the trailing side forward."""
        state = self.state
        threshold = ENGINE_CONFIG.stamina.half_time_warning
        for side in ("home", "away"):
            tired = [p for p in state.team_for_side(side).active_players() if p.stamina < threshold]
            if tired:
                self.hub.add_manager_note(
                    side,
                    state.current_minute,
                    "performance",
                    f"Players with low stamina: {', '.join(p.name for p in tired)}. Consider substitutions.",
                    "medium",
                )

        trailing: Optional[Side] = None
        if state.home_score < state.away_score:
            trailing = "home"
        elif state.away_score < state.home_score:
            trailing = "away"
        if trailing:
            self.hub.add_manager_note(
                trailing,
                state.current_minute,
                "tactical",
                "You are behind. Consider a more attacking approach in the second half.",
                "high",
            )

    def _start_second_half(self) -> None:
        """End the interval and kick off the second half."""
        state = self.state
        state.is_half_time = False
        state.phase = "second_half"
        description = "Second half kicks off!"
        self._record_event(MatchEvent(state.current_minute, "kick_off", "away", description))
        self.hub.add_commentary(state.current_minute, description, True)

    def _finish_match(self) -> None:
        """Blow the final whistle, stop the clock and push the final state."""
        state = self.state
        state.is_full_time = True
        state.is_half_time = False
        state.phase = "full_time"
        description = f"Full time! {state.score_line()}"
        self._record_event(MatchEvent(state.current_minute, "full_time", "home", description))
        self.hub.add_commentary(state.current_minute, description, True)
        self._log_squads()
        self._halt_clock(wait=False)
        self.debugger.log_tick(
            state.current_minute, state.phase, state.home_score, state.away_score, state.possession.home
        )
        self.hub.publish_state(state)

    def _log_squads(self) -> None:
        """Write the condition of every lineup player to the debugger."""
        for team in (self.state.home_team, self.state.away_team):
            for player in team.lineup:
                self.debugger.log_player_state(
                    self.state.current_minute,
                    player.player_id,
                    team.name,
                    player.position,
                    player.stamina,
                    is_injured=player.is_injured,
                    yellow_cards=player.yellow_cards,
                    red_card=player.red_card,
                )

    def _record_event(self, event: MatchEvent) -> None:
        """Append a detached copy of ``event`` to the match log and publish it.

        The copy freezes the involved players as they were when the event
        happened, so later changes to the live squads do not leak into it.

        Parameters
        ----------
        event : MatchEvent
            Event to record.
        """
        event = copy.deepcopy(event)
        self.state.events.append(event)
        self.debugger.log_match_event(event.minute, event.event_type, event.description)
        self.hub.publish_event(event)

    def pause(self) -> None:
        """Suspend the match; clock ticks are ignored until :meth:`resume`."""
        with self._lock:
            if self.state.is_paused or self.state.is_full_time:
                return
            self.state.is_paused = True
            self.debugger.log_match_event(self.state.current_minute, "pause", "Match paused")

    def resume(self) -> None:
        """Resume a paused match."""
        with self._lock:
            if not self.state.is_paused:
                return
            self.state.is_paused = False
            self.debugger.log_match_event(self.state.current_minute, "resume", "Match resumed")

    def stop(self) -> None:
        """Cancel the match clock; idempotent and safe before :meth:`start`."""
        self._halt_clock(wait=True)

    def _halt_clock(self, wait: bool) -> None:
        """Stop the clock thread and log it once.

        Parameters
        ----------
        wait : bool
            Join the clock thread. Must be ``False`` while the engine lock
            is held, since the clock thread may be waiting on that lock.
        """
        clock = self._clock
        if clock is None:
            return
        was_running = clock.is_running
        clock.stop(timeout=1.0 if wait else 0.0)
        if was_running:
            self.debugger.log_match_event(self.state.current_minute, "stop", "Match clock stopped")

    def reset(self) -> None:
        """Stop the clock and replace the state with a fresh pre-match one.

        Subscribers stay registered; commentary and manager notes are cleared.
        """
        self.stop()
        with self._lock:
            self._clock = None
            self._kicked_off = False
            self.hub.clear_feeds()
            self._build_match()
            self.debugger.log_match_event(0, "reset", "Match reset to pre-match state")

    def make_substitution(self, side: Side, player_out_id: str, player_in_id: str) -> bool:
        """Request a manual substitution.

        Parameters
        ----------
        side : {"home", "away"}
            Team making the change.
        player_out_id : str
            Id of a lineup player who has not been sent off.
        player_in_id : str
            Id of a bench player.

        Returns
        -------
        bool
            ``False``, with no change to the state, when the quota is used
            up, either id is invalid or the match is over.
        """
        if side not in ("home", "away"):
            return False
        with self._lock:
            made = self.substitutions.substitute(side, player_out_id, player_in_id)
            if made:
                self.hub.publish_state(self.state)
            return made

    def get_state(self) -> MatchState:
        """Return a deep, independent copy of the match state.

        Returns
        -------
        MatchState
            Snapshot that can be mutated freely without affecting the engine.
        """
        with self._lock:
            return copy.deepcopy(self.state)

    def get_manager_notes(self, side: Side) -> List[ManagerNote]:
        """Return the notes raised for ``side`` so far.

        Parameters
        ----------
        side : {"home", "away"}
            Manager whose notes are requested.

        Returns
        -------
        List[ManagerNote]
            Notes in the order they were raised.
        """
        return self.hub.get_manager_notes(side)

    def get_commentaries(self) -> List[Commentary]:
        """Return the commentary feed so far.

        Returns
        -------
        List[Commentary]
            Commentary lines in order.
        """
        return self.hub.get_commentaries()

    def on_state_change(self, callback: Callable[[MatchState], None]) -> Subscription:
        """Subscribe to state snapshots pushed after every processed minute.

        Parameters
        ----------
        callback : Callable[[MatchState], None]
            Receives a deep copy of the state.

        Returns
        -------
        Subscription
            Handle used to unsubscribe.
        """
        return self.hub.subscribe("state", callback)

    def on_event(self, callback: Callable[[MatchEvent], None]) -> Subscription:
        """Subscribe to every event appended to the match log.

        Parameters
        ----------
        callback : Callable[[MatchEvent], None]
            Receives each new event.

        Returns
        -------
        Subscription
            Handle used to unsubscribe.
        """
        return self.hub.subscribe("event", callback)

    def on_commentary(self, callback: Callable[[Commentary], None]) -> Subscription:
        """Subscribe to commentary lines.

        Parameters
        ----------
        callback : Callable[[Commentary], None]
            Receives each new commentary line.

        Returns
        -------
        Subscription
            Handle used to unsubscribe.
        """
        return self.hub.subscribe("commentary", callback)

    def on_manager_note(self, callback: Callable[[Side, ManagerNote], None]) -> Subscription:
        """Subscribe to manager notes for both sides.

        Parameters
        ----------
        callback : Callable[[Side, ManagerNote], None]
            Receives the addressed side and the note.

        Returns
        -------
        Subscription
            Handle used to unsubscribe.
        """
        return self.hub.subscribe("manager_note", callback)
