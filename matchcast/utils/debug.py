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
"""Structured logging utilities used to trace match simulations."""
import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple


class MatchDebugger:
    """Helper object that streams structured match telemetry to disk.

    Parameters
    ----------
    output_dir : str | Path | None, default="debug_logs"
        Directory where new session logs are created; created automatically
        when missing. ``None`` keeps entries in memory only.
    """

    def __init__(self, output_dir: Optional[str | Path] = "debug_logs") -> None:
        """Initialise the debugger and start the first logging session.

        Parameters
        ----------
        output_dir : str | Path | None
            Filesystem directory where log files are created, or ``None`` to
            skip file output.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=200)
        self.start_new_session()

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None

        if self.output_dir is None:
            return

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = self.output_dir / f"match_debug_{self.session_start}.txt"
        self.log_file = open(self.log_path, "w", encoding="utf-8")
        self.log_file.write(f"=== Match Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_tick(
        self,
        minute: int,
        phase: str,
        home_score: int,
        away_score: int,
        possession_home: float,
    ) -> None:
        """Log the headline state at the end of a simulated minute.

        Parameters
        ----------
        minute : int
            Simulated minute just processed.
        phase : str
            Match phase after the minute.
        home_score : int
            Home goals.
        away_score : int
            Away goals.
        possession_home : float
            Home possession share in percent.
        """
        self._write_log(
            "TICK",
            f"Minute: {minute:02d} | Phase: {phase} | "
            f"Score: {home_score}-{away_score} | "
            f"Possession: {possession_home:.1f}/{100 - possession_home:.1f}",
        )

    def log_player_state(
        self,
        minute: int,
        player_id: str,
        team_name: str,
        position: str,
        stamina: float,
        is_injured: bool = False,
        yellow_cards: int = 0,
        red_card: bool = False,
    ) -> None:
        """Log the condition of a player.

        Parameters
        ----------
        minute : int
            Simulated minute of the observation.
        player_id : str
            Identifier of the tracked player.
        team_name : str
            Label for the player's team.
        position : str
            Position code such as ``"CM"``.
        stamina : float
            Remaining stamina as a percentage.
        is_injured : bool
            Whether the player is injured.
        yellow_cards : int
            Yellow cards shown so far.
        red_card : bool
            Whether the player has been sent off.
        """
        flags = []
        if is_injured:
            flags.append("INJURED")
        if yellow_cards:
            flags.append(f"YC:{yellow_cards}")
        if red_card:
            flags.append("SENT_OFF")
        flags_str = f" | Flags: {','.join(flags)}" if flags else ""
        self._write_log(
            "PLAYER_STATE",
            f"Minute: {minute:02d} | Player {player_id} ({team_name}) | Role: {position} | "
            f"Stamina: {stamina:.1f}{flags_str}",
        )

    def log_match_event(self, minute: int, event_type: str, description: str) -> None:
        """Log a match event (goal, card, substitution, etc.).

        Parameters
        ----------
        minute : int
            Simulated minute of the event.
        event_type : str
            Short label identifying the event category.
        description : str
            Human-readable summary of the event.
        """
        self._write_log("MATCH_EVENT", f"Minute: {minute:02d} | Event: {event_type} | Details: {description}")

    def log_error(self, error_type: str, description: str) -> None:
        """Log an error or warning.

        Parameters
        ----------
        error_type : str
            Label describing the error classification.
        description : str
            Human-readable explanation of the issue.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Write a log entry to the file and the in-memory buffer.

        Parameters
        ----------
        event_type : str
            Category label for the log entry.
        details : str
            Formatted message body to persist.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest debug entries with line numbers for live displays.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent log lines with prefixed line numbers.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file; later entries only reach the in-memory buffer."""
        with self._lock:
            if self.log_file:
                self.log_file.close()
                self.log_file = None
