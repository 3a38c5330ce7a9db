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
"""Periodic driver that advances the match one simulated minute at a time."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from matchcast.utils.debug import MatchDebugger


class MatchClock:
    """Call ``on_tick`` every ``interval`` seconds on a background thread.

    Deadlines are scheduled against ``time.monotonic`` so slow ticks do not
    accumulate drift. Pausing is the caller's concern: the clock keeps
    firing and the tick handler decides whether to do any work.

    Parameters
    ----------
    interval : float
        Seconds between ticks.
    on_tick : Callable[[], None]
        Handler invoked once per tick.
    debugger : MatchDebugger | None, optional
        Logger used when the handler raises.
    """

    def __init__(
        self,
        interval: float,
        on_tick: Callable[[], None],
        debugger: Optional["MatchDebugger"] = None,
    ) -> None:
        """Prepare an idle clock.

        Parameters
        ----------
        interval : float
            Seconds between ticks; must be positive.
        on_tick : Callable[[], None]
            Handler invoked once per tick.
        debugger : MatchDebugger | None, optional
            Logger used when the handler raises.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.on_tick = on_tick
        self.debugger = debugger
        self.tick_count = 0
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        """Return ``True`` while the worker thread is alive and not stopping."""
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> bool:
        """Start ticking.

        Returns
        -------
        bool
            ``False`` when the clock was already running.
        """
        if self.is_running:
            return False

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="match-clock",
            daemon=True,
        )
        self._thread.start()
        return True

    def _run(self, stop_event: threading.Event) -> None:
        """Worker loop: wait for each deadline, then tick.

        Parameters
        ----------
        stop_event : threading.Event
            Set by :meth:`stop` to end this loop.
        """
        next_deadline = time.monotonic() + self.interval
        while not stop_event.wait(max(0.0, next_deadline - time.monotonic())):
            next_deadline += self.interval
            self.tick_count += 1
            try:
                self.on_tick()
            except Exception as exc:
                if self.debugger:
                    self.debugger.log_error("clock", f"Tick handler raised {exc!r}; stopping clock")
                stop_event.set()
                raise

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Stop ticking; safe to call repeatedly or before :meth:`start`.

        When called from inside the tick handler the worker is not joined,
        it exits as soon as the handler returns.

        Parameters
        ----------
        timeout : float | None
            Seconds to wait for the worker thread to finish; ``0`` skips
            the join.
        """
        self._stop_event.set()
        thread = self._thread
        if timeout == 0 or thread is None or thread is threading.current_thread():
            return
        if thread.is_alive():
            thread.join(timeout)
