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
"""Observer lists that push match output to presentation layers."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from threading import Lock
from typing import TYPE_CHECKING, Callable, Dict, List, Literal, Optional

from matchcast.engine.events import Commentary, ManagerNote, MatchEvent, NotePriority, NoteType, Side

if TYPE_CHECKING:
    from matchcast.engine.state import MatchState
    from matchcast.utils.debug import MatchDebugger

Channel = Literal["state", "event", "commentary", "manager_note"]

CHANNELS: tuple[str, ...] = ("state", "event", "commentary", "manager_note")


@dataclass(eq=False)
class Subscription:
    """Handle returned for every registered subscriber.

    Parameters
    ----------
    channel : str
        Channel the callback listens on.
    callback : Callable[..., None]
        Function invoked with the channel payload.
    hub : NotificationHub
        Hub that owns the registration.
    """

    channel: Channel
    callback: Callable[..., None]
    hub: "NotificationHub"

    @property
    def active(self) -> bool:
        """Return ``True`` while the callback is still registered."""
        return self.hub.is_subscribed(self)

    def cancel(self) -> None:
        """Remove the callback from its channel; repeated calls are harmless."""
        self.hub.unsubscribe(self)


class NotificationHub:
    """Fan-out of state snapshots, events, commentary and manager notes.

    Each channel keeps an ordered list of subscribers so several consumers
    can listen at once. The hub also keeps the commentary feed and the
    per-side manager notes so late consumers can catch up.

    Parameters
    ----------
    debugger : MatchDebugger | None, optional
        Logger that records notes and subscriber failures.
    """

    def __init__(self, debugger: Optional["MatchDebugger"] = None) -> None:
        """Create empty channels and empty commentary/note feeds.

        Parameters
        ----------
        debugger : MatchDebugger | None, optional
            Logger that records notes and subscriber failures.
        """
        self.debugger = debugger
        self._lock = Lock()
        self._subscribers: Dict[str, List[Subscription]] = {channel: [] for channel in CHANNELS}
        self._commentaries: List[Commentary] = []
        self._manager_notes: Dict[str, List[ManagerNote]] = {"home": [], "away": []}

    def subscribe(self, channel: Channel, callback: Callable[..., None]) -> Subscription:
        """Register ``callback`` on ``channel``.

        Parameters
        ----------
        channel : {"state", "event", "commentary", "manager_note"}
            Channel to listen on.
        callback : Callable[..., None]
            Receives a ``MatchState`` snapshot, a ``MatchEvent``, a
            ``Commentary`` or ``(side, ManagerNote)`` respectively.

        Returns
        -------
        Subscription
            Handle whose ``cancel`` removes the callback.

        Raises
        ------
        ValueError
            If ``channel`` is not one of ``CHANNELS``.
        """
        if channel not in self._subscribers:
            raise ValueError(f"Unknown channel '{channel}'. Known channels: {', '.join(CHANNELS)}")
        subscription = Subscription(channel, callback, self)
        with self._lock:
            self._subscribers[channel].append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscriber.

        Parameters
        ----------
        subscription : Subscription
            Handle returned by ``subscribe``.

        Returns
        -------
        bool
            ``True`` if the subscriber was registered.
        """
        with self._lock:
            subscribers = self._subscribers.get(subscription.channel, [])
            if subscription in subscribers:
                subscribers.remove(subscription)
                return True
        return False

    def is_subscribed(self, subscription: Subscription) -> bool:
        """Return whether ``subscription`` is still registered.

        Parameters
        ----------
        subscription : Subscription
            Handle to check.

        Returns
        -------
        bool
            ``True`` while the callback receives notifications.
        """
        with self._lock:
            return subscription in self._subscribers.get(subscription.channel, [])

    def _publish(self, channel: Channel, *payload: object, isolate: bool = False) -> None:
        """Invoke every subscriber of ``channel`` with ``payload``.

        A subscriber that raises is logged and skipped; the remaining
        subscribers still run.

        Parameters
        ----------
        channel : {"state", "event", "commentary", "manager_note"}
            Channel to notify.
        *payload : object
            Arguments passed to each callback.
        isolate : bool, default=False
            Give every subscriber its own deep copy of ``payload``.
        """
        with self._lock:
            subscribers = list(self._subscribers[channel])

        for subscription in subscribers:
            args = copy.deepcopy(payload) if isolate else payload
            try:
                subscription.callback(*args)
            except Exception as exc:
                if self.debugger:
                    self.debugger.log_error(
                        "subscriber",
                        f"{channel} subscriber {subscription.callback!r} raised {exc!r}",
                    )

    def publish_state(self, state: "MatchState") -> None:
        """Push a snapshot of ``state`` to the ``state`` channel.

        Parameters
        ----------
        state : MatchState
            Engine state; each subscriber receives its own deep copy.
        """
        self._publish("state", state, isolate=True)

    def publish_event(self, event: MatchEvent) -> None:
        """Push a newly logged event to the ``event`` channel.

        Parameters
        ----------
        event : MatchEvent
            Event just appended to the match log; each subscriber receives
            its own deep copy.
        """
        self._publish("event", event, isolate=True)

    def add_commentary(self, minute: int, text: str, is_highlight: bool) -> Commentary:
        """Record a commentary line and publish it.

        Parameters
        ----------
        minute : int
            Simulated minute of the line.
        text : str
            Commentary text.
        is_highlight : bool
            Whether the line should be emphasised.

        Returns
        -------
        Commentary
            The stored record.
        """
        commentary = Commentary(minute, text, is_highlight)
        with self._lock:
            self._commentaries.append(commentary)
        self._publish("commentary", commentary)
        return commentary

    def add_manager_note(
        self,
        side: Side,
        minute: int,
        note_type: NoteType,
        message: str,
        priority: NotePriority,
    ) -> ManagerNote:
        """Record a note for one side's manager and publish it.

        Parameters
        ----------
        side : {"home", "away"}
            Manager the note is addressed to.
        minute : int
            Simulated minute of the note.
        note_type : str
            Category of advice.
        message : str
            Text of the note.
        priority : {"low", "medium", "high"}
            Urgency of the note.

        Returns
        -------
        ManagerNote
            The stored record.
        """
        note = ManagerNote(minute, note_type, message, priority)
        with self._lock:
            self._manager_notes[side].append(note)
        if self.debugger:
            self.debugger.log_match_event(minute, f"note:{side}", f"[{priority}] {message}")
        self._publish("manager_note", side, note)
        return note

    def get_commentaries(self) -> List[Commentary]:
        """Return a copy of the commentary feed.

        Returns
        -------
        List[Commentary]
            Commentary lines in the order they were added.
        """
        with self._lock:
            return list(self._commentaries)

    def get_manager_notes(self, side: Side) -> List[ManagerNote]:
        """Return a copy of the notes addressed to ``side``.

        Parameters
        ----------
        side : {"home", "away"}
            Manager whose notes are requested.

        Returns
        -------
        List[ManagerNote]
            Notes in the order they were raised.
        """
        with self._lock:
            return list(self._manager_notes[side])

    def clear_feeds(self) -> None:
        """Forget all commentary and notes; subscribers stay registered."""
        with self._lock:
            self._commentaries.clear()
            self._manager_notes = {"home": [], "away": []}
