"""Visit session timer."""

import time
from typing import Callable


class SessionTimer:
    """Elapsed-time counter for a treatment session.

    Elapsed time is computed from a monotonic clock rather than counted in
    ticks, so it needs no background task. Paused intervals are excluded.

    Args:
        target_minutes: Planned session length
        initial_seconds: Seconds already elapsed (resuming a session)
        auto_start: Start running immediately
        clock: Time source in seconds, injectable for tests
    """

    def __init__(
        self,
        target_minutes: float,
        initial_seconds: int = 0,
        auto_start: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.target_minutes = target_minutes
        self._clock = clock
        self._base_seconds = float(initial_seconds)
        self._running_since: float | None = None
        self.is_running = False
        self.is_paused = False
        if auto_start:
            self.start()

    @property
    def elapsed_seconds(self) -> int:
        elapsed = self._base_seconds
        if self._running_since is not None:
            elapsed += self._clock() - self._running_since
        return int(elapsed)

    @property
    def target_seconds(self) -> int:
        return int(self.target_minutes * 60)

    @property
    def is_over_target(self) -> bool:
        return self.elapsed_seconds > self.target_seconds

    def _bank(self) -> None:
        if self._running_since is not None:
            self._base_seconds += self._clock() - self._running_since
            self._running_since = None

    def start(self) -> None:
        self.is_running = True
        self.is_paused = False
        if self._running_since is None:
            self._running_since = self._clock()

    def pause(self) -> None:
        self._bank()
        self.is_paused = True

    def resume(self) -> None:
        self.is_paused = False
        if self.is_running and self._running_since is None:
            self._running_since = self._clock()

    def reset(self) -> None:
        self._base_seconds = 0.0
        self._running_since = None
        self.is_running = False
        self.is_paused = False

    def state(self) -> dict:
        """Snapshot in the camelCase view shape."""
        return {
            "elapsedSeconds": self.elapsed_seconds,
            "isRunning": self.is_running,
            "isPaused": self.is_paused,
            "targetSeconds": self.target_seconds,
            "isOverTarget": self.is_over_target,
        }


def format_duration(seconds: float) -> str:
    """Format seconds as ``mm:ss``; minutes keep counting past 59."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_duration_verbose(seconds: float) -> str:
    """Unaccented Vietnamese form: ``"45 giay"``, ``"2 phut 5 giay"``, ``"1 gio 30 phut"``."""
    seconds = max(0, int(seconds))
    if seconds < 60:
        return f"{seconds} giay"

    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes} phut {secs} giay" if secs else f"{minutes} phut"

    hours, minutes = divmod(minutes, 60)
    return f"{hours} gio {minutes} phut" if minutes else f"{hours} gio"
