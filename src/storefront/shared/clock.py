"""Clock port and adapters.

Expiry checks ask a clock for "today" instead of reading the wall clock
directly. ``SystemClock`` is the domain clock by default; ``use_clock``
swaps in another one, such as a ``FixedClock`` that pins the date for tests
and demos and can be moved forward to simulate time passing between
adding to the cart and checking out.
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta


class Clock(ABC):
    """Source of the current date."""

    @abstractmethod
    def today(self) -> date:
        """Return the current date."""
        ...


class SystemClock(Clock):
    """Clock backed by the local system date."""

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """Clock that always reports the same date until advanced."""

    def __init__(self, current: date) -> None:
        self.current = current

    def today(self) -> date:
        return self.current

    def advance(self, days: int = 1) -> None:
        """Move the clock forward by ``days``."""
        self.current = self.current + timedelta(days=days)


_clock: Clock = SystemClock()


def current_clock() -> Clock:
    """The clock the domain reads "today" from when none is passed in."""
    return _clock


def use_clock(clock: Clock) -> Clock:
    """Install ``clock`` as the domain clock and return the one it replaces."""
    global _clock
    previous, _clock = _clock, clock
    return previous
