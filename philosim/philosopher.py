"""Philosophers, the shared table they sit at, and starvation detection."""

from __future__ import annotations

import sys
import threading
import time
from enum import Enum
from typing import Iterable, TextIO

from .args import Settings
from .clock import Clock

_STAGGER_MS = 1.5
_YIELD_SECONDS = 1e-6
_ALONE_POLL_SECONDS = 50e-6


class Action(Enum):
    """What a philosopher can report doing, with the text that is printed."""

    THINK = "is thinking"
    FORK = "has taken a fork"
    EAT = "is eating"
    SLEEP = "is sleeping"


class Table:
    """Shared state: the forks, the death flag and the lock guarding both."""

    def __init__(self, settings: Settings, clock: Clock, out: TextIO | None = None) -> None:
        self.settings = settings
        self.clock = clock
        self.out = out if out is not None else sys.stdout
        self.forks = [threading.Lock() for _ in range(settings.philosophers)]
        self.lock = threading.RLock()
        self.dead = False

    def write(self, time_ms: float, number: int, text: str) -> None:
        """Print one timestamped status line."""
        print(f"{time_ms:f} {number} {text}", file=self.out, flush=True)

    def announce_death(self, philosopher: Philosopher, time: float) -> bool:
        """Mark the table as finished and print the death, unless someone already died."""
        with self.lock:
            if self.dead:
                return False
            self.dead = True
            self.write(time, philosopher.number, "died")
            return True


class Philosopher:
    """One diner, holding a seat between two forks."""

    def __init__(self, table: Table, index: int) -> None:
        self.table = table
        self.index = index
        self.number = index + 1
        self.meals_left = table.settings.meals
        self.first_pass = True
        self.last_meal_ms = 0.0
        self.done = False
        forks = table.forks
        last = len(forks) - 1
        if index == last:
            self.right_fork = forks[index]
            self.left_fork = forks[0]
        else:
            self.right_fork = forks[index + 1]
            self.left_fork = forks[index]

    @property
    def settings(self) -> Settings:
        return self.table.settings

    def should_die(self, now: float) -> bool:
        """Whether this philosopher has starved at time ``now``."""
        if self.first_pass:
            return now > self.settings.time_to_die
        return int(now - self.last_meal_ms) > self.settings.time_to_die

    def report(self, action: Action) -> bool:
        """Print ``action`` if the simulation is still on; False once it has ended."""
        table = self.table
        with table.lock:
            if table.dead:
                return False
            now = table.clock.elapsed_ms()
            if self.should_die(now):
                table.announce_death(self, now)
                return False
            if action is Action.EAT:
                self.first_pass = False
                self.last_meal_ms = now
            table.write(now, self.number, action.value)
        time.sleep(_YIELD_SECONDS)
        return True

    def _release_forks(self) -> None:
        self.right_fork.release()
        self.left_fork.release()

    def _wait_alone(self) -> None:
        clock = self.table.clock
        while clock.elapsed_ms() < self.settings.time_to_die:
            time.sleep(_ALONE_POLL_SECONDS)
        self.table.announce_death(self, clock.elapsed_ms())
        self.right_fork.release()

    def eat(self) -> bool:
        """Take both forks and eat; on success both forks are still held."""
        self.right_fork.acquire()
        if not self.report(Action.FORK):
            self.right_fork.release()
            return False
        if self.settings.philosophers == 1:
            self._wait_alone()
            return False
        self.left_fork.acquire()
        if not (self.report(Action.FORK) and self.report(Action.EAT)):
            self._release_forks()
            return False
        self.table.clock.sleep_ms(self.settings.time_to_eat)
        return True

    def cycle(self) -> bool:
        """Think, eat and sleep once; False when the simulation has ended."""
        if not self.report(Action.THINK):
            return False
        if not self.eat():
            return False
        if self.meals_left is not None:
            self.meals_left -= 1
        slept = self.report(Action.SLEEP)
        self._release_forks()
        if not slept:
            return False
        self.table.clock.sleep_ms(self.settings.time_to_sleep)
        return True

    def run(self) -> None:
        """Repeat cycles until the required meals are eaten or the simulation ends."""
        clock = self.table.clock
        while self.meals_left is None or self.meals_left > 0:
            if self.index % 3 == 0:
                clock.sleep_ms(_STAGGER_MS)
            if not self.cycle():
                return
            time.sleep(_YIELD_SECONDS)
        with self.table.lock:
            self.done = True


def pick_loser(philosophers: Iterable[Philosopher], now: float) -> Philosopher | None:
    """Find the philosopher who has starved at ``now``, if any.

    A philosopher still waiting for a first meal who has starved is returned at
    once; otherwise, among those starved since their last meal, the one who ate
    earliest is chosen. Finished philosophers are ignored.
    """
    loser = None
    for philosopher in philosophers:
        with philosopher.table.lock:
            if philosopher.done:
                continue
            if philosopher.first_pass:
                if philosopher.should_die(now):
                    return philosopher
            elif philosopher.should_die(now):
                if loser is None or loser.last_meal_ms > philosopher.last_meal_ms:
                    loser = philosopher
        time.sleep(_YIELD_SECONDS)
    return loser