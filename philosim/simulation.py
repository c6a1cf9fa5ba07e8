"""Running a full dining philosophers simulation, and the command that starts it."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

from .args import ONE_FORK_MESSAGE, ArgumentError, Settings, parse_args
from .clock import Clock
from .philosopher import Philosopher, Table, pick_loser

_CHECK_INTERVAL_SECONDS = 8e-3
_DONE_CHECK_PERIOD_MS = 20


class Simulation:
    """A table of philosophers plus a monitor that watches for starvation."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self.clock = Clock()
        self.table = Table(settings, self.clock, out)
        self.philosophers = [
            Philosopher(self.table, index) for index in range(settings.philosophers)
        ]

    @property
    def died(self) -> bool:
        """Whether a philosopher has died."""
        with self.table.lock:
            return self.table.dead

    def all_done(self) -> bool:
        """Whether every philosopher has eaten the required number of meals."""
        with self.table.lock:
            return all(philosopher.done for philosopher in self.philosophers)

    def check_deaths(self) -> bool:
        """Announce a starved philosopher if there is one; True when the simulation ended."""
        now = self.clock.elapsed_ms()
        loser = pick_loser(self.philosophers, now)
        if loser is None:
            return False
        self.table.announce_death(loser, now)
        return True

    def _monitor(self) -> None:
        while True:
            now = self.clock.elapsed_ms()
            if self.check_deaths():
                return
            time.sleep(_CHECK_INTERVAL_SECONDS)
            if int(now) % _DONE_CHECK_PERIOD_MS == 0 and self.all_done():
                return

    def run(self) -> bool:
        """Run the simulation to its end; True if a philosopher died."""
        monitor = threading.Thread(target=self._monitor, name="monitor", daemon=True)
        monitor.start()
        workers = []
        for philosopher in self.philosophers:
            worker = threading.Thread(
                target=philosopher.run, name=f"philosopher-{philosopher.number}", daemon=True
            )
            try:
                worker.start()
            except RuntimeError:
                break
            workers.append(worker)
        for worker in workers:
            worker.join()
        monitor.join()
        return self.died


def main(argv=None) -> int:
    """Parse the command line, run the simulation and report the outcome."""
    clock = Clock()
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        settings = parse_args(args)
    except ArgumentError as exc:
        print(exc)
        return 0
    if settings.philosophers == 1:
        print(ONE_FORK_MESSAGE)
    simulation = Simulation(settings)
    if not simulation.run():
        print("nobody died")
    print(f"total program time : {clock.elapsed_ms():f} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())