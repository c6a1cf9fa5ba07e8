# philosim

A simulation of the dining philosophers problem. Each philosopher runs in its
own thread. Each pair of neighbours shares one fork, and each fork is a lock. A
philosopher repeatedly thinks, takes the fork on each side, eats, and then
sleeps.

A monitor thread watches for starvation. A philosopher starves by going longer
than the time to die, counted either from the start or from the beginning of
that philosopher's last meal. When that happens, the simulation prints a
`died` line and every philosopher stops.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install .[test]
```

## Usage

```
philosim <number_of_philosophers> <time_to_die_ms> <time_to_eat_ms> <time_to_sleep_ms> [number_of_times_each_must_eat]
```

You can also run the same command with `python -m philosim.simulation`.

Rules for the arguments:

- Every argument must be written as plain decimal digits and must not be zero.
- The command rejects an argument that contains `-`, contains a character other than a digit, or is larger than 2147483647.
- At most 61786 philosophers are allowed.
- With a single philosopher there is only one fork. The command prints `only 1 fork, this poor man's gonna die`, and that philosopher dies once the time to die has passed.
- If you leave out the last argument, the simulation runs until someone dies.
- If you give the last argument, each philosopher stops after eating that many times.

Invalid arguments make the command print an error message and exit. Some
messages are followed by the usage line.

Each event line has three parts:

1. The time in milliseconds since the start.
2. The philosopher's number, counting from 1.
3. The event.

```
0.012000 1 is thinking
0.034000 1 has taken a fork
0.051000 1 has taken a fork
0.060000 1 is eating
200.101000 1 is sleeping
```

A run ends with a `<time> <number> died` line or with `nobody died`. After
that it prints `total program time : <ms> ms`.

## Library use

```python
import sys

from philosim.args import parse_args
from philosim.simulation import Simulation

settings = parse_args(["5", "800", "200", "200", "7"])
died = Simulation(settings, sys.stdout).run()
```

- `philosim.args`
  - `parse_args` takes the arguments that follow the program name. It returns a frozen `Settings` dataclass with the fields `philosophers`, `time_to_die`, `time_to_eat`, `time_to_sleep` and `meals`. `meals` is `None` when there is no meal limit.
  - `parse_args` raises `ArgumentError`, a subclass of `ValueError`, when the arguments are invalid.
  - `atoi_overflow` reads a leading integer from a string. It accepts leading whitespace and one sign, and stops at the first non-digit. It raises `OverflowError` when the value falls outside the 32-bit signed range.
- `philosim.clock.Clock` measures the milliseconds elapsed since it was created (`elapsed_ms`). It also provides `sleep_ms`, which sleeps for at least the given number of milliseconds.
- `philosim.philosopher`
  - `Table` holds the forks, the death flag and the lock that guards them.
  - `Philosopher` is one diner, with the methods `should_die`, `report`, `eat`, `cycle` and `run`.
  - `Action` lists the events a philosopher reports.
  - `pick_loser` finds the philosopher who has starved at a given time, if any.
- `philosim.simulation`
  - `Simulation` sets up the table and the philosophers.
  - `Simulation.run()` runs them to the end and returns `True` if a philosopher died.
  - `all_done()` and `check_deaths()` are the checks the monitor thread uses.
  - `main(argv=None)` is the command-line entry point.