"""Dining philosophers simulation: argument parsing, a millisecond clock, philosophers sharing forks, and a starvation monitor."""

__version__ = "0.1.0"