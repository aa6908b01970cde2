"""Bishop swap puzzle: rule engine, breadth-first solver and terminal frontend."""

__version__ = "0.1.0"
