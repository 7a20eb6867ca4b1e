"""Weekly school timetable with a greedy substitute planner for absent teachers."""

__version__ = "1.0.0"
