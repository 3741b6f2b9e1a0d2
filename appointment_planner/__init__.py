"""Appointment round planner.

Turns a hand-maintained appointment schedule sheet into a normalized round
registry and calendar feed, and reverse-engineers the prerequisite deadlines a
candidate has to meet for a target round.
"""

__version__ = "0.3.0"
