"""Recurrence arithmetic and status derivation.

Everything in this package is a pure function of its arguments; "now" is
always passed in.
"""

from .recurrence import RecurrenceRule, next_dose, next_occurrence, next_trigger

__all__ = [
    "RecurrenceRule",
    "next_dose",
    "next_occurrence",
    "next_trigger",
]
