"""PetCare: pet care tracking core.

Tasks, reminders, vaccines and medications for a single owner's pets, with
recurrence roll-forward, derived statuses and windowed statistics.
"""

__version__ = "0.1.0"
