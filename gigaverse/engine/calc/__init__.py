"""
Calculation module - round resolution, damage and charge formulas.

Pure functions over fighter records, shared by the combat engine and tests.
"""

from .damage import BEATS, RoundOutcome, apply_damage_and_armor, beats, resolve_round
from .charges import next_charges, update_charges

__all__ = [
    "BEATS",
    "RoundOutcome",
    "apply_damage_and_armor",
    "beats",
    "next_charges",
    "resolve_round",
    "update_charges",
]
