"""
History Manager for SciCalc
Keeps the most-recent-first ledger of accepted calculations
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import config

ENTRY_SEPARATOR = " = "


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str

    def __str__(self):
        return f"{self.expression}{ENTRY_SEPARATOR}{self.result}"

    def to_dict(self):
        return {"expression": self.expression, "result": self.result, "text": str(self)}


Ledger = Tuple[HistoryEntry, ...]


def record(ledger: Ledger, expression: str, display: str,
           limit: int = config.MAX_HISTORY_ITEMS) -> Ledger:
    """Return a ledger with the calculation prepended.

    Repeating the entry already at the head returns the ledger unchanged;
    anything past `limit` entries is evicted from the old end.
    """
    entry = HistoryEntry(expression, display)
    if ledger and str(ledger[0]) == str(entry):
        return ledger
    return (entry,) + tuple(ledger[:limit - 1])


def clear(ledger: Ledger) -> Ledger:
    return ()


def select_entry(ledger: Ledger, index: int) -> Optional[str]:
    """Result part of the entry at `index`, or None when out of range"""
    if not 0 <= index < len(ledger):
        return None
    return ledger[index].result


class HistoryManager:
    def __init__(self, limit=config.MAX_HISTORY_ITEMS):
        self.limit = limit
        self.ledger: Ledger = ()

    def add_calculation(self, expression, result):
        """Add a calculation to history"""
        self.ledger = record(self.ledger, expression, result, self.limit)

    def get_calculation_history(self):
        """Get calculation history, most recent first"""
        return list(self.ledger)

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self.ledger = clear(self.ledger)

    def select(self, index):
        """Get the result of a history entry for reuse on the display"""
        return select_entry(self.ledger, index)

    def format_calculation_history(self):
        """Format calculation history for display"""
        return [str(entry) for entry in self.ledger]

    def __len__(self):
        return len(self.ledger)
