"""
Persistent progression store for Trash Dash.

This package provides:
- PersistentState, the in-memory model of currencies, unlocks, settings,
  leaderboard and active missions
- A versioned, append-only binary codec that reads every past record format
- Consumable inventory, highscore ledger, currency wallet and mission registry
  views over the state
- ProgressStore, which loads, repairs and atomically persists the save record
"""

from .codec import FORMAT_VERSION, decode, encode
from .config import StoreConfig
from .errors import (
    InsufficientFunds,
    MalformedRecord,
    MissionNotHeld,
    SaveError,
    SaveValidationError,
    StoreIOError,
)
from .highscores import HighscoreLedger
from .inventory import ConsumableInventory, ConsumableType
from .missions import Mission, MissionCatalog, MissionRegistry, MissionType, RunContext
from .rng import RandomProvider
from .state import HighscoreEntry, PersistentState
from .store import ProgressStore
from .wallet import Currency, CurrencyWallet

__all__ = [
    "FORMAT_VERSION",
    "encode",
    "decode",
    "StoreConfig",
    "SaveError",
    "MalformedRecord",
    "StoreIOError",
    "SaveValidationError",
    "InsufficientFunds",
    "MissionNotHeld",
    "HighscoreLedger",
    "ConsumableInventory",
    "ConsumableType",
    "Mission",
    "MissionCatalog",
    "MissionRegistry",
    "MissionType",
    "RunContext",
    "RandomProvider",
    "HighscoreEntry",
    "PersistentState",
    "ProgressStore",
    "Currency",
    "CurrencyWallet",
]
