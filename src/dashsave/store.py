from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import codec
from .errors import MalformedRecord, SaveError, SaveValidationError
from .highscores import HighscoreLedger
from .inventory import ConsumableInventory, ConsumableType
from .missions import Mission, MissionCatalog, MissionRegistry, RunContext, default_catalog
from .rng import RandomProvider
from .state import NO_ACCESSORY, PersistentState
from .storage import RecordFile
from .wallet import Currency, CurrencyWallet

logger = logging.getLogger(__name__)


class ProgressStore:
    """Owns the live PersistentState and its on-disk record.

    Construct one per process and pass it to whatever needs player progress.
    State is only changed through the methods here (or the inventory,
    ledger, wallet and mission views they expose); call :meth:`persist` to
    make changes durable. Adding/consuming consumables and claiming missions
    persist on their own.
    """

    def __init__(
        self,
        path: Path,
        rng: Optional[RandomProvider] = None,
        catalog: Optional[MissionCatalog] = None,
    ) -> None:
        self.record = RecordFile(path)
        self.rng = rng or RandomProvider()
        self.catalog = catalog or default_catalog()
        self._bind(PersistentState.fresh())

    def _bind(self, state: PersistentState) -> None:
        self._state = state
        self.inventory = ConsumableInventory(state.consumables)
        self.highscores = HighscoreLedger(state.highscores)
        self.wallet = CurrencyWallet(state)
        self.missions = MissionRegistry(state, rng=self.rng, catalog=self.catalog)

    @property
    def state(self) -> PersistentState:
        return self._state

    @property
    def path(self) -> Path:
        return self.record.path

    # Lifecycle

    def initialize_defaults(self) -> None:
        """Reset to first-run progress and save it."""
        self._bind(PersistentState.fresh())
        self.missions.top_up()
        logger.info("Initialized new save at %s", self.path)
        self.persist()

    def load(self) -> PersistentState:
        """Adopt the on-disk record, or start fresh when there is none.

        A malformed record is kept aside as ``<name>.corrupt`` and replaced
        with first-run defaults. Read failures raise StoreIOError.
        """
        data = self.record.read()
        if data is None:
            logger.info("No save record at %s; starting fresh", self.path)
            self.initialize_defaults()
            return self._state

        try:
            state = codec.decode(data, self.catalog)
        except MalformedRecord as e:
            kept = self.record.quarantine()
            logger.warning("Discarding unreadable save %s (%s); kept copy at %s", self.path, e, kept)
            self.initialize_defaults()
            return self._state

        self._bind(state)
        added = self.missions.top_up()
        if added:
            logger.info("Topped up %d mission(s) after load", added)
        logger.info("Loaded save from %s", self.path)
        return self._state

    def persist(self) -> None:
        data = codec.encode(self._state, self.catalog)
        self.record.write(data)
        logger.debug("Persisted %d bytes to %s", len(data), self.path)

    def clear(self) -> bool:
        """Delete the on-disk record. The in-memory state is left as is."""
        removed = self.record.delete()
        logger.info("Cleared save at %s (existed: %s)", self.path, removed)
        return removed

    # Consumables

    def add_consumable(self, kind: ConsumableType) -> int:
        before = self.inventory.count(kind)
        count = self.inventory.add(kind)
        try:
            self.persist()
        except SaveError:
            self.inventory.set_count(kind, before)
            raise
        return count

    def consume_consumable(self, kind: ConsumableType) -> bool:
        before = self.inventory.count(kind)
        used = self.inventory.consume(kind)
        if used:
            try:
                self.persist()
            except SaveError:
                self.inventory.set_count(kind, before)
                raise
        return used

    # Missions

    def start_run(self, ctx: RunContext) -> None:
        self.missions.on_run_start(ctx)

    def tick_run(self, ctx: RunContext) -> None:
        self.missions.on_tick(ctx)

    def claim_mission(self, mission: Mission) -> int:
        reward = self.missions.claim(mission)
        self.persist()
        return reward

    # Highscores

    def insert_score(self, score: int, name: str) -> Optional[int]:
        return self.highscores.insert(score, name)

    # Currency

    def earn(self, currency: Currency, amount: int) -> int:
        return self.wallet.earn(currency, amount)

    def spend(self, currency: Currency, amount: int) -> int:
        return self.wallet.spend(currency, amount)

    # Unlocks

    def add_character(self, name: str) -> None:
        self._state.characters.append(name)

    def add_theme(self, name: str) -> None:
        self._state.themes.append(name)

    def add_accessory(self, character: str, accessory: str) -> str:
        composite = f"{character}:{accessory}"
        self._state.accessories.append(composite)
        return composite

    def equip_character(self, index: int) -> None:
        if not 0 <= index < len(self._state.characters):
            raise SaveValidationError(f"No owned character at index {index}")
        self._state.equipped_character = index

    def equip_theme(self, index: int) -> None:
        if not 0 <= index < len(self._state.themes):
            raise SaveValidationError(f"No owned theme at index {index}")
        self._state.equipped_theme = index

    def equip_accessory(self, index: int) -> None:
        if index != NO_ACCESSORY and not 0 <= index < len(self._state.accessories):
            raise SaveValidationError(f"No owned accessory at index {index}")
        self._state.equipped_accessory = index

    # Profile and settings

    def set_display_name(self, name: str) -> None:
        self._state.display_name = name

    def accept_consent(self) -> None:
        self._state.consent_accepted = True

    def complete_tutorial(self) -> None:
        self._state.tutorial_done = True

    def set_volumes(self, master: float, music: float, sfx: float) -> None:
        self._state.set_volumes(master, music, sfx)

    def set_ftue_level(self, level: int) -> None:
        if level < 0:
            raise SaveValidationError("FTUE level cannot be negative")
        self._state.ftue_level = level

    def set_rank(self, rank: int) -> None:
        if rank < 0:
            raise SaveValidationError("Rank cannot be negative")
        self._state.rank = rank
