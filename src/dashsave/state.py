"""In-memory model of the player's persistent progression."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .binary import FLOAT32_LOWEST, as_float32
from .inventory import ConsumableType
from .missions.base import Mission

DEFAULT_CHARACTER = "Mr. Drac"
DEFAULT_THEME = "Day"
DEFAULT_DISPLAY_NAME = "Mr. Drac"

# Audio gains that were never set by the player hold this value.
UNSET_VOLUME = FLOAT32_LOWEST

NO_ACCESSORY = -1
MAX_HIGHSCORES = 10


@dataclass
class HighscoreEntry:
    name: str
    score: int


@dataclass
class PersistentState:
    """Root aggregate of everything that survives between sessions.

    ``equipped_accessory`` is a session selection and not part of the save
    record, so it does not take part in equality.
    """

    coins: int = 0
    premium: int = 0
    consumables: Dict[ConsumableType, int] = field(default_factory=dict)
    characters: List[str] = field(default_factory=list)
    equipped_character: int = 0
    accessories: List[str] = field(default_factory=list)
    equipped_accessory: int = field(default=NO_ACCESSORY, compare=False)
    themes: List[str] = field(default_factory=list)
    equipped_theme: int = 0
    highscores: List[HighscoreEntry] = field(default_factory=list)
    missions: List[Mission] = field(default_factory=list)
    display_name: str = DEFAULT_DISPLAY_NAME
    consent_accepted: bool = False
    master_volume: float = UNSET_VOLUME
    music_volume: float = UNSET_VOLUME
    sfx_volume: float = UNSET_VOLUME
    ftue_level: int = 0
    rank: int = 0
    tutorial_done: bool = False

    @classmethod
    def fresh(cls) -> "PersistentState":
        """First-run defaults, minus the mission top-up (the registry owns that)."""
        return cls(characters=[DEFAULT_CHARACTER], themes=[DEFAULT_THEME])

    def set_volumes(self, master: float, music: float, sfx: float) -> None:
        self.master_volume = as_float32(master)
        self.music_volume = as_float32(music)
        self.sfx_volume = as_float32(sfx)

    def repair(self) -> List[str]:
        """Coerce the state back into its invariants.

        Returns a note per correction made; an empty list means the state was
        already consistent.
        """
        notes: List[str] = []

        if self.coins < 0:
            notes.append(f"coins {self.coins} clamped to 0")
            self.coins = 0
        if self.premium < 0:
            notes.append(f"premium {self.premium} clamped to 0")
            self.premium = 0

        bad = [kind for kind, count in self.consumables.items() if count <= 0]
        for kind in bad:
            notes.append(f"dropped consumable {kind.name} with count {self.consumables[kind]}")
            del self.consumables[kind]

        if not self.characters:
            notes.append(f"no characters owned; restored {DEFAULT_CHARACTER!r}")
            self.characters.append(DEFAULT_CHARACTER)
        if not 0 <= self.equipped_character < len(self.characters):
            notes.append(f"equipped character {self.equipped_character} out of range; reset to 0")
            self.equipped_character = 0

        if not self.themes:
            notes.append(f"no themes owned; restored {DEFAULT_THEME!r}")
            self.themes.append(DEFAULT_THEME)
        if not 0 <= self.equipped_theme < len(self.themes):
            notes.append(f"equipped theme {self.equipped_theme} out of range; reset to 0")
            self.equipped_theme = 0

        if self.equipped_accessory < NO_ACCESSORY or self.equipped_accessory >= len(self.accessories):
            notes.append(f"equipped accessory {self.equipped_accessory} out of range; unequipped")
            self.equipped_accessory = NO_ACCESSORY

        ordered = sorted(self.highscores, key=lambda e: -e.score)
        if ordered != self.highscores or len(ordered) > MAX_HIGHSCORES:
            notes.append("highscores re-sorted and capped")
            self.highscores[:] = ordered[:MAX_HIGHSCORES]

        return notes

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary, used by the debug CLI."""
        return {
            "coins": self.coins,
            "premium": self.premium,
            "consumables": {kind.name: count for kind, count in self.consumables.items()},
            "characters": list(self.characters),
            "equipped_character": self.equipped_character,
            "accessories": list(self.accessories),
            "equipped_accessory": self.equipped_accessory,
            "themes": list(self.themes),
            "equipped_theme": self.equipped_theme,
            "highscores": [{"name": e.name, "score": e.score} for e in self.highscores],
            "missions": [
                {"kind": m.kind.name, "progress": m.progress, "max": m.max, "reward": m.reward}
                for m in self.missions
            ],
            "display_name": self.display_name,
            "consent_accepted": self.consent_accepted,
            "volumes": {
                "master": None if self.master_volume == UNSET_VOLUME else self.master_volume,
                "music": None if self.music_volume == UNSET_VOLUME else self.music_volume,
                "sfx": None if self.sfx_volume == UNSET_VOLUME else self.sfx_volume,
            },
            "ftue_level": self.ftue_level,
            "rank": self.rank,
            "tutorial_done": self.tutorial_done,
        }
