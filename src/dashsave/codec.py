"""Versioned binary codec for the save record.

The record is the format version followed by field groups in a fixed order.
Each group was introduced by some released version; a reader of an older
record only reads the groups that existed when it was written and leaves
every later field at its default.

To add a persisted field: bump FORMAT_VERSION and append a FieldGroup with
``min_version=FORMAT_VERSION`` to the end of DECODE_PLAN. Never reorder or
remove groups.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .binary import RecordReader, RecordWriter
from .errors import MalformedRecord
from .inventory import ConsumableType
from .missions import MissionCatalog, default_catalog, read_missions, write_missions
from .state import HighscoreEntry, PersistentState

logger = logging.getLogger(__name__)

FORMAT_VERSION = 12

Reader = Callable[[RecordReader, PersistentState, MissionCatalog], None]
Writer = Callable[[RecordWriter, PersistentState, MissionCatalog], None]


@dataclass(frozen=True)
class FieldGroup:
    min_version: int
    name: str
    read: Reader
    write: Writer


def _read_coins(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
    s.coins = r.read_int32()


def _write_coins(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
    w.write_int32(s.coins)


def _read_consumables(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
    s.consumables.clear()
    for _i in range(r.read_count("consumable")):
        tag = r.read_int32()
        count = r.read_int32()
        try:
            kind = ConsumableType(tag)
        except ValueError:
            raise MalformedRecord(f"Unknown consumable kind tag {tag}") from None
        if kind in s.consumables:
            raise MalformedRecord(f"Consumable kind {kind.name} listed twice")
        s.consumables[kind] = count


def _write_consumables(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
    w.write_count(len(s.consumables))
    for kind, count in s.consumables.items():
        w.write_int32(int(kind))
        w.write_int32(count)


def _string_list(attr: str, what: str) -> Tuple[Reader, Writer]:
    def read(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
        setattr(s, attr, [r.read_string() for _i in range(r.read_count(what))])

    def write(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
        values = getattr(s, attr)
        w.write_count(len(values))
        for value in values:
            w.write_string(value)

    return read, write


def _int_field(*attrs: str) -> Tuple[Reader, Writer]:
    def read(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
        for attr in attrs:
            setattr(s, attr, r.read_int32())

    def write(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
        for attr in attrs:
            w.write_int32(getattr(s, attr))

    return read, write


def _float_field(*attrs: str) -> Tuple[Reader, Writer]:
    def read(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
        for attr in attrs:
            setattr(s, attr, r.read_float32())

    def write(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
        for attr in attrs:
            w.write_float32(getattr(s, attr))

    return read, write


def _bool_field(attr: str) -> Tuple[Reader, Writer]:
    def read(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
        setattr(s, attr, r.read_bool())

    def write(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
        w.write_bool(getattr(s, attr))

    return read, write


def _string_field(attr: str) -> Tuple[Reader, Writer]:
    def read(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
        setattr(s, attr, r.read_string())

    def write(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
        w.write_string(getattr(s, attr))

    return read, write


def _read_highscores(r: RecordReader, s: PersistentState, _: MissionCatalog) -> None:
    entries = []
    for _i in range(r.read_count("highscore")):
        name = r.read_string()
        entries.append(HighscoreEntry(name=name, score=r.read_int32()))
    s.highscores = entries


def _write_highscores(w: RecordWriter, s: PersistentState, _: MissionCatalog) -> None:
    w.write_count(len(s.highscores))
    for entry in s.highscores:
        w.write_string(entry.name)
        w.write_int32(entry.score)


def _read_missions(r: RecordReader, s: PersistentState, catalog: MissionCatalog) -> None:
    s.missions = read_missions(r, catalog)


def _write_missions(w: RecordWriter, s: PersistentState, catalog: MissionCatalog) -> None:
    write_missions(w, s.missions, catalog)


# Versions 1, 5, 6 and 11 added no fields of their own.
DECODE_PLAN: Tuple[FieldGroup, ...] = (
    FieldGroup(1, "coins", _read_coins, _write_coins),
    FieldGroup(1, "consumables", _read_consumables, _write_consumables),
    FieldGroup(1, "characters", *_string_list("characters", "character")),
    FieldGroup(1, "equipped_character", *_int_field("equipped_character")),
    FieldGroup(1, "accessories", *_string_list("accessories", "accessory")),
    FieldGroup(1, "themes", *_string_list("themes", "theme")),
    FieldGroup(1, "equipped_theme", *_int_field("equipped_theme")),
    FieldGroup(2, "premium", *_int_field("premium")),
    FieldGroup(3, "highscores", _read_highscores, _write_highscores),
    FieldGroup(4, "missions", _read_missions, _write_missions),
    FieldGroup(7, "display_name", *_string_field("display_name")),
    FieldGroup(8, "consent_accepted", *_bool_field("consent_accepted")),
    FieldGroup(9, "volumes", *_float_field("master_volume", "music_volume", "sfx_volume")),
    FieldGroup(10, "ftue_level_rank", *_int_field("ftue_level", "rank")),
    FieldGroup(12, "tutorial_done", *_bool_field("tutorial_done")),
)


def encode(state: PersistentState, catalog: Optional[MissionCatalog] = None) -> bytes:
    """Serialize ``state`` at FORMAT_VERSION, writing every field group."""
    catalog = catalog or default_catalog()
    writer = RecordWriter()
    writer.write_int32(FORMAT_VERSION)
    for group in DECODE_PLAN:
        group.write(writer, state, catalog)
    return writer.getvalue()


def read_version(data: bytes) -> int:
    """Return the format version a record was written with."""
    return RecordReader(data).read_int32()


def decode(data: bytes, catalog: Optional[MissionCatalog] = None) -> PersistentState:
    """Rebuild a state from a record of this or any earlier version.

    Fields the record predates keep their first-run defaults. The result has
    already been repaired; the mission floor is the caller's to top up.

    Raises MalformedRecord if the record ends before every field its version
    promises has been read.
    """
    catalog = catalog or default_catalog()
    reader = RecordReader(data)
    version = reader.read_int32()
    if version < 1:
        raise MalformedRecord(f"Invalid format version {version}")
    if version > FORMAT_VERSION:
        logger.warning(
            "Record version %d is newer than supported version %d; reading known fields only",
            version,
            FORMAT_VERSION,
        )

    state = PersistentState.fresh()
    for group in DECODE_PLAN:
        if version < group.min_version:
            break
        group.read(reader, state, catalog)

    if reader.remaining and version <= FORMAT_VERSION:
        logger.warning("Ignoring %d trailing bytes after version %d record", reader.remaining, version)

    for note in state.repair():
        logger.warning("Repaired save record: %s", note)
    logger.debug("Decoded version %d record (%d bytes)", version, len(data))
    return state
