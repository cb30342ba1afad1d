from .base import Mission, MissionType, RunContext
from .catalog import MissionCatalog, default_catalog
from .kinds import BUILTIN_BEHAVIORS, MissionBehavior
from .registry import MISSION_FLOOR, MissionRegistry, read_missions, write_missions

__all__ = [
    "Mission",
    "MissionType",
    "RunContext",
    "MissionCatalog",
    "default_catalog",
    "MissionBehavior",
    "BUILTIN_BEHAVIORS",
    "MISSION_FLOOR",
    "MissionRegistry",
    "read_missions",
    "write_missions",
]
