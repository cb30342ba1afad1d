class SaveError(Exception):
    """Base exception for save/load errors."""


class MalformedRecord(SaveError):
    """Raised when a save record is truncated or internally inconsistent."""


class StoreIOError(SaveError):
    """Raised when the save record cannot be read from or written to disk."""


class SaveValidationError(SaveError):
    """Raised when a value cannot be stored (bad argument or out of wire range)."""


class InsufficientFunds(SaveError):
    """Raised when spending more currency than the player holds."""


class MissionNotHeld(SaveError):
    """Raised when claiming a mission the registry does not currently hold."""
