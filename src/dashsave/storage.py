from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from .errors import StoreIOError

logger = logging.getLogger(__name__)


class RecordFile:
    """Filesystem-backed storage for the single save record.

    Writes go to a temporary file in the same directory which then replaces
    the record, so a reader only ever sees the old or the new record.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[bytes]:
        """Return the record bytes, or None if there is no record."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreIOError(f"Failed to read save record {self.path}: {e}") from e

    def write(self, data: bytes) -> None:
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            logger.debug("Replacing %s with %s", self.path, tmp_name)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StoreIOError(f"Failed to write save record {self.path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)

    def quarantine(self, suffix: str = ".corrupt") -> Optional[Path]:
        """Move an unreadable record aside so it is not overwritten."""
        target = self.path.with_name(self.path.name + suffix)
        try:
            shutil.copy2(self.path, target)
        except OSError:
            logger.warning("Could not preserve unreadable record %s", self.path, exc_info=True)
            return None
        return target

    def delete(self) -> bool:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StoreIOError(f"Failed to delete save record {self.path}: {e}") from e
        return True
