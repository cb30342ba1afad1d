import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from dashsave.rng import RandomProvider  # noqa: E402
from dashsave.store import ProgressStore  # noqa: E402


@pytest.fixture()
def rng() -> RandomProvider:
    return RandomProvider(seed=1234)


@pytest.fixture()
def save_path(tmp_path: Path) -> Path:
    return tmp_path / "save.bin"


@pytest.fixture()
def store(save_path: Path, rng: RandomProvider) -> ProgressStore:
    s = ProgressStore(save_path, rng=rng)
    s.load()
    return s
