# ruff: noqa: E402

import gc
import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import callback_cleanup.settings as settings

DOCTEST_MODULES = {
    SRC / "callback_cleanup" / "__init__.py",
    SRC / "callback_cleanup" / "boxed.py",
    SRC / "callback_cleanup" / "classify.py",
    SRC / "callback_cleanup" / "settings.py",
    SRC / "callback_cleanup" / "sugar.py",
}

_ENV_KEYS = (
    settings.ENV_LOG_LEVEL,
    settings.ENV_NO_COLOR,
    settings.ENV_AT_EXIT,
    "NO_COLOR",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    settings.reset()
    yield
    settings.reset()
    gc.collect()


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path.resolve() in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
