import pytest

from fmlogic.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings."""
    for name in ("FMLOGIC_CONFIG", "FMLOGIC_MAX_TREE_DEPTH", "FMLOGIC_VIRTUAL_ROOT_NAME"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
