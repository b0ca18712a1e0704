import pytest

from snakerename.config import CONFIG_ENV_VAR
from snakerename.utils import set_debug_enabled


@pytest.fixture(autouse=True)
def reset_debug_mode():
    set_debug_enabled(False)
    yield
    set_debug_enabled(False)


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Empty working directory with no configuration in scope"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return tmp_path


@pytest.fixture
def sample_source(workspace):
    path = workspace / "app.js"
    path.write_text(
        "let itemCount = 0;\n"
        "let totalItemCount = itemCount;\n"
        "itemCount += 1;\n"
    )
    return path
