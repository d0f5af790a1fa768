"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from suo.config import SuoConfig
from suo.pipeline import shutdown_executor


# =============================================================================
# SOURCE FIXTURES
# =============================================================================

RESET_ENTRY = '0.0 "--Reset--" sync / 00:0839:.*is no longer sealed/ duration 5 window 10000 jump 0'


@pytest.fixture
def reset_entry():
    """The canonical reset entry; generates back byte-identical."""
    return RESET_ENTRY


@pytest.fixture
def sample_timeline():
    """A small timeline using every statement kind the generator supports."""
    return "\n".join([
        'hideall "--Reset--"',
        'hideall "--sync--"',
        RESET_ENTRY,
        '10.0 "Tankbuster" duration 3',
        '25.5 "Raidwide" sync /Boss:5A0:/ window 20,10',
        '40.0 "Add Phase" Ability { id: "5A1", source: "Boss" } window 30 jump 200',
    ])


@pytest.fixture
def timeline_file(tmp_path, sample_timeline):
    """sample_timeline written with a BOM and CRLF line endings."""
    path = tmp_path / "raid.txt"
    path.write_bytes(b"\xef\xbb\xbf" + sample_timeline.replace("\n", "\r\n").encode("utf-8"))
    return path


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove SUO_* overrides from the environment."""
    for var in ("SUO_TARGET", "SUO_EXTRA_LOG_TYPES", "SUO_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def missing_config_path(tmp_path):
    return tmp_path / "does_not_exist.yaml"


@pytest.fixture
def default_config(clean_env, missing_config_path):
    """SuoConfig with defaults only (no file, no env)."""
    return SuoConfig(missing_config_path, use_env=False)


@pytest.fixture(autouse=True)
def _shutdown_shared_executor():
    yield
    shutdown_executor()
