import pytest

from linkguard.config import RuleTables, load_config
from linkguard.engine import HeuristicEngine


@pytest.fixture
def config(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    return load_config()


@pytest.fixture
def tables(config):
    return RuleTables.from_config(config)


@pytest.fixture
def engine(tables):
    return HeuristicEngine(tables)
