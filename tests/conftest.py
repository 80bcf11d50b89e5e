from pathlib import Path

import pytest

from agenda.adapters.stores.memory import InMemoryDocumentStore, InMemoryKeyValueStore
from agenda.domain.policy import PolicyEngine
from agenda.rules.loader import load_rules
from agenda.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules() -> Rules:
    """The shipped rules.yaml, loaded the way the app loads it."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def policy(rules: Rules) -> PolicyEngine:
    return PolicyEngine(rules)


@pytest.fixture
def doc_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
