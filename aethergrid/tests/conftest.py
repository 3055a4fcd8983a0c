"""
Pytest fixtures for Aether Grid tests.
"""

import pytest

from ..admin import ContractConfig
from ..collaborators import (
    Authenticator,
    CollaboratorDirectory,
    InMemoryLedger,
    StubVerifier,
)
from ..engine_core.commitment import DerivedCommitment
from ..engine_core.engine import GameEngine
from ..engine_core.outcome import BinaryVerificationPolicy
from ..storage import InMemorySessionStore


PLAYER1 = "GPLAYERONE"
PLAYER2 = "GPLAYERTWO"
POINTS = 100_0000_000
TREASURE_HASH = bytes([0xAB] * 32)
VALID_PROOF = bytes([0x01] * 64)
INVALID_PROOF = bytes([0xFF] * 64)


class FakeClock:
    """Manually advanced clock for store expiry."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class MockAllAuths(Authenticator):
    """Approves everything. `checks` lists (identity, args) in call order."""

    def __init__(self):
        self.checks = []

    def is_authorized(self, identity, args=None):
        self.checks.append((identity, args))
        return True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture
def auth() -> MockAllAuths:
    return MockAllAuths()


@pytest.fixture
def config() -> ContractConfig:
    return ContractConfig(
        contract_address="aethergrid-test",
        admin="GADMIN",
        hub_address="hub",
        verifier_address="verifier",
    )


@pytest.fixture
def directory(ledger, verifier) -> CollaboratorDirectory:
    directory = CollaboratorDirectory()
    directory.register("hub", ledger)
    directory.register("verifier", verifier)
    return directory


@pytest.fixture
def store(clock) -> InMemorySessionStore:
    return InMemorySessionStore(ttl_seconds=3600, clock=clock)


@pytest.fixture
def engine(config, directory, auth, store) -> GameEngine:
    """Supplied commitments, cost tiebreak."""
    return GameEngine(config=config, directory=directory, authenticator=auth, store=store)


@pytest.fixture
def derived_engine(config, directory, auth, store) -> GameEngine:
    """Derived commitments, binary verification."""
    return GameEngine(
        config=config,
        directory=directory,
        authenticator=auth,
        store=store,
        commitment_scheme=DerivedCommitment(),
        outcome_policy=BinaryVerificationPolicy(),
    )


@pytest.fixture
def started(engine) -> GameEngine:
    """Engine with session 1 started on TREASURE_HASH."""
    result = engine.start(1, PLAYER1, PLAYER2, POINTS, POINTS, TREASURE_HASH)
    assert result.success
    return engine
