"""Shared fixtures for the trust engine tests."""
import pytest

from blockchain.program import TrustProgram
from blockchain.store import TrustStore
from trust.config import TrustParameters
from trust.records import TrustRecord

PROGRAM_ID = 'test-program'


@pytest.fixture
def params():
    return TrustParameters()


@pytest.fixture
def store():
    return TrustStore(PROGRAM_ID)


@pytest.fixture
def program(store):
    return TrustProgram(store)


@pytest.fixture
def populated_store(store):
    """Three participants created at t=1000."""
    store.create('car-a', TrustRecord(0.9, 1000))
    store.create('car-b', TrustRecord(0.9, 1000))
    store.create('car-c', TrustRecord(0.1, 1000))
    return store
