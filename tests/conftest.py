"""
Shared pytest fixtures and configuration for all tests.

Every test runs against a fresh in-memory document store unless it builds
its own adapter.
"""

import os

import pytest

# Set test environment variables BEFORE any imports read settings
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.pop("HASH_CLIENT_SECRETS", None)

from oauthstore.auth import (
    AccessToken,
    AuthCode,
    AuthCodeStore,
    ClientCredentials,
    CredentialStore,
    OAuthPersistence,
    Scope,
    ScopeStore,
    TokenStore,
)
from oauthstore.config import Settings, reset_settings
from oauthstore.database import InMemoryDocumentStore


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings before and after each test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def memory_store():
    """Initialized in-memory document store."""
    store = InMemoryDocumentStore()
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def credential_store(memory_store):
    return CredentialStore(memory_store)


@pytest.fixture
def auth_code_store(memory_store):
    return AuthCodeStore(memory_store)


@pytest.fixture
def token_store(memory_store):
    return TokenStore(memory_store)


@pytest.fixture
def scope_store(memory_store):
    return ScopeStore(memory_store)


@pytest.fixture
async def persistence():
    """OAuthPersistence over a fresh in-memory store."""
    async with OAuthPersistence(InMemoryDocumentStore(), Settings()) as instance:
        yield instance


@pytest.fixture
def sample_client():
    return ClientCredentials(
        client_id="abc",
        secret="s3cret",
        name="Test App",
        uri="https://cb",
        description="test application",
        scope="basic extended",
    )


@pytest.fixture
def sample_auth_code():
    return AuthCode(
        code="c1",
        client_id="abc",
        redirect_uri="https://cb",
        scope="basic",
        state="xyz",
    )


@pytest.fixture
def sample_access_token():
    return AccessToken(
        token="at-123",
        refresh_token="rt-456",
        expires_in=900,
        refresh_expires_in=86400,
        scope="basic",
        client_id="abc",
        code_id="c1",
    )


@pytest.fixture
def sample_scope():
    return Scope(
        name="basic",
        description="Basic access",
        cc_expires_in=900,
        pass_expires_in=900,
        refresh_expires_in=86400,
    )
