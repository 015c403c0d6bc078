"""
Unit tests for oauthstore/auth/auth_codes.py

Tests authorization code handling including:
- Issue and lookup by (code, redirect URI)
- Single use through invalidate and redeem
- Concurrent redemption
"""

import asyncio

import pytest

from oauthstore.core.exceptions import ConsistencyError


class TestRedeemLookup:
    """Test issue and redeem_lookup."""

    @pytest.mark.asyncio
    async def test_scenario(self, auth_code_store, sample_auth_code):
        """Test issue, lookup, invalidate, lookup again."""
        await auth_code_store.issue(sample_auth_code)

        found = await auth_code_store.redeem_lookup("c1", "https://cb")
        assert found is not None
        assert found.code == "c1"
        assert found.client_id == "abc"
        assert found.valid is True
        assert found.id is not None  # assigned by the store

        await auth_code_store.invalidate("c1")

        assert await auth_code_store.redeem_lookup("c1", "https://cb") is None

    @pytest.mark.asyncio
    async def test_wrong_redirect_uri(self, auth_code_store, sample_auth_code):
        """Test a valid code is not returned for another redirect URI."""
        await auth_code_store.issue(sample_auth_code)

        assert await auth_code_store.redeem_lookup("c1", "https://evil") is None
        assert await auth_code_store.redeem_lookup("c1", "https://cb/") is None

    @pytest.mark.asyncio
    async def test_issue_forces_valid(self, auth_code_store, sample_auth_code):
        """Test a code handed over with valid=False is still issued as valid."""
        await auth_code_store.issue(sample_auth_code.model_copy(update={"valid": False}))

        assert await auth_code_store.redeem_lookup("c1", "https://cb") is not None

    @pytest.mark.asyncio
    async def test_unknown_code(self, auth_code_store):
        assert await auth_code_store.redeem_lookup("missing", "https://cb") is None

    @pytest.mark.asyncio
    async def test_duplicate_codes_rejected(self, auth_code_store, sample_auth_code):
        """Test two valid records with one code raise ConsistencyError."""
        await auth_code_store.issue(sample_auth_code)
        await auth_code_store.issue(sample_auth_code)

        with pytest.raises(ConsistencyError):
            await auth_code_store.redeem_lookup("c1", "https://cb")


class TestInvalidate:
    """Test invalidate."""

    @pytest.mark.asyncio
    async def test_idempotent(self, auth_code_store, sample_auth_code):
        """Test invalidating twice is harmless."""
        await auth_code_store.issue(sample_auth_code)

        assert await auth_code_store.invalidate("c1") is True
        assert await auth_code_store.invalidate("c1") is True
        assert await auth_code_store.redeem_lookup("c1", "https://cb") is None

    @pytest.mark.asyncio
    async def test_unknown_code_is_noop(self, auth_code_store):
        """Test invalidating a missing code does not raise."""
        assert await auth_code_store.invalidate("missing") is False

    @pytest.mark.asyncio
    async def test_record_kept(self, auth_code_store, memory_store, sample_auth_code):
        """Test used codes stay in storage."""
        await auth_code_store.issue(sample_auth_code)
        await auth_code_store.invalidate("c1")

        records = await memory_store.find_many("authCodes", {"code": "c1"})
        assert len(records) == 1
        assert records[0]["valid"] is False

    @pytest.mark.asyncio
    async def test_invalidates_every_copy(self, auth_code_store, sample_auth_code):
        """Test a duplicated code is fully burned."""
        await auth_code_store.issue(sample_auth_code)
        await auth_code_store.issue(sample_auth_code)

        assert await auth_code_store.invalidate("c1") is True
        assert await auth_code_store.redeem_lookup("c1", "https://cb") is None
        assert await auth_code_store.redeem("c1", "https://cb") is None


class TestRedeem:
    """Test redeem (atomic find-and-invalidate)."""

    @pytest.mark.asyncio
    async def test_redeem_once(self, auth_code_store, sample_auth_code):
        """Test the first redeem returns the code and the second does not."""
        await auth_code_store.issue(sample_auth_code)

        redeemed = await auth_code_store.redeem("c1", "https://cb")
        assert redeemed is not None
        assert redeemed.client_id == "abc"
        assert redeemed.valid is False

        assert await auth_code_store.redeem("c1", "https://cb") is None
        assert await auth_code_store.redeem_lookup("c1", "https://cb") is None

    @pytest.mark.asyncio
    async def test_wrong_redirect_uri_keeps_code(self, auth_code_store, sample_auth_code):
        """Test a mismatched redeem does not burn the code."""
        await auth_code_store.issue(sample_auth_code)

        assert await auth_code_store.redeem("c1", "https://evil") is None
        assert await auth_code_store.redeem("c1", "https://cb") is not None

    @pytest.mark.asyncio
    async def test_concurrent_redemptions_single_winner(
        self,
        auth_code_store,
        sample_auth_code,
    ):
        """Test only one of many concurrent redemptions succeeds."""
        await auth_code_store.issue(sample_auth_code)

        results = await asyncio.gather(
            *(auth_code_store.redeem("c1", "https://cb") for _ in range(20)),
        )

        winners = [result for result in results if result is not None]
        assert len(winners) == 1

    @pytest.mark.asyncio
    async def test_duplicate_codes_never_redeemed(self, auth_code_store, sample_auth_code):
        """Test a code stored twice is rejected rather than redeemed once per copy."""
        await auth_code_store.issue(sample_auth_code)
        await auth_code_store.issue(sample_auth_code)

        with pytest.raises(ConsistencyError):
            await auth_code_store.redeem("c1", "https://cb")
        with pytest.raises(ConsistencyError):
            await auth_code_store.redeem("c1", "https://cb")

        # neither copy was burned by the refused redemptions
        with pytest.raises(ConsistencyError):
            await auth_code_store.redeem_lookup("c1", "https://cb")
