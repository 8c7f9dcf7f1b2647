"""Tests for legalease/services/fallback.py — tiered execution."""

import pytest
from legalease.exceptions import BackendFailure, ExtractionFailed, ParseFailure
from legalease.services.fallback import Tier, run_tiers


def _returning(value, calls, name):
    async def attempt():
        calls.append(name)
        return value
    return attempt


def _raising(exc, calls, name):
    async def attempt():
        calls.append(name)
        raise exc
    return attempt


class TestRunTiers:

    async def test_first_tier_wins(self):
        calls = []
        result = await run_tiers("op", [
            Tier("one", _returning(1, calls, "one")),
            Tier("two", _returning(2, calls, "two")),
        ])
        assert result == 1
        assert calls == ["one"]

    async def test_parse_failure_moves_to_next_tier(self):
        calls = []
        result = await run_tiers("op", [
            Tier("one", _raising(ParseFailure("bad"), calls, "one")),
            Tier("two", _returning(2, calls, "two"), recovers_from=(ParseFailure,)),
        ])
        assert result == 2
        assert calls == ["one", "two"]

    async def test_tier_skipped_for_unhandled_failure(self):
        calls = []
        result = await run_tiers("op", [
            Tier("one", _raising(BackendFailure("down"), calls, "one")),
            Tier("two", _returning(2, calls, "two"), recovers_from=(ParseFailure,)),
            Tier("three", _returning(3, calls, "three")),
        ])
        assert result == 3
        assert calls == ["one", "three"]

    async def test_all_fail_raises_last(self):
        calls = []
        last = BackendFailure("still down")
        with pytest.raises(BackendFailure) as exc_info:
            await run_tiers("op", [
                Tier("one", _raising(ParseFailure("bad"), calls, "one")),
                Tier("two", _raising(last, calls, "two")),
            ])
        assert exc_info.value is last

    async def test_unrecoverable_error_propagates(self):
        calls = []
        with pytest.raises(ExtractionFailed):
            await run_tiers("op", [
                Tier("one", _raising(ExtractionFailed("corrupt"), calls, "one")),
                Tier("two", _returning(2, calls, "two")),
            ])
        assert calls == ["one"]

    async def test_no_tiers(self):
        with pytest.raises(ValueError):
            await run_tiers("op", [])
