"""Tests for the memoized property catalog."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from mkvprops.catalog import PropertyCatalog
from mkvprops.core.subprocess_utils import ProcessResult

TOOL = Path("/usr/bin/mkvpropedit")


class TestPropertyCatalog:
    """Tests for PropertyCatalog."""

    @pytest.mark.asyncio
    async def test_fetches_once(self, property_listing):
        """The listing is fetched on first use and reused afterwards."""
        runner = AsyncMock(return_value=ProcessResult(0, property_listing, ""))
        catalog = PropertyCatalog(TOOL, runner, timeout=30)

        first = await catalog.list()
        second = await catalog.list()

        assert first == second
        assert len(first) == 8
        runner.assert_awaited_once_with([TOOL, "--list-property-names"], timeout=30)
        assert catalog.is_loaded

    @pytest.mark.asyncio
    async def test_returns_copies(self, property_listing):
        """Callers cannot mutate the memoized list."""
        runner = AsyncMock(return_value=ProcessResult(0, property_listing, ""))
        catalog = PropertyCatalog(TOOL, runner)

        first = await catalog.list()
        first.clear()

        assert len(await catalog.list()) == 8

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_fetch(self, property_listing):
        """Concurrent first calls run the listing once."""
        release = asyncio.Event()

        async def slow_runner(args, timeout=None):
            await release.wait()
            return ProcessResult(0, property_listing, "")

        runner = AsyncMock(side_effect=slow_runner)
        catalog = PropertyCatalog(TOOL, runner)

        tasks = [asyncio.create_task(catalog.list()) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert runner.await_count == 1
        assert all(len(r) == 8 for r in results)

    @pytest.mark.asyncio
    async def test_failure_returns_empty_and_is_not_memoized(self, property_listing):
        """A failed listing yields [] and the next call retries."""
        runner = AsyncMock(
            side_effect=[
                ProcessResult(2, "", "mkvpropedit: error"),
                ProcessResult(0, property_listing, ""),
            ]
        )
        catalog = PropertyCatalog(TOOL, runner)

        assert await catalog.list() == []
        assert catalog.is_loaded is False
        assert len(await catalog.list()) == 8
        assert runner.await_count == 2

    @pytest.mark.asyncio
    async def test_runner_exception_returns_empty(self):
        """An error while running the tool yields []."""
        runner = AsyncMock(side_effect=FileNotFoundError("mkvpropedit"))
        catalog = PropertyCatalog(TOOL, runner)

        assert await catalog.list() == []

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(self, property_listing):
        """invalidate drops the memoized listing."""
        runner = AsyncMock(return_value=ProcessResult(0, property_listing, ""))
        catalog = PropertyCatalog(TOOL, runner)

        await catalog.list()
        catalog.invalidate()
        await catalog.list()

        assert runner.await_count == 2
