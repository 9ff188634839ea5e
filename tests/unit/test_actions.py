"""Tests for browser actions: fixed_sleep and form helpers."""

import asyncio
from unittest.mock import AsyncMock, call, patch

from jobhunt.browser.actions import COMMIT_KEYSTROKE, fill_and_commit, fixed_sleep, inner_text

# ---------------------------------------------------------------------------
# TestFixedSleep
# ---------------------------------------------------------------------------


class TestFixedSleep:
    async def test_sleeps_exact_duration(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            duration = await fixed_sleep(2.0)
        assert duration == 2.0
        mock_sleep.assert_called_once_with(2.0)

    async def test_negative_clamped_to_zero(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            duration = await fixed_sleep(-1.0)
        assert duration == 0.0
        mock_sleep.assert_called_once_with(0.0)


# ---------------------------------------------------------------------------
# TestFillAndCommit
# ---------------------------------------------------------------------------


class TestFillAndCommit:
    async def test_waits_fills_then_types_keystroke(self) -> None:
        page = AsyncMock()
        await fill_and_commit(page, "#loc", "Berlin")

        page.wait_for_selector.assert_awaited_once_with("#loc", state="visible")
        page.fill.assert_awaited_once_with("#loc", "Berlin")
        page.type.assert_awaited_once_with("#loc", COMMIT_KEYSTROKE)

    async def test_order_of_calls(self) -> None:
        page = AsyncMock()
        await fill_and_commit(page, "#loc", "Remote")
        names = [c[0] for c in page.method_calls]
        assert names == ["wait_for_selector", "fill", "type"]
        assert page.method_calls[1] == call.fill("#loc", "Remote")


# ---------------------------------------------------------------------------
# TestInnerText
# ---------------------------------------------------------------------------


class TestInnerText:
    async def test_strips(self) -> None:
        el = AsyncMock()
        el.inner_text = AsyncMock(return_value="\n  Acme GmbH \n")
        assert await inner_text(el) == "Acme GmbH"

    async def test_none_becomes_empty(self) -> None:
        el = AsyncMock()
        el.inner_text = AsyncMock(return_value=None)
        assert await inner_text(el) == ""
