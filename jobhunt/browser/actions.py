"""Reusable browser actions: pacing delay and form-field helpers.

All pipeline pauses go through fixed_sleep() so tests can patch one place.
"""

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)

COMMIT_KEYSTROKE = " "


async def fixed_sleep(seconds: float) -> float:
    """Sleep for ``seconds`` (negative values are clamped to zero).

    Returns the actual sleep duration (useful for testing).
    """
    duration = max(seconds, 0.0)
    await asyncio.sleep(duration)
    return duration


async def fill_and_commit(page: Any, selector: str, value: str) -> None:
    """Set an input's value, then type one keystroke so autocomplete settles.

    LinkedIn's location box ignores a value set programmatically until a key
    event fires on it.
    """
    await page.wait_for_selector(selector, state="visible")
    await page.fill(selector, value)
    await page.type(selector, COMMIT_KEYSTROKE)
    logger.debug("Filled and committed '%s'", selector)


async def inner_text(element: Any) -> str:
    """Return an element's rendered text stripped, or "" when it has none."""
    text = await element.inner_text()
    return text.strip() if text else ""
