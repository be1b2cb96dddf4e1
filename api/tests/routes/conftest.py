"""Route test configuration: disable the rate limiter for route tests."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Disable slowapi rate limiting so repeated writes are not throttled."""
    with patch("core.ratelimit.limiter.enabled", False):
        yield
