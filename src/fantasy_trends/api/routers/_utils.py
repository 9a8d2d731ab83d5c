"""
Shared utilities for API routers.

Contains the translation from repository failures to API errors.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from ...repositories import StoreError, StoreTimeoutError
from ..errors import UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(context: str, message: str) -> Iterator[None]:
    """
    Convert Record Store failures raised inside the block to API errors.

    Args:
        context: What was being fetched, for the log line
        message: Human-readable message returned to the client

    Raises:
        UpstreamTimeoutError: on StoreTimeoutError
        UpstreamError: on any other StoreError
    """
    try:
        yield
    except StoreTimeoutError as e:
        logger.error("Timed out fetching %s: %s", context, e)
        raise UpstreamTimeoutError(f"{message}: the data source timed out") from e
    except StoreError as e:
        logger.error("Error fetching %s: %s", context, e, exc_info=True)
        raise UpstreamError(message) from e
