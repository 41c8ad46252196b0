# AQ Monitor: real-time air quality index, advisories and map markers
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Function decorators for provider HTTP calls.

Retry with exponential backoff and default request timeouts are applied to
provider functions as decorators, leaving the request code itself plain.
"""

import logging
from functools import wraps
from typing import Callable, TypeVar

import requests
from tenacity import (
    after_log,
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

F = TypeVar("F", bound=Callable)

logger = logging.getLogger(__name__)


def _is_server_error(exception: BaseException) -> bool:
    """Only HTTP 5xx responses are worth retrying; 4xx will not change."""
    if isinstance(exception, requests.exceptions.HTTPError):
        if exception.response is not None:
            return 500 <= exception.response.status_code < 600
    return False


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    multiplier: float = 2.0,
) -> Callable[[F], F]:
    """
    Decorator to add exponential backoff retry logic to a provider call.

    Retries on connection errors, timeouts and HTTP 5xx errors. Client
    errors (4xx) are raised immediately.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        min_wait: Minimum wait time between retries in seconds (default: 1.0)
        max_wait: Maximum wait time between retries in seconds (default: 10.0)
        multiplier: Multiplier for exponential backoff (default: 2.0)

    Returns:
        Callable: Decorated function with retry logic

    Example:
        >>> @with_retry(max_attempts=5, min_wait=2.0)
        ... def fetch(url):
        ...     response = requests.get(url)
        ...     response.raise_for_status()
        ...     return response.json()
    """

    def decorator(func: F) -> F:
        @retry(
            retry=(
                retry_if_exception_type(requests.exceptions.ConnectionError)
                | retry_if_exception_type(requests.exceptions.Timeout)
                | retry_if_exception(_is_server_error)
            ),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            after=after_log(logger, logging.DEBUG),
            reraise=True,
        )
        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


def with_timeout(seconds: float) -> Callable[[F], F]:
    """
    Decorator to ensure requests have a timeout.

    Adds a ``timeout`` keyword argument to the call if the caller did not
    pass one. A hung provider otherwise leaves a session loading forever.

    Example:
        >>> @with_timeout(30)
        ... def fetch(url, **kwargs):
        ...     return requests.get(url, **kwargs)
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if kwargs.get("timeout") is None:
                kwargs["timeout"] = seconds
            return func(*args, **kwargs)

        return wrapper

    return decorator


# Standard retry for provider calls
retry_on_network_error = with_retry(
    max_attempts=3, min_wait=1.0, max_wait=10.0, multiplier=2.0
)
