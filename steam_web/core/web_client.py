"""
Web Client for handling HTTP requests to Steam
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Optional

import requests

from steam_web.config.settings import (
    DEFAULT_HEADERS, REQUEST_TIMEOUT, MAX_RETRIES, RETRY_DELAY, RETRY_BACKOFF,
    NON_RETRYABLE_STATUSES
)
from steam_web.core.errors import RateLimitExceeded, Unauthorized, HttpError


@dataclass(frozen=True)
class RetryPolicy:
    """How many times a request is repeated and how long to wait in between"""
    retries: int = MAX_RETRIES
    delay: float = RETRY_DELAY
    backoff: float = RETRY_BACKOFF
    non_retryable: FrozenSet[int] = NON_RETRYABLE_STATUSES

    @property
    def attempts(self) -> int:
        return self.retries + 1

    def delay_before(self, attempt: int) -> float:
        """Seconds to wait before the given attempt (0 is the first one)"""
        if attempt <= 0:
            return 0.0
        return self.delay * (self.backoff ** (attempt - 1))


class WebClient:
    """Sends requests to Steam through one retry policy, with per-instance headers"""

    def __init__(self, headers: Optional[Dict[str, str]] = None, timeout: float = REQUEST_TIMEOUT,
                 proxies: Optional[Dict[str, str]] = None, retry_policy: Optional[RetryPolicy] = None):
        """
        Initialize Web Client.

        Args:
            headers: extra headers merged over the defaults for this instance only
            timeout: seconds before a single attempt is aborted
            proxies: requests-style proxies mapping
            retry_policy: retry budget and delays, RetryPolicy() if omitted
        """
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        if headers:
            self.session.headers.update(headers)
        if proxies:
            self.session.proxies.update(proxies)
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self.logger = logging.getLogger(__name__)

    def request(self, method: str, url: str, build: Optional[Callable[[], Dict[str, Any]]] = None,
                **kwargs) -> requests.Response:
        """
        Send a request, retrying transient failures.

        Args:
            method: HTTP method
            url: URL to request
            build: called before every attempt, returns extra keyword arguments
                for requests (used for bodies that must not be replayed)
            **kwargs: keyword arguments passed to requests on every attempt

        Returns:
            requests.Response with a 2xx status

        Raises:
            RateLimitExceeded: on 429, without retrying
            Unauthorized: on 401, without retrying
            HttpError: other non-2xx status after the retry budget
            requests.RequestException: network failure after the retry budget
        """
        policy = self.retry_policy
        kwargs.setdefault('timeout', self.timeout)
        last_error: Optional[Exception] = None

        for attempt in range(policy.attempts):
            if attempt > 0:
                delay = policy.delay_before(attempt)
                self.logger.info(f"Waiting {delay:.1f} seconds before retry {attempt}/{policy.retries}")
                time.sleep(delay)

            request_kwargs = dict(kwargs)
            if build is not None:
                request_kwargs.update(build())

            try:
                response = self.session.request(method, url, **request_kwargs)
            except requests.exceptions.Timeout as e:
                self.logger.warning(f"Timeout for {method} {url}, attempt {attempt + 1}")
                last_error = e
                continue
            except requests.exceptions.RequestException as e:
                self.logger.warning(f"Request error for {method} {url}, attempt {attempt + 1}: {e}")
                last_error = e
                continue

            status = response.status_code
            if 200 <= status < 300:
                return response
            if status == 429 and 429 in policy.non_retryable:
                self.logger.warning(f"Rate limited by Steam on {method} {url}")
                raise RateLimitExceeded(f"HTTP 429 for {url}")
            if status == 401 and 401 in policy.non_retryable:
                self.logger.warning(f"Unauthorized on {method} {url}")
                raise Unauthorized(f"HTTP 401 for {url}")
            if status in policy.non_retryable:
                raise HttpError(status, response.reason, response)

            self.logger.warning(f"HTTP {status} for {method} {url}, attempt {attempt + 1}")
            last_error = HttpError(status, response.reason, response)

        self.logger.error(f"Failed {method} {url} after {policy.attempts} attempts")
        raise last_error

    def get(self, url: str, **kwargs) -> requests.Response:
        return self.request('GET', url, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        return self.request('POST', url, **kwargs)

    def clear_cookies(self):
        """Forget cookies requests collected from Set-Cookie headers"""
        self.session.cookies.clear()

    def close(self):
        """Close the session"""
        self.session.close()
