"""HTTP client with timeouts and opt-in retries."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from hardwaste.common.constants import USER_AGENT
from hardwaste.common.errors import FetchError, RetryableFetchError

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 20.0
    read: float = 120.0


@dataclass(frozen=True)
class RetryConfig:
    # One attempt means every failure is final.
    max_attempts: int = 1
    multiplier: float = 1.0
    max_wait: float = 30.0


class HttpClient:
    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        retry: RetryConfig | None = None,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.retry = retry or RetryConfig()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    @classmethod
    def from_config(cls, http_config: dict) -> "HttpClient":
        return cls(
            timeout=TimeoutConfig(
                connect=float(http_config.get("connect_timeout", 20.0)),
                read=float(http_config.get("read_timeout", 120.0)),
            ),
            retry=RetryConfig(max_attempts=int(http_config.get("max_attempts", 1))),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _raise_for_status(self, response: requests.Response, url: str) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        if status in RETRYABLE_STATUS_CODES:
            raise RetryableFetchError(f"Retryable HTTP status {status} from {url}")
        raise FetchError(f"HTTP status {status} from {url}")

    @staticmethod
    def _response_text(response: requests.Response) -> str:
        content_type = response.headers.get("Content-Type", "").lower()
        # requests falls back to ISO-8859-1 for text/html without a charset.
        if "html" in content_type and "charset" not in content_type:
            response.encoding = response.apparent_encoding
        return response.text

    def _get_text(self, url: str, params: dict[str, Any] | None) -> str:
        try:
            response = self.session.get(
                url,
                params=params,
                timeout=(self.timeout.connect, self.timeout.read),
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise RetryableFetchError(f"Transport failure for {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise FetchError(f"Transport failure for {url}: {exc}") from exc

        self._raise_for_status(response, url)
        return self._response_text(response)

    def get_text(self, url: str, *, params: dict[str, Any] | None = None) -> str:
        @retry(
            stop=stop_after_attempt(max(self.retry.max_attempts, 1)),
            wait=wait_exponential_jitter(
                initial=self.retry.multiplier,
                max=self.retry.max_wait,
                jitter=1.0,
            ),
            retry=retry_if_exception_type(RetryableFetchError),
            reraise=True,
        )
        def _wrapped() -> str:
            return self._get_text(url, params)

        return _wrapped()
