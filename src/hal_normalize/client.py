import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .core.normalize import normalize
from .core.options import NormalizeOptions, OptionsLike, resolve_options


class HalClientError(Exception):
    """Base error for client failures."""


class HalHTTPError(HalClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_json = response_json
        self.response_text = response_text


class HalParseError(HalClientError):
    pass


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_on_429: bool = False


class HalClient:
    """
    Async HTTP client that fetches HAL+JSON documents.
    - Handles base URL, timeouts, retries
    - Returns raw dict payloads or normalized stores
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        headers: Optional[Dict[str, str]] = None,
        options: OptionsLike = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        if not base_url:
            raise ValueError("base_url must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        explicit = resolve_options(options)
        self.options = self._default_options(explicit, base_url)
        self._implicit_base_url = self.options is not explicit
        self.log = logger or logging.getLogger("hal_normalize.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/hal+json", **(headers or {})},
            timeout=timeout_seconds,
        )

    @staticmethod
    def _default_options(options: NormalizeOptions, base_url: str) -> NormalizeOptions:
        # Without an explicit URI style, store keys are relative to the API base.
        if options.normalize_uri is None and not options.base_url:
            return resolve_options(options, base_url=base_url)
        return options

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HalClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def get(
        self, url: str, *, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Fetch one HAL document.
        - Retries on transient failures (network/timeouts + 502/503/504; optionally 429)
        - Raises HalHTTPError on non-2xx HTTP responses
        - Raises HalClientError on network/timeout errors after retries
        - Raises HalParseError if the response isn't a JSON object
        """
        start = time.perf_counter()
        attempt = 0

        while True:
            try:
                resp = await self.http.request("GET", url, params=params)
                duration_ms = int((time.perf_counter() - start) * 1000)

                self.log.debug(
                    "hal.request",
                    extra={
                        "method": "GET",
                        "url": str(resp.request.url),
                        "status": resp.status_code,
                        "duration_ms": duration_ms,
                        "attempt": attempt,
                    },
                )

                if resp.status_code in self.retry.retry_statuses or (
                    self.retry.retry_on_429 and resp.status_code == 429
                ):
                    if attempt < self.retry.max_retries:
                        await asyncio.sleep(
                            self.retry.backoff_base_seconds * (2**attempt)
                        )
                        attempt += 1
                        continue

                if resp.status_code < 200 or resp.status_code >= 300:
                    raise self._to_http_error(resp, method="GET")

                return self._safe_json(resp)

            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                if attempt < self.retry.max_retries:
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise HalClientError(
                    f"Network/timeout error calling GET {url}: {exc}"
                ) from exc

            except httpx.HTTPError as exc:
                raise HalClientError(f"HTTPX error calling GET {url}: {exc}") from exc

    async def get_normalized(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        """Fetch a HAL document and flatten it into a store."""
        document = await self.get(url, params=params)
        if self._implicit_base_url and (
            {"normalize_uri", "normalizeUri"} & overrides.keys()
        ):
            # a caller-supplied normalizer replaces the client default prefix
            overrides = {"base_url": "", **overrides}
        return normalize(document, self.options, **overrides)

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise HalParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise HalParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> HalHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                message = parsed.get("message") or parsed.get("error") or message
        except ValueError:
            response_text = (resp.text or "")[:500]

        return HalHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )


__all__ = [
    "HalClient",
    "HalClientError",
    "HalHTTPError",
    "HalParseError",
    "RetryConfig",
]
