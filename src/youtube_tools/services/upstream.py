"""Shared plumbing for HTTP calls to upstream providers."""

from __future__ import annotations

from typing import Mapping, Optional

import requests
from rich.console import Console

from youtube_tools.config.settings import Settings, get_settings
from youtube_tools.errors import UpstreamRejectedError, UpstreamUnavailableError

STATUS_REASONS = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    429: "rate_limited",
}


def status_reason(status_code: int) -> str:
    """Map an HTTP status to a short, stable rejection reason."""

    if status_code in STATUS_REASONS:
        return STATUS_REASONS[status_code]
    if status_code >= 500:
        return "provider_error"
    return f"http_{status_code}"


class UpstreamClient:
    """Base class for services that call a single upstream JSON API.

    Transport failures become :class:`UpstreamUnavailableError`; error statuses are
    handed to :meth:`_rejection` so subclasses can derive a specific sub-reason.
    No retries are attempted here.
    """

    operation: str = "upstream request"

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._console = console or Console(stderr=True)
        self._session = session or requests.Session()

    def _get(
        self,
        url: str,
        *,
        params: Mapping[str, object],
        headers: Optional[Mapping[str, str]] = None,
        subject: str,
    ) -> requests.Response:
        try:
            response = self._session.get(
                url,
                params=params,
                headers=dict(headers or {}),
                timeout=self._settings.request_timeout_seconds,
            )
        except requests.RequestException as exc:
            self._console.log(f"[red]{self.operation} failed:[/red] {exc} ({subject})")
            raise UpstreamUnavailableError(f"{self.operation} failed for {subject}: {exc}") from exc

        if response.status_code >= 400:
            error = self._rejection(response, subject)
            self._console.log(f"[red]{self.operation} rejected:[/red] {error}")
            raise error
        return response

    def _rejection(self, response: requests.Response, subject: str) -> UpstreamRejectedError:
        return UpstreamRejectedError(
            f"{self.operation} rejected for {subject} with HTTP {response.status_code}",
            reason=status_reason(response.status_code),
            status_code=response.status_code,
        )

    def close(self) -> None:
        """Release the underlying HTTP session."""

        self._session.close()


__all__ = ["STATUS_REASONS", "UpstreamClient", "status_reason"]
