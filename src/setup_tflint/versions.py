# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve requested tflint versions into concrete release tags."""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO, Any, Final, Protocol

from packaging.version import InvalidVersion, Version

from .constants import GITHUB_API_URL, GITHUB_OWNER, GITHUB_REPO, LATEST_VERSION, USER_AGENT
from .errors import UpstreamMetadataError

LOGGER = logging.getLogger(__name__)

GITHUB_API_VERSION: Final[str] = "2022-11-28"
_VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[vV](?=\d)")

Opener = Callable[..., IO[bytes]]


@dataclass(frozen=True, slots=True)
class ReleaseMetadata:
    """Subset of the GitHub release payload used by setup."""

    tag_name: str
    name: str | None = None
    html_url: str | None = None


class ReleaseMetadataClient(Protocol):
    """Protocol describing release metadata providers."""

    def latest_release(self) -> ReleaseMetadata:
        """Return the most recent published release."""


class GitHubReleaseClient:
    """Fetch release metadata from the GitHub Releases API."""

    def __init__(
        self,
        *,
        owner: str = GITHUB_OWNER,
        repo: str = GITHUB_REPO,
        token: str | None = None,
        api_url: str = GITHUB_API_URL,
        opener: Opener | None = None,
    ) -> None:
        self._owner = owner
        self._repo = repo
        self._token = token or None
        self._api_url = api_url.rstrip("/")
        self._opener: Opener = opener or urllib.request.urlopen

    @property
    def latest_url(self) -> str:
        return f"{self._api_url}/repos/{self._owner}/{self._repo}/releases/latest"

    def latest_release(self) -> ReleaseMetadata:
        """Return metadata for the newest published release.

        Raises:
            UpstreamMetadataError: If the API is unreachable, answers with an
                error status, or returns a payload without a release tag.
        """

        payload = self._request_json(self.latest_url)
        if not isinstance(payload, dict):
            raise UpstreamMetadataError(f"Unexpected release payload from {self.latest_url}")
        tag = str(payload.get("tag_name") or payload.get("name") or "").strip()
        if not tag:
            raise UpstreamMetadataError(f"Release payload from {self.latest_url} has no tag name")
        return ReleaseMetadata(
            tag_name=tag,
            name=_clean_text(payload.get("name")),
            html_url=_clean_text(payload.get("html_url")),
        )

    def _request_json(self, url: str) -> Any:
        request = urllib.request.Request(url, headers=self._headers())
        try:
            with self._opener(request) as response:  # nosec B310 - fixed https API endpoint
                return json.load(response)
        except urllib.error.HTTPError as exc:
            raise UpstreamMetadataError(
                f"GitHub API request to {url} failed with HTTP {exc.code}: {exc.reason}",
                status=exc.code,
            ) from exc
        except (urllib.error.URLError, OSError) as exc:
            raise UpstreamMetadataError(f"GitHub API request to {url} failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise UpstreamMetadataError(f"GitHub API response from {url} was not valid JSON") from exc

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if self._token:
            LOGGER.debug("Using token authentication for the GitHub API")
            headers["Authorization"] = f"Bearer {self._token}"
        return headers


def is_latest(spec: str | None) -> bool:
    """Return ``True`` when ``spec`` asks for the newest release."""

    return not spec or spec.strip() == LATEST_VERSION


def resolve_version(spec: str | None, client: ReleaseMetadataClient) -> str:
    """Return the concrete release tag for ``spec``.

    Explicit versions are returned verbatim; an invalid one only surfaces when
    its download fails. ``"latest"`` and empty input query ``client`` once.
    """

    if spec and not is_latest(spec):
        return spec

    LOGGER.debug("Requesting the latest tflint release")
    release = client.latest_release()
    LOGGER.debug("Latest release resolved to %s", release.tag_name)
    return release.tag_name


def normalize_version(tag: str) -> str:
    """Return ``tag`` without its ``v`` prefix, e.g. ``v0.50.0`` -> ``0.50.0``.

    Parseable versions are canonicalised so equivalent spellings such as
    ``v0.50.0-rc.1`` and ``0.50.0rc1`` share one tool cache entry. Anything
    else is returned verbatim.
    """

    candidate = _VERSION_PATTERN.sub("", tag.strip())
    try:
        return str(Version(candidate))
    except InvalidVersion:
        LOGGER.debug("Version %s is not PEP 440 compatible; using it verbatim", candidate)
        return candidate


def _clean_text(raw: object) -> str | None:
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip()
    return cleaned or None


__all__ = [
    "GitHubReleaseClient",
    "ReleaseMetadata",
    "ReleaseMetadataClient",
    "is_latest",
    "normalize_version",
    "resolve_version",
]
