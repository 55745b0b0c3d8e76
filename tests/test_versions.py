# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for release version resolution."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from typing import Any

import pytest

from setup_tflint.errors import UpstreamMetadataError
from setup_tflint.versions import (
    GitHubReleaseClient,
    ReleaseMetadata,
    is_latest,
    normalize_version,
    resolve_version,
)


class CountingClient:
    def __init__(self, tag: str = "v0.51.1") -> None:
        self.calls = 0
        self.tag = tag

    def latest_release(self) -> ReleaseMetadata:
        self.calls += 1
        return ReleaseMetadata(tag_name=self.tag)


class FakeOpener:
    def __init__(self, payload: Any = None, *, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.requests: list[urllib.request.Request] = []

    def __call__(self, request: urllib.request.Request) -> io.BytesIO:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        body = self.payload if isinstance(self.payload, bytes) else json.dumps(self.payload).encode()
        return io.BytesIO(body)


def test_explicit_version_is_returned_without_lookup() -> None:
    client = CountingClient()
    assert resolve_version("v0.50.0", client) == "v0.50.0"
    assert client.calls == 0


@pytest.mark.parametrize("spec", ["latest", "", None])
def test_latest_queries_once(spec: str | None) -> None:
    client = CountingClient("v0.52.0")
    assert resolve_version(spec, client) == "v0.52.0"
    assert client.calls == 1


def test_is_latest() -> None:
    assert is_latest("latest")
    assert is_latest(None)
    assert not is_latest("v0.50.0")


def test_client_reads_tag_and_sends_token() -> None:
    opener = FakeOpener({"tag_name": "v0.50.3", "name": "v0.50.3", "html_url": "https://example.invalid/r"})
    client = GitHubReleaseClient(token="secret", opener=opener)

    release = client.latest_release()

    assert release.tag_name == "v0.50.3"
    request = opener.requests[0]
    assert request.full_url == "https://api.github.com/repos/terraform-linters/tflint/releases/latest"
    assert request.get_header("Authorization") == "Bearer secret"


def test_client_without_token_sends_no_authorization() -> None:
    opener = FakeOpener({"tag_name": "v0.50.3"})
    GitHubReleaseClient(opener=opener).latest_release()
    assert opener.requests[0].get_header("Authorization") is None


def test_client_falls_back_to_release_name() -> None:
    opener = FakeOpener({"name": "v0.49.0"})
    assert GitHubReleaseClient(opener=opener).latest_release().tag_name == "v0.49.0"


def test_http_error_is_reported_with_status() -> None:
    error = urllib.error.HTTPError("https://api.github.com", 403, "rate limited", {}, None)  # type: ignore[arg-type]
    client = GitHubReleaseClient(opener=FakeOpener(error=error))
    with pytest.raises(UpstreamMetadataError) as excinfo:
        client.latest_release()
    assert excinfo.value.status == 403


@pytest.mark.parametrize(
    "opener",
    [
        FakeOpener(error=urllib.error.URLError("offline")),
        FakeOpener(b"not json"),
        FakeOpener({"draft": True}),
        FakeOpener(["unexpected"]),
    ],
)
def test_unusable_responses_raise(opener: FakeOpener) -> None:
    with pytest.raises(UpstreamMetadataError):
        GitHubReleaseClient(opener=opener).latest_release()


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("v0.50.0", "0.50.0"),
        ("0.50.0", "0.50.0"),
        ("V1.2.3", "1.2.3"),
        ("v0.50.0-rc.1", "0.50.0rc1"),
        ("0.50.0rc1", "0.50.0rc1"),
        ("nightly", "nightly"),
    ],
)
def test_normalize_version(tag: str, expected: str) -> None:
    assert normalize_version(tag) == expected
