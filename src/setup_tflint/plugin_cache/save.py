# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Save the tflint plugin directory once the job has finished."""

from __future__ import annotations

import json
from pathlib import Path

from ..actions import ActionsRuntime
from ..constants import STATE_CACHE_MATCHED_KEY, STATE_CACHE_PATHS, STATE_CACHE_PRIMARY_KEY
from ..errors import PluginCacheError, ReserveCacheError
from ..logging import info
from .facade import BlobCache


def save_plugin_cache(runtime: ActionsRuntime, cache: BlobCache, *, enabled: bool) -> bool:
    """Persist the paths recorded by :func:`restore_plugin_cache` under the primary key.

    Cache failures never fail the job: a reserved key is reported as info,
    anything else as a warning. Returns ``True`` when an entry was written.
    """

    if not enabled:
        runtime.debug("Cache is not enabled")
        return False

    key = runtime.get_state(STATE_CACHE_PRIMARY_KEY)
    matched = runtime.get_state(STATE_CACHE_MATCHED_KEY)
    if not key:
        runtime.debug("No cache primary key found, skipping save")
        return False

    paths = _state_paths(runtime)
    if not paths:
        runtime.warning("No cache paths found, skipping save")
        return False

    if key == matched:
        info(f"Cache hit on primary key {key}, not saving cache")
        return False

    try:
        cache_id = cache.save(paths, key)
    except ReserveCacheError as exc:
        info(str(exc))
        return False
    except PluginCacheError as exc:
        runtime.warning(f"Failed to save cache: {exc}")
        return False

    if cache_id == -1:
        runtime.warning("Cache save failed")
        return False
    info(f"TFLint plugin cache saved with key: {key}")
    return True


def _state_paths(runtime: ActionsRuntime) -> list[Path]:
    raw = runtime.get_state(STATE_CACHE_PATHS) or "[]"
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(decoded, list):
        return []
    return [Path(str(item)) for item in decoded if item]


__all__ = ["save_plugin_cache"]
