# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Restore the tflint plugin directory before tflint runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..actions import ActionsRuntime
from ..config import SetupSettings
from ..constants import RUNNER_OS_ENV, STATE_CACHE_MATCHED_KEY, STATE_CACHE_PATHS, STATE_CACHE_PRIMARY_KEY
from ..errors import PluginCacheError
from ..logging import info
from .facade import BlobCache
from .keys import hash_files, key_prefix, primary_key, resolve_config_files

LOGGER = logging.getLogger(__name__)


def restore_plugin_cache(
    settings: SetupSettings,
    runtime: ActionsRuntime,
    cache: BlobCache,
    *,
    root: Path | None = None,
) -> str | None:
    """Restore the plugin directory keyed by the hash of the tflint config files.

    Saves the primary key and cached paths to runner state for the post step
    and publishes ``cache-hit``. Returns the matched key, or ``None`` when the
    cache is disabled, no config file matches, or nothing was restored.
    """

    if not settings.cache:
        runtime.debug("Cache is not enabled")
        return None

    plugin_dir = settings.plugin_directory(runtime.environ)
    pattern = settings.config_path
    runtime.debug(f"Resolving config files matching pattern: {pattern}")
    config_files = resolve_config_files(pattern, root)
    if not config_files:
        runtime.warning(f"No TFLint config files found matching pattern '{pattern}'. Skipping cache.")
        return None

    info(f"Found {len(config_files)} TFLint config file(s): {', '.join(str(path) for path in config_files)}")
    file_hash = hash_files(config_files)
    if not file_hash:
        runtime.warning("Unable to hash config files. Skipping cache.")
        return None

    prefix = key_prefix(runtime.environ.get(RUNNER_OS_ENV, ""))
    key = primary_key(runtime.environ.get(RUNNER_OS_ENV, ""), file_hash)
    runtime.debug(f"Cache primary key: {key}")
    runtime.save_state(STATE_CACHE_PRIMARY_KEY, key)
    runtime.save_state(STATE_CACHE_PATHS, json.dumps([str(plugin_dir)]))

    try:
        matched = cache.restore([plugin_dir], key, [prefix])
    except PluginCacheError as exc:
        runtime.warning(f"Failed to restore: {exc}")
        matched = None
    runtime.set_output("cache-hit", bool(matched))
    if not matched:
        info("TFLint plugin cache not found")
        return None

    runtime.save_state(STATE_CACHE_MATCHED_KEY, matched)
    info(f"TFLint plugin cache restored from key: {matched}")
    return matched


__all__ = ["restore_plugin_cache"]
