# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plugin directory caching keyed by the tflint configuration."""

from __future__ import annotations

from .facade import BlobCache, DirectoryBlobCache, default_blob_cache_root
from .keys import hash_files, key_prefix, primary_key, resolve_config_files
from .restore import restore_plugin_cache
from .save import save_plugin_cache

__all__ = [
    "BlobCache",
    "DirectoryBlobCache",
    "default_blob_cache_root",
    "hash_files",
    "key_prefix",
    "primary_key",
    "resolve_config_files",
    "restore_plugin_cache",
    "save_plugin_cache",
]
