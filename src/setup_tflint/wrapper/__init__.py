# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Wrapper that captures tflint output for later workflow steps."""

from __future__ import annotations

from .executor import ExecutionResult, ExitCodePolicy, execute, locate_real_binary
from .installer import WrapperState, install_wrapper, render_shim
from .output import OutputListener

__all__ = [
    "ExecutionResult",
    "ExitCodePolicy",
    "OutputListener",
    "WrapperState",
    "execute",
    "install_wrapper",
    "locate_real_binary",
    "render_shim",
]
