# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static files shipped with setup-tflint (problem matcher, shim template)."""
