# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent domain - parent account and profile management."""

from src.domains.parent.service import ParentNotFoundError, ParentService

__all__ = ["ParentService", "ParentNotFoundError"]
