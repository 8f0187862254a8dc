# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result domain package.

Batch result entry and single-result corrections.
"""

from src.domains.result.service import (
    EmptyResultBatchError,
    ResultNotFoundError,
    ResultService,
    StudentNotFoundError,
)

__all__ = [
    "ResultService",
    "EmptyResultBatchError",
    "ResultNotFoundError",
    "StudentNotFoundError",
]
