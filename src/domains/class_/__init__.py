# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain package.

This package provides class management functionality including:
- Class CRUD operations
- Capacity checks for student enrolment
"""

from src.domains.class_.service import (
    ClassFullError,
    ClassNotFoundError,
    ClassService,
)

__all__ = [
    "ClassService",
    "ClassNotFoundError",
    "ClassFullError",
]
