# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity account and row coordination."""

from src.domains.accounts.service import AccountChanges, AccountSync, NewAccount

__all__ = [
    "AccountChanges",
    "AccountSync",
    "NewAccount",
]
