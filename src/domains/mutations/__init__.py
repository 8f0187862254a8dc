# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mutation facade: one handler per entity and verb."""

from src.domains.mutations.service import MutationService

__all__ = ["MutationService"]
