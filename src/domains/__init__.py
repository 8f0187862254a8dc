# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for SchoolDesk.

This package contains domain services that encapsulate business logic.
Each domain module provides a service over one entity; the mutations
package exposes them as form-action handlers.

Domains:
    accounts: Coordinated identity account and row writes.
    auth: Caller session context and token verification.
    subject, class_, teacher, student, parent: School roster entities.
    exam, result, attendance: Assessment and attendance records.
    mutations: Handler facade returning MutationResult.
"""
