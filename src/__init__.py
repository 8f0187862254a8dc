"""SchoolDesk mutation service.

Create/update/delete handlers for a school-management application,
coordinating an external identity provider and a relational store.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
