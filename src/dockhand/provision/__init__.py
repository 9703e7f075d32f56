# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from . import redhat  # noqa: F401  (registers the redhat family)
