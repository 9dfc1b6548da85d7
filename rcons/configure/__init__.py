# SPDX-License-Identifier: MIT
"""Loading action descriptions from configuration files."""
