# SPDX-License-Identifier: MIT
"""Core command synthesis: data model, rpaths, features and builders."""
