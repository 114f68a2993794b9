#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared helpers for mdgrid: dependency checks, encodings and HTML formatting."""
