"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings. Every helper
takes the connection explicitly; none of them commits.
"""
from __future__ import annotations
