"""Concrete collaborators plugged into the core resolver."""

from __future__ import annotations

from .storage import LocalStorageConnector


__all__ = ["LocalStorageConnector"]
