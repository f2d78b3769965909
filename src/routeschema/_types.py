"""Shared type definitions."""

from __future__ import annotations

from typing import Any

RawParams = dict[str, str]
Issue = dict[str, Any]
