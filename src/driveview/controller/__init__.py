"""Backend API client exports for driveview."""

from __future__ import annotations

from .api_client import DriveApiClient

__all__ = ["DriveApiClient"]
