"""Data models for smartrelease."""

from smartrelease.models.release import Release, Asset, ReleaseSource
from smartrelease.models.version import VersionComponents

__all__ = ["Release", "Asset", "ReleaseSource", "VersionComponents"]
