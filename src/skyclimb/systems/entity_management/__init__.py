"""
Entity management system exports.

Provides the platform registry (generation, recycling and dedup).
"""

from skyclimb.systems.entity_management.platform_registry import PlatformRegistry

__all__ = [
    'PlatformRegistry',
]
