"""
User component registry.

Parses submitted component code, guards built-in names, and keeps persisted
settings, the active component list and its name index in step.
"""

from componenthost.core.components.registry import ComponentRegistry

__all__ = ["ComponentRegistry"]
