from __future__ import annotations

"""
Redaction helpers for component audit payloads.

Component code is untrusted user input and may be large; audit payloads carry
only allowlisted lifecycle fields and never the submitted source.
"""

from typing import Any, Dict


def redact_component_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep only safe, non-sensitive fields.
    """
    p = payload or {}
    allow = {
        "name",
        "display_name",
        "version",
        "enabled",
        "active",
        "action",
        "reason",
        "styles_removed",
        "styles_failed",
    }
    out: Dict[str, Any] = {}
    for k in allow:
        if k in p:
            out[k] = p.get(k)
    return out
