from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


def _env_extra_mode(default: str = "ignore") -> str:
    """
    Determine the extra-mode from environment vars.

    GHOSTMD_EXTRA: allow|forbid|ignore
    Convenience booleans: "true/1/on" -> forbid (strict), "false/0/off" -> allow
    """
    raw = (os.getenv("GHOSTMD_EXTRA") or default).strip().lower()

    if raw in {"allow", "forbid", "ignore"}:
        return raw

    if raw in {"1", "true", "yes", "on", "strict"}:
        return "forbid"
    if raw in {"0", "false", "no", "off", "lenient"}:
        return "allow"

    return default


_EXTRA = _env_extra_mode()


class GhostMdModel(BaseModel):
    """
    Project-wide base model.

    Ghost attaches plenty of editor-only keys to card payloads, so the default
    is extra='ignore'. Switch at runtime by setting an env var before import:
      export GHOSTMD_EXTRA=forbid   # or allow/ignore
    """

    model_config = ConfigDict(
        extra=_EXTRA,  # 'forbid' | 'allow' | 'ignore'
        frozen=True,
    )


__all__ = ["GhostMdModel", "_env_extra_mode"]
