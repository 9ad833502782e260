# runtime.py
from __future__ import annotations

import logging
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "numcore"


def _settings_dict(source: Any) -> dict[str, Any]:
    """Plain dict from a Settings object, a mapping, a dataclass or UPPERCASE attributes."""
    if hasattr(source, "as_dict") and callable(source.as_dict):
        return dict(source.as_dict())
    if isinstance(source, dict):
        return dict(source)
    if is_dataclass(source) and not isinstance(source, type):
        return asdict(source)
    # simple objects / modules
    return {k: getattr(source, k) for k in dir(source) if k.isupper()}


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # raises the numcore logger to DEBUG

    def apply(self, source: Any) -> None:
        self.profile_name = str(
            getattr(source, "name", None) or getattr(source, "_source", None) or "default"
        )
        self.settings = _settings_dict(source)

        dbg = self.get("BEHAVIOUR.DEBUG", False)
        self.debug = dbg if isinstance(dbg, bool) else False
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if self.debug else logging.NOTSET)
        logger.debug("applied profile %r (%d sections)", self.profile_name, len(self.settings))

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup such as 'FACTORING.USE_ECM'; default when any part is missing."""
        if not key:
            return default
        cur: Any = self.settings
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("numcore_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)
