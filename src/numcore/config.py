# config.py
from __future__ import annotations

import logging
import tomllib as toml
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from numcore.errors import ConfigError
from numcore.workspace import ensure_workspace_seeded, workspace_dir

logger = logging.getLogger(__name__)

# Recognised keys and their accepted types. Unknown sections pass through
# untouched so profiles can carry notes for other tools.
KNOWN_KEYS: dict[str, tuple[type, ...]] = {
    "BEHAVIOUR.DEBUG": (bool,),
    "PRIMALITY.METHOD": (str,),
    "PRIMALITY.MR_ROUNDS": (int,),
    "FACTORING.USE_RHO": (bool,),
    "FACTORING.USE_PM1": (bool,),
    "FACTORING.USE_ECM": (bool,),
    "FORMATTING.REPR_ABBR_DIGITS": (int,),
}
PRIMALITY_METHODS = ("bpsw", "miller-rabin")


@dataclass
class Settings:
    """
    A loaded profile: the TOML tables minus [PROFILE], plus its metadata.

      name         [PROFILE].name, else the file stem
      description  [PROFILE].description collapsed to one line
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Locations ---------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


# --- Reading and checking ------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        msg = getattr(e, "msg", None) or str(e)
        lineno, colno = getattr(e, "lineno", None), getattr(e, "colno", None)
        loc = f" (at line {lineno}, column {colno})" if lineno is not None else ""
        raise ConfigError(f"{path.name}: {msg}{loc}") from None


def _lookup(data: dict[str, Any], dotted: str) -> Any:
    cur: Any = data
    for part in dotted.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _check_values(data: dict[str, Any], origin: str) -> None:
    for key, types in KNOWN_KEYS.items():
        value = _lookup(data, key)
        if value is None:
            continue
        # bool is an int subclass; keep integer keys strictly integral
        if not isinstance(value, types) or (bool not in types and isinstance(value, bool)):
            want = "/".join(t.__name__ for t in types)
            raise ConfigError(f"{origin}: {key} must be {want}, got {value!r}")

    method = _lookup(data, "PRIMALITY.METHOD")
    if method is not None and method.strip().lower() not in PRIMALITY_METHODS:
        raise ConfigError(f"{origin}: PRIMALITY.METHOD must be one of {PRIMALITY_METHODS}, got {method!r}")
    rounds = _lookup(data, "PRIMALITY.MR_ROUNDS")
    if rounds is not None and rounds < 1:
        raise ConfigError(f"{origin}: PRIMALITY.MR_ROUNDS must be >= 1, got {rounds}")


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """Separate the [PROFILE] table: (settings, name, description)."""
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}
    name = str(meta.get("name") or fallback_name)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"
    return data, name, description


# --- Public API ----------------------------------------------------------------

def list_all_profiles() -> list[str]:
    """Profile names available in the workspace, sorted."""
    ensure_workspace_seeded()
    pdir = _profiles_dir()
    if not pdir.exists():
        return []
    return sorted(p.stem for p in pdir.glob("*.toml"))


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | None = None) -> Settings:
    """
    Read profile `name` from the workspace. Without a name the profile
    recorded by write_current_profile() is used, else 'default'.

    Raises FileNotFoundError for a missing profile and ConfigError for
    malformed TOML or a recognised key with the wrong type.
    """
    ensure_workspace_seeded()
    name = name or read_current_profile() or "default"
    path = _profile_path(name)
    if not path.exists():
        raise FileNotFoundError(f"Profile '{name}' not found at {path}")

    data, resolved, description = _split_profile_data(_load_toml(path), path.stem)
    _check_values(data, path.name)
    logger.debug("loaded profile %s from %s", resolved, path)
    return Settings(data=data, name=resolved, description=description, _source=path)


# --- Current profile pointer ---------------------------------------------------

def _current_profile_path() -> Path:
    p = _profiles_dir()
    p.mkdir(parents=True, exist_ok=True)
    return p / ".current"


def read_current_profile() -> str | None:
    try:
        s = _current_profile_path().read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    return s.removesuffix(".toml") or None


def write_current_profile(name: str) -> None:
    _current_profile_path().write_text((name or "").strip().removesuffix(".toml"), encoding="utf-8")
