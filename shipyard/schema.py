"""Persistent configuration model and its plain-data form."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

CURRENT_SCHEMA_VERSION = 5

DEFAULT_VERSIONS_TO_SHOW = 10
MIN_VERSIONS_TO_SHOW = 1

_U32_MAX = 2**32 - 1


class ThemePreference(Enum):
    """Colour theme chosen by the user."""

    DARK = "dark"
    LIGHT = "light"
    SYSTEM = "system"


@dataclass(frozen=True)
class LastLaunched:
    """The game and version of the last successful launch."""

    game_slug: str
    tag: str

    def to_dict(self) -> dict[str, Any]:
        return {"game_slug": self.game_slug, "tag": self.tag}

    @classmethod
    def from_dict(cls, data: Any) -> LastLaunched:
        mapping = _mapping(data, "last_launched")
        return cls(
            game_slug=_required_str(mapping, "game_slug"),
            tag=_required_str(mapping, "tag"),
        )


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Most recently observed rate-limit state, kept across restarts."""

    remaining: int | None = None
    limit: int | None = None
    reset_at_unix: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "remaining": self.remaining,
            "limit": self.limit,
            "reset_at_unix": self.reset_at_unix,
        }

    @classmethod
    def from_dict(cls, data: Any) -> RateLimitSnapshot:
        mapping = _mapping(data, "rate_limit_snapshot")
        remaining = mapping.get("remaining")
        limit = mapping.get("limit")
        reset = mapping.get("reset_at_unix")
        return cls(
            remaining=None if remaining is None else _u32(remaining, "remaining"),
            limit=None if limit is None else _u32(limit, "limit"),
            reset_at_unix=None if reset is None else _int(reset, "reset_at_unix"),
        )


@dataclass
class Config:
    """User configuration as stored on disk."""

    schema_version: int = CURRENT_SCHEMA_VERSION
    library_root: Path | None = None
    install_overrides: dict[str, Path] = field(default_factory=dict)
    # slot_assignments[game_slug][slot_id] = ROM filename inside the ROM library.
    slot_assignments: dict[str, dict[str, str]] = field(default_factory=dict)
    versions_to_show: int = DEFAULT_VERSIONS_TO_SHOW
    last_launched: LastLaunched | None = None
    rate_limit_snapshot: RateLimitSnapshot | None = None
    theme: ThemePreference = ThemePreference.DARK

    def assignment_for(self, game_slug: str, slot_id: str) -> str | None:
        """Return the ROM filename assigned to a game's slot, if any."""
        return self.slot_assignments.get(game_slug, {}).get(slot_id)

    def set_assignment(self, game_slug: str, slot_id: str, filename: str | None) -> None:
        """Assign a ROM filename to a slot, or clear the slot when filename is None."""
        if filename is not None:
            self.slot_assignments.setdefault(game_slug, {})[slot_id] = filename
            return
        slots = self.slot_assignments.get(game_slug)
        if slots is None:
            return
        slots.pop(slot_id, None)
        if not slots:
            del self.slot_assignments[game_slug]

    def clear_assignments_referencing(self, filename: str) -> int:
        """Drop every assignment to filename across all games; return how many."""
        cleared = 0
        for game in list(self.slot_assignments):
            slots = self.slot_assignments[game]
            kept = {slot: name for slot, name in slots.items() if name != filename}
            cleared += len(slots) - len(kept)
            if kept:
                self.slot_assignments[game] = kept
            else:
                del self.slot_assignments[game]
        return cleared

    def to_dict(self) -> dict[str, Any]:
        """Plain data suitable for YAML output."""
        return {
            "schema_version": self.schema_version,
            "library_root": None if self.library_root is None else str(self.library_root),
            "install_overrides": {k: str(v) for k, v in self.install_overrides.items()},
            "slot_assignments": {
                game: dict(slots) for game, slots in self.slot_assignments.items()
            },
            "versions_to_show": self.versions_to_show,
            "last_launched": None if self.last_launched is None else self.last_launched.to_dict(),
            "rate_limit_snapshot": (
                None if self.rate_limit_snapshot is None else self.rate_limit_snapshot.to_dict()
            ),
            "theme": self.theme.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a Config from plain data; raise ValueError when it does not fit."""
        mapping = _mapping(data, "config")
        if "schema_version" not in mapping:
            raise ValueError("missing field `schema_version`")
        schema_version = _u32(mapping["schema_version"], "schema_version")

        root = mapping.get("library_root")
        library_root = None if root is None else Path(_str(root, "library_root"))

        overrides = _mapping(mapping.get("install_overrides", {}), "install_overrides")
        install_overrides = {
            _str(k, "install_overrides key"): Path(_str(v, "install_overrides value"))
            for k, v in overrides.items()
        }

        assignments = _mapping(mapping.get("slot_assignments", {}), "slot_assignments")
        slot_assignments = {
            _str(game, "slot_assignments key"): {
                _str(slot, "slot id"): _str(name, "rom filename")
                for slot, name in _mapping(slots, "slot_assignments entry").items()
            }
            for game, slots in assignments.items()
        }

        versions_to_show = _u32(
            mapping.get("versions_to_show", DEFAULT_VERSIONS_TO_SHOW), "versions_to_show"
        )

        last = mapping.get("last_launched")
        snapshot = mapping.get("rate_limit_snapshot")

        theme_raw = mapping.get("theme", ThemePreference.DARK.value)
        try:
            theme = ThemePreference(_str(theme_raw, "theme"))
        except ValueError as exc:
            raise ValueError(f"unknown theme {theme_raw!r}") from exc

        return cls(
            schema_version=schema_version,
            library_root=library_root,
            install_overrides=install_overrides,
            slot_assignments=slot_assignments,
            versions_to_show=versions_to_show,
            last_launched=None if last is None else LastLaunched.from_dict(last),
            rate_limit_snapshot=(
                None if snapshot is None else RateLimitSnapshot.from_dict(snapshot)
            ),
            theme=theme,
        )


def _mapping(value: Any, name: str) -> Mapping[Any, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name}: expected a mapping")
    return value


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name}: expected a string")
    return value


def _required_str(mapping: Mapping[Any, Any], key: str) -> str:
    if key not in mapping:
        raise ValueError(f"missing field `{key}`")
    return _str(mapping[key], key)


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name}: expected an integer")
    return value


def _u32(value: Any, name: str) -> int:
    number = _int(value, name)
    if not 0 <= number <= _U32_MAX:
        raise ValueError(f"{name}: {number} is out of range")
    return number