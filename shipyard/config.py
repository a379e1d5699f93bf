"""Loading, saving and migrating the on-disk configuration."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import platformdirs
import yaml

from shipyard.schema import CURRENT_SCHEMA_VERSION, Config


@dataclass(frozen=True)
class ConfigParseError:
    """The config file could not be parsed; it was backed up and defaults used."""

    backup: Path
    message: str


@dataclass(frozen=True)
class SchemaVersionMismatch:
    """The config file has a newer schema; it was backed up and defaults used."""

    backup: Path
    found: int


@dataclass(frozen=True)
class RomMigrationSkipped:
    """A ROM named by an older config was missing; its assignment was dropped."""

    path: Path


@dataclass(frozen=True)
class RomMigrationFailed:
    """A ROM named by an older config failed to import; its assignment was dropped."""

    path: Path
    message: str


Diagnostic = Union[ConfigParseError, SchemaVersionMismatch, RomMigrationSkipped, RomMigrationFailed]


@dataclass(frozen=True)
class RomImportRequest:
    """A slot assignment that must be imported into the ROM library after migration."""

    game_slug: str
    slot_id: str
    source_path: Path


@dataclass
class PendingMigration:
    """Filesystem work left over from migrating an older config."""

    from_version: int
    rom_imports: list[RomImportRequest] = field(default_factory=list)


class ConfigError(Exception):
    """Reading or writing the configuration failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass
class LoadedConfig:
    """Result of loading a config file."""

    config: Config
    path: Path
    diagnostic: Diagnostic | None = None
    pending_migration: PendingMigration | None = None


def config_path() -> Path:
    """Default location of the config file for the current user."""
    appname = "shipyard" if sys.platform.startswith("linux") else "Shipyard"
    try:
        directory = platformdirs.user_config_dir(appname, appauthor=False, roaming=True)
    except (KeyError, RuntimeError) as exc:
        raise ConfigError("no home directory available") from exc
    return Path(directory) / "config.yaml"


def load() -> LoadedConfig:
    """Load the config from its default location."""
    return load_from(config_path())


def load_from(path: Path | str) -> LoadedConfig:
    """Load a config file, falling back to defaults on missing or unusable files."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return LoadedConfig(config=Config(), path=path)
    except OSError as exc:
        raise ConfigError(f"io error on {path}: {exc}", path) from exc

    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        backup = _backup_malformed(path, raw)
        return LoadedConfig(
            config=Config(),
            path=path,
            diagnostic=ConfigParseError(backup=backup, message=str(exc)),
        )

    found_version = _schema_version_of(value)

    # Never overwrite a config written by a newer release.
    if found_version > CURRENT_SCHEMA_VERSION:
        backup = _backup_malformed(path, raw)
        return LoadedConfig(
            config=Config(),
            path=path,
            diagnostic=SchemaVersionMismatch(backup=backup, found=found_version),
        )

    if found_version < CURRENT_SCHEMA_VERSION:
        config, pending = migrate(found_version, value)
        return LoadedConfig(config=config, path=path, pending_migration=pending)

    try:
        config = Config.from_dict(value)
    except ValueError as exc:
        backup = _backup_malformed(path, raw)
        return LoadedConfig(
            config=Config(),
            path=path,
            diagnostic=ConfigParseError(backup=backup, message=str(exc)),
        )
    return LoadedConfig(config=config, path=path)


def save(config: Config) -> None:
    """Save the config to its default location."""
    save_to(config, config_path())


def save_to(config: Config, path: Path | str) -> None:
    """Atomically write the config to path."""
    path = Path(path)
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"io error on {parent}: {exc}", parent) from exc

    try:
        text = yaml.safe_dump(config.to_dict(), sort_keys=False)
    except yaml.YAMLError as exc:
        raise ConfigError(f"serialize error: {exc}") from exc

    tmp = path.with_suffix(".yaml.tmp") if path.suffix else path.with_name(path.name + ".yaml.tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError as exc:
        raise ConfigError(f"io error on {tmp}: {exc}", tmp) from exc
    try:
        os.replace(tmp, path)
    except OSError as exc:
        raise ConfigError(f"io error on {path}: {exc}", path) from exc


def migrate(from_version: int, raw: Any) -> tuple[Config, PendingMigration]:
    """Build a current-schema Config from older data, without touching the filesystem."""
    config = Config()
    data = raw if isinstance(raw, Mapping) else {}

    root = data.get("library_root")
    if isinstance(root, str):
        config.library_root = Path(root)

    overrides = data.get("install_overrides")
    if isinstance(overrides, Mapping):
        for key, value in overrides.items():
            if isinstance(key, str) and isinstance(value, str):
                config.install_overrides[key] = Path(value)

    rom_imports: list[RomImportRequest] = []

    # Older schemas kept one path per slot under roms.{oot,oot_mq}.
    roms = data.get("roms")
    if isinstance(roms, Mapping):
        for yaml_key, slot_id in (("oot", "oot"), ("oot_mq", "oot-mq")):
            source = roms.get(yaml_key)
            if isinstance(source, str):
                rom_imports.append(
                    RomImportRequest(game_slug="soh", slot_id=slot_id, source_path=Path(source))
                )

    # A partially migrated state may already carry slot assignments.
    assignments = data.get("slot_assignments")
    if isinstance(assignments, Mapping):
        for game_slug, slots in assignments.items():
            if not isinstance(game_slug, str) or not isinstance(slots, Mapping):
                continue
            for slot_id, filename in slots.items():
                if isinstance(slot_id, str) and isinstance(filename, str):
                    config.set_assignment(game_slug, slot_id, filename)

    return config, PendingMigration(from_version=from_version, rom_imports=rom_imports)


def _schema_version_of(value: Any) -> int:
    if isinstance(value, Mapping):
        found = value.get("schema_version")
        if isinstance(found, int) and not isinstance(found, bool) and found >= 0:
            return found
    return CURRENT_SCHEMA_VERSION


def _backup_malformed(path: Path, contents: str) -> Path:
    stamp = int(time.time())
    backup = path.with_name(f"{path.name or 'config'}.bak.{stamp}")
    try:
        backup.write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"io error on {backup}: {exc}", backup) from exc
    return backup