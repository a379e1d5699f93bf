import time
from pathlib import Path

import pytest

from shipyard.config import (
    ConfigError,
    ConfigParseError,
    RomImportRequest,
    SchemaVersionMismatch,
    load_from,
    migrate,
    save_to,
)
from shipyard.schema import CURRENT_SCHEMA_VERSION, DEFAULT_VERSIONS_TO_SHOW, Config


def test_round_trip_default(tmp_path):
    path = tmp_path / "config.yaml"
    cfg = Config()
    save_to(cfg, path)
    loaded = load_from(path)
    assert loaded.config == cfg
    assert loaded.diagnostic is None
    assert loaded.pending_migration is None


def test_round_trip_populated(tmp_path):
    path = tmp_path / "config.yaml"
    cfg = Config(
        library_root=Path("/some/library"),
        install_overrides={"9.2.3": Path("/custom/9.2.3")},
    )
    cfg.set_assignment("soh", "oot", "oot.z64")
    save_to(cfg, path)
    loaded = load_from(path)
    assert loaded.config == cfg
    assert loaded.pending_migration is None


def test_save_leaves_no_temp_file(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    save_to(Config(), path)
    assert sorted(p.name for p in path.parent.iterdir()) == ["config.yaml"]


def test_missing_file_returns_default(tmp_path):
    loaded = load_from(tmp_path / "nope.yaml")
    assert loaded.config == Config()
    assert loaded.diagnostic is None


def test_malformed_file_is_backed_up_and_defaulted(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("::: not yaml ::: {[}")
    loaded = load_from(path)
    assert loaded.config == Config()
    assert isinstance(loaded.diagnostic, ConfigParseError)
    assert loaded.diagnostic.backup.read_text() == "::: not yaml ::: {[}"


def test_newer_schema_version_is_backed_up_and_defaulted(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("schema_version: 999\nlibrary_root: /foo\n")
    loaded = load_from(path)
    assert loaded.config == Config()
    assert isinstance(loaded.diagnostic, SchemaVersionMismatch)
    assert loaded.diagnostic.found == 999
    assert loaded.diagnostic.backup.exists()


def test_second_backup_does_not_clobber_first(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("garbage 1")
    first = load_from(path)
    time.sleep(1.1)
    path.write_text("garbage 2")
    second = load_from(path)

    assert isinstance(first.diagnostic, ConfigParseError)
    assert isinstance(second.diagnostic, ConfigParseError)
    assert first.diagnostic.backup != second.diagnostic.backup
    assert first.diagnostic.backup.read_text() == "garbage 1"
    assert second.diagnostic.backup.read_text() == "garbage 2"
    backups = [p for p in tmp_path.iterdir() if ".bak." in p.name]
    assert len(backups) == 2


def test_v3_with_rom_paths_produces_pending_migration_no_side_effects(tmp_path):
    path = tmp_path / "config.yaml"
    original = (
        "schema_version: 3\nlibrary_root: /lib\nroms:\n"
        "  oot: /tmp/oot.z64\n  oot_mq: /tmp/mq.z64\n"
    )
    path.write_text(original)

    loaded = load_from(path)
    assert path.read_text() == original
    assert loaded.config.schema_version == CURRENT_SCHEMA_VERSION
    assert loaded.config.library_root == Path("/lib")
    assert loaded.config.slot_assignments == {}

    pending = loaded.pending_migration
    assert pending.from_version == 3
    assert len(pending.rom_imports) == 2
    assert RomImportRequest("soh", "oot", Path("/tmp/oot.z64")) in pending.rom_imports
    assert RomImportRequest("soh", "oot-mq", Path("/tmp/mq.z64")) in pending.rom_imports


def test_v3_without_roms_field_migrates_with_empty_pending(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("schema_version: 3\nlibrary_root: /lib\n")
    loaded = load_from(path)
    assert loaded.config.schema_version == CURRENT_SCHEMA_VERSION
    assert loaded.pending_migration.rom_imports == []


def test_migrated_config_when_saved_loads_clean(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("schema_version: 3\n")
    loaded = load_from(path)
    assert loaded.pending_migration is not None
    save_to(loaded.config, path)
    reloaded = load_from(path)
    assert reloaded.pending_migration is None
    assert reloaded.config.schema_version == CURRENT_SCHEMA_VERSION


def test_v4_migrates_to_v5_with_defaults_for_new_fields(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "schema_version: 4\nlibrary_root: /lib\nslot_assignments:\n  soh:\n    oot: oot.z64\n"
    )
    loaded = load_from(path)
    assert loaded.config.schema_version == CURRENT_SCHEMA_VERSION
    assert loaded.config.library_root == Path("/lib")
    assert loaded.config.assignment_for("soh", "oot") == "oot.z64"
    assert loaded.config.versions_to_show == DEFAULT_VERSIONS_TO_SHOW
    assert loaded.config.last_launched is None
    assert loaded.config.rate_limit_snapshot is None


def test_migrate_carries_install_overrides():
    config, pending = migrate(2, {"install_overrides": {"1.0": "/x/1.0", "bad": 3}})
    assert config.install_overrides == {"1.0": Path("/x/1.0")}
    assert pending.from_version == 2
    assert pending.rom_imports == []


def test_wrongly_typed_field_is_parse_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("schema_version: 5\nversions_to_show: many\n")
    loaded = load_from(path)
    assert loaded.config == Config()
    assert isinstance(loaded.diagnostic, ConfigParseError)


def test_unreadable_path_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_from(tmp_path)