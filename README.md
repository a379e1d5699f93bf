# shipyard

A library for managing installs of N64 PC ports. It keeps a YAML
configuration of library locations, ROM slot assignments and UI preferences,
and describes each supported game: its ROM slots, which release asset to pick
for a platform, where its cached asset archives live and which program to start.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`shipyard.config` loads and saves the configuration file. Its default
location is `config.yaml` in the user's configuration directory, as returned
by `config_path()`.

```python
from shipyard import config

loaded = config.load()          # or config.load_from(path)
cfg = loaded.config
if loaded.diagnostic is not None:
    print("config problem:", loaded.diagnostic)

cfg.set_assignment("soh", "oot", "oot.z64")
config.save(cfg)                # or config.save_to(cfg, path)
```

`load_from` returns a `LoadedConfig` with `config`, `path`, `diagnostic` and
`pending_migration`:

- A missing file gives the default configuration.
- A file that is not valid YAML, or whose contents do not fit the schema, is
  copied to `config.yaml.bak.<unix timestamp>` and the default configuration
  is returned with a `ConfigParseError` diagnostic.
- A file with a newer `schema_version` than this package knows is backed up
  the same way and reported with a `SchemaVersionMismatch` diagnostic; it is
  never overwritten by loading.
- A file with an older schema is migrated in memory by `migrate(from_version, raw)`.
  The library root, install overrides and any slot assignments are carried over;
  ROM paths from the old `roms.oot` / `roms.oot_mq` keys come back as
  `RomImportRequest` entries (for the `soh` game's `oot` and `oot-mq` slots)
  in a `PendingMigration`. The file on disk is left untouched.
- Other read or write failures raise `ConfigError`.

`save_to` writes to a temporary `.yaml.tmp` file, syncs it and renames it over
the target, creating the parent directory if needed.

`RomMigrationSkipped` and `RomMigrationFailed` are diagnostic types for a
caller that performs the pending ROM imports; the loader itself never
produces them.

`shipyard.schema.Config` holds the settings: `schema_version`, `library_root`,
`install_overrides`, `slot_assignments`, `versions_to_show` (default 10),
`last_launched` (a `LastLaunched`), `rate_limit_snapshot` (a
`RateLimitSnapshot`) and `theme` (a `ThemePreference`: dark, light or system).

- `assignment_for(game_slug, slot_id)` returns the ROM filename in a slot, or `None`.
- `set_assignment(game_slug, slot_id, filename)` assigns a ROM, or clears the
  slot when `filename` is `None`; a game left with no slots is dropped.
- `clear_assignments_referencing(filename)` removes a ROM from every slot of
  every game and returns how many assignments were cleared.
- `to_dict()` and `Config.from_dict(data)` convert to and from the YAML
  mapping; `from_dict` raises `ValueError` on data that does not fit.

## Games

`shipyard.games.registry.registry()` lists the supported games in a fixed
order and `game_for_slug(slug)` finds one by its slug, or returns `None`:

| Slug            | Game               | ROM slots                        |
|-----------------|--------------------|----------------------------------|
| `soh`           | Ship of Harkinian  | `oot`, `oot-mq`                  |
| `2ship`         | 2Ship2Harkinian    | `mm`                             |
| `ghostship`     | Ghostship          | `sm64`                           |
| `starship`      | Starship           | `sf64-us`, `sf64-eu`, `sf64-jp`  |
| `spaghettikart` | SpaghettiKart      | `mk64`                           |

Every game is a `shipyard.games.base.Game` with:

- `slug`, `repo_slug`, `display_name`, `sort_name` and `rom_group_name`;
- `slots`, a tuple of `SlotSpec` (`id`, `display_name`, `symlink_filename`);
- `cached_assets`, a tuple of `CachedAssetSpec` (`slot_id` and an ordered
  tuple of `filenames`);
- `requires_rom_copy`, false for every game here;
- `data_dir(install_dir, platform)`, the install directory itself;
- `pick_asset(assets, platform)`, the first asset whose `name` contains the
  platform keyword, case-insensitively, or `None`;
- `launch_command(install_dir, platform)`, a `LaunchCommand` with the
  `program` path, the working directory `cwd` (the install directory) and `args`.

The `platform` argument is any object with an `asset_keyword` attribute such as
`"Mac"` or `"Linux"`; assets are any objects with a `name`. Starship only picks
Linux assets. SpaghettiKart picks `linux` assets on Linux and, on Mac, the
`mac-arm64` or `mac-intel` asset for the host's CPU.

```python
from types import SimpleNamespace
from shipyard.games.registry import game_for_slug

linux = SimpleNamespace(asset_keyword="Linux")
game = game_for_slug("soh")
for slot in game.slots:
    print(slot.id, slot.display_name, slot.symlink_filename)
print(game.launch_command("/games/soh/9.0.0", linux).program)
```

## What it does not do

The package holds configuration and game descriptions only. It does not talk
to a release server, download or extract archives, keep a ROM library, create
ROM links in install directories, start the games or provide any command-line
or graphical interface. `launch_command` describes what to run; running it is
left to the caller.