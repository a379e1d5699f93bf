from dataclasses import dataclass
from pathlib import Path

import pytest

from shipyard.games.base import CachedAssetSpec, Game, LaunchCommand, SlotSpec


@dataclass
class Platform:
    asset_keyword: str


@dataclass
class Asset:
    name: str
    browser_download_url: str = ""
    size: int = 0


class DemoGame(Game):
    slug = "demo"
    repo_slug = "demo/repo"
    display_name = "Demo"
    slots = (SlotSpec(id="a", display_name="A", symlink_filename="a.z64"),)
    cached_assets = (CachedAssetSpec(slot_id="a", filenames=("a.o2r", "a.otr")),)

    def launch_command(self, install_dir, platform):
        return LaunchCommand(program=Path(install_dir) / "demo", cwd=Path(install_dir))


class NamedGame(DemoGame):
    sort_name = "Zeta"
    rom_group_name = "Original"


def test_game_without_launch_command_cannot_be_created():
    class Incomplete(Game):
        slug = "x"

    with pytest.raises(TypeError):
        Game()
    with pytest.raises(TypeError):
        Incomplete()


def test_names_default_to_display_name():
    game = DemoGame()
    assert game.sort_name == "Demo"
    assert game.rom_group_name == "Demo"
    assert game.slots == (SlotSpec(id="a", display_name="A", symlink_filename="a.z64"),)


def test_names_can_be_overridden():
    game = NamedGame()
    assert game.sort_name == "Zeta"
    assert game.rom_group_name == "Original"
    assert game.display_name == "Demo"
    assert game.cached_assets == (
        CachedAssetSpec(slot_id="a", filenames=("a.o2r", "a.otr")),
    )


def test_requires_rom_copy_defaults_to_false():
    game = DemoGame()
    assert game.requires_rom_copy is False
    assert Game.data_dir(game, "/x", Platform("Linux")) == Path("/x")


def test_data_dir_is_install_dir():
    install = Path("/some/install")
    game = DemoGame()
    assert Game.data_dir(game, install, Platform("Mac")) == install
    assert Game.data_dir(game, "/some/install", Platform("Linux")) == install


def test_pick_asset_matches_keyword_case_insensitively():
    assets = [Asset("thing-windows.zip"), Asset("thing-LINUX.zip")]
    picked = Game.pick_asset(DemoGame(), assets, Platform("Linux"))
    assert picked is assets[1]


def test_pick_asset_returns_first_match():
    assets = [Asset("x-mac-one.zip"), Asset("x-mac-two.zip")]
    assert Game.pick_asset(DemoGame(), assets, Platform("Mac")) is assets[0]


def test_pick_asset_none_without_match():
    game = DemoGame()
    assert Game.pick_asset(game, [Asset("x-windows.zip")], Platform("Mac")) is None
    assert Game.pick_asset(game, [], Platform("Mac")) is None


def test_launch_command_from_subclass():
    cmd = DemoGame().launch_command("/opt/demo", Platform("Linux"))
    assert cmd == LaunchCommand(program=Path("/opt/demo/demo"), cwd=Path("/opt/demo"))
    assert cmd.args == ()


def test_specs_are_immutable():
    spec = SlotSpec(id="a", display_name="A", symlink_filename="a.z64")
    with pytest.raises(AttributeError):
        spec.id = "b"
    assert spec.id == "a"
    cached = CachedAssetSpec(slot_id="a", filenames=("a.o2r",))
    with pytest.raises(AttributeError):
        cached.slot_id = "b"
    assert cached.slot_id == "a"