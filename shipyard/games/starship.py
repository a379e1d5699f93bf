"""Starship, the Star Fox 64 port."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from shipyard.games.base import _A, CachedAssetSpec, Game, LaunchCommand, SlotSpec

SLOT_SF64_US = "sf64-us"
SLOT_SF64_EU = "sf64-eu"
SLOT_SF64_JP = "sf64-jp"


class Starship(Game):
    """Starship.

    A US ROM is required; EU and JP ROMs are optional voice replacements.
    All three are exposed as independent slots with distinct link names.
    """

    slug = "starship"
    repo_slug = "HarbourMasters/Starship"
    display_name = "Starship"
    rom_group_name = "Star Fox 64"
    slots = (
        SlotSpec(id=SLOT_SF64_US, display_name="Star Fox 64 (US)", symlink_filename="sf64-us.z64"),
        SlotSpec(
            id=SLOT_SF64_EU, display_name="Star Fox 64 (EU voice)", symlink_filename="sf64-eu.z64"
        ),
        SlotSpec(
            id=SLOT_SF64_JP, display_name="Star Fox 64 (JP voice)", symlink_filename="sf64-jp.z64"
        ),
    )
    # Only the US ROM has a known cached-asset file.
    cached_assets = (CachedAssetSpec(slot_id=SLOT_SF64_US, filenames=("sf64.o2r",)),)
    requires_rom_copy = False

    def pick_asset(self, assets: Iterable[_A], platform: Any) -> _A | None:
        """Linux release asset; every other platform is unsupported."""
        if self._keyword(platform) != "Linux":
            return None
        return next((a for a in assets if "linux" in a.name.lower()), None)

    def launch_command(self, install_dir: Path | str, platform: Any) -> LaunchCommand:
        install_dir = Path(install_dir)
        binary = "starship.appimage" if self._keyword(platform) == "Linux" else "starship"
        return LaunchCommand(program=install_dir / binary, cwd=install_dir)