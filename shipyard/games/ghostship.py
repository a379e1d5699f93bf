"""Ghostship, the Super Mario 64 port."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from shipyard.games.base import CachedAssetSpec, Game, LaunchCommand, SlotSpec

SLOT_SM64 = "sm64"

_BINARIES = {
    "Mac": "Ghostship.app/Contents/MacOS/Ghostship",
    "Linux": "ghostship.appimage",
}


class Ghostship(Game):
    """Ghostship."""

    slug = "ghostship"
    repo_slug = "HarbourMasters/Ghostship"
    display_name = "Ghostship"
    rom_group_name = "Super Mario 64"
    slots = (
        SlotSpec(id=SLOT_SM64, display_name="Super Mario 64", symlink_filename="sm64.z64"),
    )
    cached_assets = (CachedAssetSpec(slot_id=SLOT_SM64, filenames=("sm64.o2r",)),)
    requires_rom_copy = False

    def launch_command(self, install_dir: Path | str, platform: Any) -> LaunchCommand:
        install_dir = Path(install_dir)
        binary = _BINARIES.get(self._keyword(platform), "ghostship")
        return LaunchCommand(program=install_dir / binary, cwd=install_dir)