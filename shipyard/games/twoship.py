"""2Ship2Harkinian, the Majora's Mask port."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from shipyard.games.base import CachedAssetSpec, Game, LaunchCommand, SlotSpec

SLOT_MM = "mm"

_BINARIES = {
    "Mac": "2s2h.app/Contents/MacOS/2s2h",
    "Linux": "2ship.appimage",
}


class TwoShip(Game):
    """2Ship2Harkinian."""

    slug = "2ship"
    repo_slug = "HarbourMasters/2ship2harkinian"
    display_name = "2Ship2Harkinian"
    # Sorts right after "Ship of Harkinian"; never shown to the user.
    sort_name = "Ship of Harkinian 2"
    rom_group_name = "Majora's Mask"
    slots = (
        SlotSpec(id=SLOT_MM, display_name="Majora's Mask", symlink_filename="majoras_mask.z64"),
    )
    cached_assets = (CachedAssetSpec(slot_id=SLOT_MM, filenames=("mm.o2r",)),)

    def launch_command(self, install_dir: Path | str, platform: Any) -> LaunchCommand:
        install_dir = Path(install_dir)
        binary = _BINARIES.get(self._keyword(platform), "2s2h")
        return LaunchCommand(program=install_dir / binary, cwd=install_dir)