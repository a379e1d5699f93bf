"""Ship of Harkinian, the Ocarina of Time port."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from shipyard.games.base import CachedAssetSpec, Game, LaunchCommand, SlotSpec

SLOT_OOT = "oot"
SLOT_OOT_MQ = "oot-mq"

_BINARIES = {
    "Mac": "soh.app/Contents/MacOS/soh",
    "Linux": "soh.appimage",
}


class Soh(Game):
    """Ship of Harkinian."""

    slug = "soh"
    repo_slug = "HarbourMasters/Shipwright"
    display_name = "Ship of Harkinian"
    rom_group_name = "Ocarina of Time"
    slots = (
        SlotSpec(id=SLOT_OOT, display_name="Ocarina of Time", symlink_filename="oot.z64"),
        SlotSpec(
            id=SLOT_OOT_MQ,
            display_name="Ocarina of Time - Master Quest",
            symlink_filename="oot-mq.z64",
        ),
    )
    cached_assets = (
        CachedAssetSpec(slot_id=SLOT_OOT, filenames=("oot.o2r", "oot.otr")),
        CachedAssetSpec(slot_id=SLOT_OOT_MQ, filenames=("oot-mq.o2r", "oot-mq.otr")),
    )

    def launch_command(self, install_dir: Path | str, platform: Any) -> LaunchCommand:
        install_dir = Path(install_dir)
        binary = _BINARIES.get(self._keyword(platform), "soh")
        return LaunchCommand(program=install_dir / binary, cwd=install_dir)