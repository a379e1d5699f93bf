"""SpaghettiKart, the Mario Kart 64 port."""

from __future__ import annotations

import platform as _host
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from shipyard.games.base import _A, CachedAssetSpec, Game, LaunchCommand, SlotSpec

SLOT_MK64 = "mk64"

_BINARIES = {
    "Linux": "spaghetti.appimage",
    # The Mac release is a flat zip: binary and assets at the root, no bundle.
    "Mac": "Spaghettify",
}

_MAC_NEEDLES = {
    "aarch64": "mac-arm64",
    "arm64": "mac-arm64",
    "x86_64": "mac-intel",
    "amd64": "mac-intel",
}


class SpaghettiKart(Game):
    """SpaghettiKart."""

    slug = "spaghettikart"
    repo_slug = "HarbourMasters/SpaghettiKart"
    display_name = "SpaghettiKart"
    rom_group_name = "Mario Kart 64"
    slots = (
        SlotSpec(id=SLOT_MK64, display_name="Mario Kart 64", symlink_filename="mk64.z64"),
    )
    cached_assets = (CachedAssetSpec(slot_id=SLOT_MK64, filenames=("mk64.o2r",)),)
    requires_rom_copy = False

    def pick_asset(self, assets: Iterable[_A], platform: Any) -> _A | None:
        """Release asset for this platform; Mac builds are split by CPU architecture."""
        keyword = self._keyword(platform)
        if keyword == "Linux":
            needle = "linux"
        elif keyword == "Mac":
            needle = _MAC_NEEDLES.get(_host.machine().lower())
            if needle is None:
                return None
        else:
            return None
        return next((a for a in assets if needle in a.name.lower()), None)

    def launch_command(self, install_dir: Path | str, platform: Any) -> LaunchCommand:
        install_dir = Path(install_dir)
        binary = _BINARIES.get(self._keyword(platform), "spaghetti")
        return LaunchCommand(program=install_dir / binary, cwd=install_dir)