"""Common description of a supported game port."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Protocol, TypeVar


class _Named(Protocol):
    name: str


_A = TypeVar("_A", bound=_Named)


@dataclass(frozen=True)
class SlotSpec:
    """A ROM slot a game accepts.

    ``id`` is unique within its game. ``symlink_filename`` is the name of the
    link created in each install directory that points at the assigned ROM.
    """

    id: str
    display_name: str
    symlink_filename: str


@dataclass(frozen=True)
class CachedAssetSpec:
    """Cached-asset files generated from a slot's ROM.

    ``filenames`` is ordered: scanning picks the first one that exists, which
    lets a game accept a current format alongside a legacy one.
    """

    slot_id: str
    filenames: tuple[str, ...]


@dataclass(frozen=True)
class LaunchCommand:
    """The program to start for an installed game, and where to start it."""

    program: Path
    cwd: Path
    args: tuple[str, ...] = field(default_factory=tuple)


class Game(ABC):
    """A game port that can be installed, wired to ROMs and launched."""

    slug: ClassVar[str]
    repo_slug: ClassVar[str]
    display_name: ClassVar[str]
    slots: ClassVar[tuple[SlotSpec, ...]]
    cached_assets: ClassVar[tuple[CachedAssetSpec, ...]]
    # True when the port refuses symlinked ROMs and needs a real file copy.
    requires_rom_copy: ClassVar[bool] = False

    @property
    def sort_name(self) -> str:
        """Key used to order games in the picker."""
        return self.display_name

    @property
    def rom_group_name(self) -> str:
        """Name of the original game whose ROMs the slots accept."""
        return self.display_name

    def data_dir(self, install_dir: Path | str, platform: Any) -> Path:
        """Directory where the game writes its cached ROM archives."""
        return Path(install_dir)

    def pick_asset(self, assets: Iterable[_A], platform: Any) -> _A | None:
        """First release asset whose name mentions the platform keyword."""
        keyword = self._keyword(platform).lower()
        return next((a for a in assets if keyword in a.name.lower()), None)

    @abstractmethod
    def launch_command(self, install_dir: Path | str, platform: Any) -> LaunchCommand:
        """Command that starts the game installed in install_dir."""

    @staticmethod
    def _keyword(platform: Any) -> str:
        return str(platform.asset_keyword)