"""Target platform version requirements.

A platform is a family (macOS, iOS, ...) plus a minimum version. Several
sources contribute requirements to one module (configuration, the module
itself, its type), so lists are merged with ``Platform.deduplicate`` which
keeps the highest version per family and always emits families in the same
order regardless of input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class PlatformFamily(Enum):
    """Platform families, declared in output order."""

    MACOS = "macOS"
    IOS = "iOS"
    TVOS = "tvOS"
    WATCHOS = "watchOS"
    VISIONOS = "visionOS"
    LINUX = "linux"


FAMILY_ORDER: tuple[PlatformFamily, ...] = tuple(PlatformFamily)


@dataclass(frozen=True)
class Platform:
    """A minimum supported version for one platform family.

    Only macOS carries a minor version (``macOS 10.15``). Linux carries no
    version at all.
    """

    family: PlatformFamily
    major: Optional[int] = None
    minor: Optional[int] = None

    def __post_init__(self) -> None:
        if self.family is PlatformFamily.LINUX:
            if self.major is not None or self.minor is not None:
                raise ValueError("linux does not take a version")
            return
        if self.major is None:
            raise ValueError(f"{self.family.value} requires a major version")
        if self.minor is not None and self.family is not PlatformFamily.MACOS:
            raise ValueError(f"{self.family.value} does not take a minor version")

    # ── Constructors ─────────────────────────────────────────────────

    @classmethod
    def macos(cls, major: int, minor: Optional[int] = None) -> Platform:
        return cls(PlatformFamily.MACOS, major, minor)

    @classmethod
    def ios(cls, major: int) -> Platform:
        return cls(PlatformFamily.IOS, major)

    @classmethod
    def tvos(cls, major: int) -> Platform:
        return cls(PlatformFamily.TVOS, major)

    @classmethod
    def watchos(cls, major: int) -> Platform:
        return cls(PlatformFamily.WATCHOS, major)

    @classmethod
    def visionos(cls, major: int) -> Platform:
        return cls(PlatformFamily.VISIONOS, major)

    @classmethod
    def linux(cls) -> Platform:
        return cls(PlatformFamily.LINUX)

    @classmethod
    def parse(cls, text: str) -> Platform:
        """Parse ``"macOS 10.15"``, ``"iOS 17"`` or ``"linux"``."""
        name, _, version = text.strip().partition(" ")
        family = _FAMILY_BY_NAME.get(name.lower())
        if family is None:
            raise ValueError(f"unknown platform: {name!r}")
        if family is PlatformFamily.LINUX:
            return cls.linux()
        if not version:
            raise ValueError(f"missing version for platform: {name!r}")
        major_text, _, minor_text = version.strip().partition(".")
        major = int(major_text)
        minor = int(minor_text) if minor_text else None
        return cls(family, major, minor)

    # ── Rendering ────────────────────────────────────────────────────

    def render(self) -> str:
        """Render as a Package.swift platform specifier, e.g. ``.macOS(.v10_15)``."""
        if self.family is PlatformFamily.LINUX:
            return ".linux"
        if self.minor is not None:
            return f".{self.family.value}(.v{self.major}_{self.minor})"
        return f".{self.family.value}(.v{self.major})"

    def __str__(self) -> str:
        if self.family is PlatformFamily.LINUX:
            return "linux"
        if self.minor is not None:
            return f"{self.family.value} {self.major}.{self.minor}"
        return f"{self.family.value} {self.major}"

    # ── Deduplication ────────────────────────────────────────────────

    def _supersedes(self, existing: Platform) -> bool:
        """Whether this requirement beats ``existing`` for the same family.

        Major versions are compared first. On equal majors an explicit minor
        beats an absent one, and two explicit minors keep the higher.
        """
        if self.family is PlatformFamily.LINUX:
            return False
        assert self.major is not None and existing.major is not None
        if self.major != existing.major:
            return self.major > existing.major
        if self.minor is None:
            return False
        if existing.minor is None:
            return True
        return self.minor > existing.minor

    @staticmethod
    def deduplicate(platforms: Iterable[Platform]) -> list[Platform]:
        """Keep the highest version per family, in ``FAMILY_ORDER``."""
        best: dict[PlatformFamily, Platform] = {}
        for platform in platforms:
            existing = best.get(platform.family)
            if existing is None or platform._supersedes(existing):
                best[platform.family] = platform

        return [best[family] for family in FAMILY_ORDER if family in best]


_FAMILY_BY_NAME = {family.value.lower(): family for family in PlatformFamily}
