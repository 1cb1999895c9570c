"""Module categories, sub-targets and product kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from .platform import Platform


class TargetKind(Enum):
    """Kinds of sub-target a module can declare."""

    MAIN = "main"
    INTERFACE = "interface"
    VIEWS = "views"
    MACRO_IMPLEMENTATION = "implementation"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ModuleTarget:
    """A compilable sub-unit of a module.

    The four built-in kinds are available as ``ModuleTarget.MAIN``,
    ``ModuleTarget.INTERFACE``, ``ModuleTarget.VIEWS`` and
    ``ModuleTarget.MACRO_IMPLEMENTATION``; anything else is
    ``ModuleTarget.custom("Name")``.
    """

    kind: TargetKind
    custom_name: Optional[str] = None

    MAIN: ClassVar[ModuleTarget]
    INTERFACE: ClassVar[ModuleTarget]
    VIEWS: ClassVar[ModuleTarget]
    MACRO_IMPLEMENTATION: ClassVar[ModuleTarget]

    def __post_init__(self) -> None:
        if self.kind is TargetKind.CUSTOM:
            if not self.custom_name:
                raise ValueError("custom targets need a name")
            if self.custom_name in _BUILTIN_BY_KEY:
                raise ValueError(f"'{self.custom_name}' is a built-in target name")
        elif self.custom_name is not None:
            raise ValueError(f"{self.kind.value} target does not take a name")

    @classmethod
    def custom(cls, name: str) -> ModuleTarget:
        return cls(TargetKind.CUSTOM, name)

    @classmethod
    def parse(cls, text: str) -> ModuleTarget:
        """Map ``"main"``, ``"interface"``, ``"views"``, ``"implementation"``
        to built-in targets; any other string is a custom target name."""
        builtin = _BUILTIN_BY_KEY.get(text)
        if builtin is not None:
            return builtin
        return cls.custom(text)

    @property
    def key(self) -> str:
        """Stable identifier used in vertex keys and diagnostics."""
        if self.kind is TargetKind.CUSTOM:
            assert self.custom_name is not None
            return self.custom_name
        return self.kind.value

    def __str__(self) -> str:
        return self.key


ModuleTarget.MAIN = ModuleTarget(TargetKind.MAIN)
ModuleTarget.INTERFACE = ModuleTarget(TargetKind.INTERFACE)
ModuleTarget.VIEWS = ModuleTarget(TargetKind.VIEWS)
ModuleTarget.MACRO_IMPLEMENTATION = ModuleTarget(TargetKind.MACRO_IMPLEMENTATION)

_BUILTIN_BY_KEY = {
    target.key: target
    for target in (
        ModuleTarget.MAIN,
        ModuleTarget.INTERFACE,
        ModuleTarget.VIEWS,
        ModuleTarget.MACRO_IMPLEMENTATION,
    )
}
_BUILTIN_BY_KEY["macro_implementation"] = ModuleTarget.MACRO_IMPLEMENTATION


class ModuleType(Enum):
    """Module categories. Each has a default target layout."""

    CLIENT = "client"
    COORDINATOR = "coordinator"
    MACRO = "macro"
    SCREEN = "screen"
    UTILITY = "utility"
    ROOT = "root"

    @property
    def default_targets(self) -> tuple[ModuleTarget, ...]:
        if self is ModuleType.CLIENT:
            return (ModuleTarget.MAIN, ModuleTarget.INTERFACE)
        if self in (ModuleType.COORDINATOR, ModuleType.SCREEN):
            return (ModuleTarget.MAIN, ModuleTarget.VIEWS)
        if self is ModuleType.MACRO:
            return (ModuleTarget.MAIN, ModuleTarget.MACRO_IMPLEMENTATION)
        return (ModuleTarget.MAIN,)

    @property
    def default_platforms(self) -> tuple[Platform, ...]:
        # Compiler plugins only build against macOS 10.15+
        if self is ModuleType.MACRO:
            return (Platform.macos(10, 15),)
        return ()

    @property
    def label(self) -> str:
        """Plural display name, e.g. ``"Clients"``."""
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    ModuleType.CLIENT: "Clients",
    ModuleType.COORDINATOR: "Coordinators",
    ModuleType.MACRO: "Macros",
    ModuleType.SCREEN: "Screens",
    ModuleType.UTILITY: "Utilities",
    ModuleType.ROOT: "Root",
}


class ProductType(Enum):
    """What a module's package publishes."""

    EXECUTABLE = "executable"
    LIBRARY = "library"
    MACRO = "macro"
    PLUGIN = "plugin"
    NONE = "none"


@dataclass(frozen=True)
class ModuleTargetType:
    """(module type, target) key for the global dependency table."""

    module_type: ModuleType
    target: ModuleTarget

    @classmethod
    def parse(cls, text: str) -> ModuleTargetType:
        """Parse ``"screen:views"``; a bare ``"screen"`` means its main target."""
        type_text, _, target_text = text.partition(":")
        return cls(ModuleType(type_text.strip()), ModuleTarget.parse(target_text.strip() or "main"))
