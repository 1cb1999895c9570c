"""Path arithmetic between module directories (``/``-separated, relative)."""


def _components(path: str) -> list[str]:
    return [part for part in path.split("/") if part and part != "."]


def relative_path(source: str, target: str) -> str:
    """Path from directory ``source`` to directory ``target``.

    Example:
        >>> relative_path("Modules/Screens/ScreenA", "Modules/Clients/ContentClient")
        '../../Clients/ContentClient'
    """
    source_parts = _components(source)
    target_parts = _components(target)

    common = 0
    for source_part, target_part in zip(source_parts, target_parts):
        if source_part != target_part:
            break
        common += 1

    parts = [".."] * (len(source_parts) - common) + target_parts[common:]
    return "/".join(parts) if parts else "."


def depth(path: str) -> int:
    """Number of directory levels, e.g. ``Modules/Screens/ScreenA`` -> 3."""
    return len(_components(path))
