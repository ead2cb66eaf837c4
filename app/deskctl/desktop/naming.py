"""Name-collision resolution for files moved into a directory."""

from collections.abc import Iterator
from pathlib import Path


def candidate_names(name: str) -> Iterator[str]:
    """Yield the original name, then ``stem 1.ext``, ``stem 2.ext``, ...

    Only the last suffix is treated as the extension, so ``a.tar.gz``
    becomes ``a.tar 1.gz``. Names without an extension get the counter
    appended at the end.
    """
    yield name
    path = Path(name)
    stem, suffix = path.stem, path.suffix
    counter = 1
    while True:
        yield f"{stem} {counter}{suffix}"
        counter += 1


def resolve_collision(directory: Path, name: str) -> Path:
    """Return the first free path for name inside directory.

    Existence is re-checked for every candidate, so the counter keeps
    growing until the file system reports a free slot.

    Args:
        directory: Destination directory.
        name: Desired file name.

    Returns:
        Path inside directory that does not exist yet.
    """
    for candidate in candidate_names(name):
        target = directory / candidate
        if not target.exists() and not target.is_symlink():
            return target
    raise AssertionError("unreachable")  # pragma: no cover
