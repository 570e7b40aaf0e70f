"""Pack container I/O: zip archives and unpacked directories.

- decode_archive/encode_archive convert between zip bytes and a Store
- load_pack accepts either a .zip file or a directory
- save_pack uses the atomic write pattern (write temp file, then rename)
- save_directory mirrors a package into an unpacked directory
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path

from resourcepack_cli.errors import ContainerError, InvalidPathError
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.store import Store, normalize_path

logger = logging.getLogger(__name__)


def decode_archive(data: bytes, source: str = "<archive>") -> Store:
    """Decode zip bytes into a Store.

    Args:
        data: Raw archive bytes
        source: Name used in error messages

    Returns:
        Store with every file entry under its normalized path

    Raises:
        ContainerError: If the bytes are not a readable zip archive

    Behavior:
        - Directory entries are skipped (the store has no directories)
        - Entries whose names normalize to empty or climb out of the pack
          root with `..` are skipped
    """
    store = Store()
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            for info in archive.infolist():
                if info.is_dir() or info.filename.replace("\\", "/").endswith("/"):
                    continue
                try:
                    path = normalize_path(info.filename)
                except InvalidPathError as exc:
                    logger.warning("Skipping archive entry %r: %s", info.filename, exc.detail)
                    continue
                store.set(path, archive.read(info))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as exc:
        raise ContainerError(source, str(exc)) from exc
    logger.debug("Decoded %d files from %s", len(store), source)
    return store


def encode_archive(store: Store) -> bytes:
    """Encode a Store as deflate-compressed zip bytes.

    Invariants:
        - decode_archive(encode_archive(s)) == s
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=6) as archive:
        for path, data in store.items():
            archive.writestr(path, data)
    return buffer.getvalue()


def _strip_zip_extension(name: str) -> str:
    return name[:-4] if name.lower().endswith(".zip") else name


def load_directory(directory: Path) -> Store:
    """Read every file under directory into a Store, paths relative to it."""
    store = Store()
    for file_path in sorted(directory.rglob("*")):
        if file_path.is_file():
            store.set(file_path.relative_to(directory).as_posix(), file_path.read_bytes())
    return store


def load_pack(path: Path) -> Package:
    """Load a pack from a zip file or an unpacked directory.

    Args:
        path: Archive file or directory

    Returns:
        Package named after the archive (without .zip) or directory

    Raises:
        ContainerError: If the path is missing or is not a readable archive
    """
    if path.is_dir():
        store = load_directory(path)
    elif path.is_file():
        store = decode_archive(path.read_bytes(), str(path))
    else:
        raise ContainerError(str(path), "No such file or directory")
    logger.info("Loaded %s (%d files)", path, len(store))
    return Package(name=_strip_zip_extension(path.name) or "resourcepack", store=store)


def save_pack(package: Package, path: Path) -> None:
    """Write a package as a zip archive atomically.

    Uses a write-then-rename pattern to ensure file integrity:
    1. Write to a temporary file (path.tmp)
    2. Rename temp file to target path

    Invariants:
        - Parent directories are created if they don't exist
        - The original archive is not corrupted if writing fails partway
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(f"{path.suffix}.tmp")
    temp_path.write_bytes(encode_archive(package.store))
    temp_path.replace(path)
    logger.info("Saved %s (%d files)", path, len(package.store))


def save_directory(package: Package, directory: Path) -> None:
    """Mirror a package into an unpacked directory.

    Files whose path is no longer in the store are removed; empty
    directories are left in place.

    Raises:
        ContainerError: If a store path would resolve outside directory;
            nothing is written or removed in that case
    """
    directory.mkdir(parents=True, exist_ok=True)
    root = directory.resolve()
    for path in package.store.keys():
        if not (root / path).resolve().is_relative_to(root):
            raise ContainerError(str(directory), f"Entry '{path}' resolves outside the pack directory")
    wanted = set(package.store.keys())
    for file_path in sorted(directory.rglob("*")):
        if file_path.is_file() and file_path.relative_to(directory).as_posix() not in wanted:
            file_path.unlink()
            logger.info("Removed %s", file_path)
    for path, data in package.store.items():
        target = directory / path
        target.parent.mkdir(parents=True, exist_ok=True)
        temp_path = target.with_name(f"{target.name}.tmp")
        temp_path.write_bytes(data)
        temp_path.replace(target)
    logger.info("Saved %s (%d files)", directory, len(package.store))
