"""Shared fixtures for resourcepack_cli tests."""

from __future__ import annotations

import logging
from typing import Any, Callable

import pytest

from resourcepack_cli.logging_config import PACKAGE_LOGGER
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured, write_structured
from resourcepack_cli.persistence.store import Store

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
"""Stand-in texture payload; textures are opaque bytes to the tool."""


def build_package(
    files: dict[str, Any] | None = None,
    *,
    pack_format: int | None = 34,
    name: str = "test_pack",
) -> Package:
    """Package with pack.mcmeta at pack_format plus files.

    bytes values are stored verbatim; anything else is written as JSON.
    """
    store = Store()
    if pack_format is not None:
        write_structured(store, "pack.mcmeta", {"pack": {"pack_format": pack_format, "description": "test"}})
    for path, value in (files or {}).items():
        if isinstance(value, (bytes, bytearray)):
            store.set(path, value)
        else:
            write_structured(store, path, value)
    return Package(name=name, store=store)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by CLI runs; they hold per-test capture streams."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_package() -> Callable[..., Package]:
    return build_package


@pytest.fixture
def png() -> bytes:
    return PNG_BYTES


@pytest.fixture
def doc() -> Callable[[Package, str], Any]:
    """Read a parsed JSON document from a package."""
    def _read(package: Package, path: str) -> Any:
        return read_structured(package.store, path)
    return _read
