"""Parsing of Slackware package names."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SlackPackage:
    """The parts of a package name: name-version-arch-build."""

    name: str
    version: str
    arch: str
    build_tag: str


def pkgparse(pkg_str: str) -> SlackPackage:
    """Split a package name or path into its parts.

    Raises ValueError when the name has fewer than three dashes.
    """
    base = pkg_str.rsplit("/", 1)[-1]
    parts = base.rsplit("-", 3)
    if len(parts) != 4:
        raise ValueError(f"invalid package name: {pkg_str!r}")
    name, version, arch, build_tag = parts
    return SlackPackage(name, version, arch, build_tag)