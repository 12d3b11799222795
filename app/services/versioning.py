# app/services/versioning.py
"""
Enrutado por versión del protocolo.

Cada generación de handler cubre un rango semiabierto [desde, hasta) de
versiones semánticas; una petición la procesa exactamente una generación.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from app.core.errors import BadRequest

# (major, minor, patch, clave de pre-release)
Version = tuple

_SEMVER_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$")


def _prerelease_key(prerelease: str | None) -> tuple:
    # una versión sin pre-release va después de cualquiera de sus pre-releases;
    # los identificadores numéricos van antes que los alfanuméricos
    if prerelease is None:
        return (1, ())
    ids = tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in prerelease.split("."))
    return (0, ids)


def parse_version(raw: str) -> Version:
    """Devuelve una clave comparable según la precedencia semver (se ignora el build)."""
    m = _SEMVER_RE.match(raw.strip()) if raw else None
    if not m:
        raise BadRequest(f"Invalid version: {raw!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3)), _prerelease_key(m.group(4))


LEGACY_THRESHOLD: Version = parse_version("2.0.0")


class PresentationCreator(Protocol):
    name: str

    async def create(self, data: dict) -> dict: ...


@dataclass(frozen=True)
class VersionRange:
    lower: Version | None
    upper: Version | None
    handler: PresentationCreator

    def contains(self, version: Version) -> bool:
        return (self.lower is None or self.lower <= version) and (self.upper is None or version < self.upper)


class VersionRouter:
    def __init__(self, routes: list[VersionRange], default_version: str = "1.0.0"):
        self.routes = routes
        self.default_version = default_version

    def resolve(self, raw_version: str | None) -> PresentationCreator:
        version = parse_version(raw_version or self.default_version)
        for route in self.routes:
            if route.contains(version):
                return route.handler
        raise BadRequest(f"Unsupported version: {raw_version}")

    async def create(self, data: dict, header_version: str | None = None) -> dict:
        # la versión del cuerpo tiene prioridad sobre la cabecera
        version = data.get("version") or header_version or self.default_version
        handler = self.resolve(version)
        return await handler.create({**data, "version": version})


def build_routes(legacy: PresentationCreator, current: PresentationCreator) -> list[VersionRange]:
    return [
        VersionRange(lower=None, upper=LEGACY_THRESHOLD, handler=legacy),
        VersionRange(lower=LEGACY_THRESHOLD, upper=None, handler=current),
    ]
