"""Extracción de la versión a publicar.

Contrato del patrón:
- Se compila en modo multilínea.
- La versión vive en el grupo `version_group` (2 por defecto): el patrón por
  defecto admite un nombre de etiqueta opcional en los grupos 1 y 3, p.ej.
  `<Version>1.2.3</Version>` o `<PackageVersion>1.2.3</PackageVersion>`.
- El texto capturado no se recorta.
- Bytes que no son UTF-8 se sustituyen al leer, así que un fichero en otra
  codificación termina en "unable to extract version info!".
"""

from __future__ import annotations

from core.config import PublishSettings
from core.errors import MissingFileError, VersionExtractionError


def extract_version_from_text(text: str, settings: PublishSettings) -> str | None:
    match = settings.version_pattern.search(text)
    if not match:
        return None
    # El grupo se devuelve tal cual; una captura vacía no es una versión.
    return match.group(settings.version_group) or None


def extract_version(settings: PublishSettings) -> str:
    """Devuelve la versión estática o la extraída del fichero de versión."""

    if settings.version_static:
        return settings.version_static

    version_file = settings.version_file
    # El proyecto ya se validó al resolver la configuración.
    if version_file != settings.project_file and not version_file.is_file():
        raise MissingFileError("version file not found")

    try:
        content = version_file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise MissingFileError(f"version file not readable: {exc}") from exc
    version = extract_version_from_text(content, settings)
    if version is None:
        raise VersionExtractionError("unable to extract version info!")
    return version
