"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida la respuesta del registry en el borde y documenta cada campo (Field).
- Los resultados (consulta, decisión, publicación) son valores inmutables que
  viajan de un paso al siguiente dentro de una sola ejecución.

Nota:
- Nada aquí sabe de HTTP, subprocess ni de la CLI.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class RegistryStatus(str, Enum):
    NOT_FOUND = "not_found"
    FOUND = "found"
    ERROR = "error"


class FlatContainerIndex(BaseModel):
    """Cuerpo de `GET {source}/v3-flatcontainer/{id}/index.json`."""

    model_config = ConfigDict(extra="ignore")

    versions: list[str] = Field(
        default_factory=list,
        description="Versiones publicadas, en el orden que devuelve el registry.",
    )

    @field_validator("versions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RegistryLookup(BaseModel):
    """Resultado etiquetado de una consulta al registry.

    Por qué un solo modelo con `status`:
    - NOT_FOUND / FOUND / ERROR comparten la URL consultada y el status HTTP,
      así el workflow y la CLI pueden mostrarlos sin ramas por tipo.
    """

    model_config = ConfigDict(frozen=True)

    status: RegistryStatus
    url: str = Field(..., description="URL del índice flat-container consultado.")
    versions: list[str] = Field(
        default_factory=list,
        description="Versiones conocidas (solo con status FOUND).",
    )
    status_code: int | None = Field(
        default=None,
        description="Status HTTP recibido.",
    )

    @classmethod
    def not_found(cls, url: str) -> "RegistryLookup":
        return cls(status=RegistryStatus.NOT_FOUND, url=url, status_code=404)

    @classmethod
    def found(cls, url: str, versions: list[str]) -> "RegistryLookup":
        return cls(status=RegistryStatus.FOUND, url=url, versions=list(versions), status_code=200)

    @classmethod
    def error(cls, url: str, status_code: int) -> "RegistryLookup":
        return cls(status=RegistryStatus.ERROR, url=url, status_code=status_code)

    @property
    def latest_version(self) -> str:
        """Último elemento de la lista, o cadena vacía si no hay ninguno."""

        return self.versions[-1] if self.versions else ""


class PublishDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    publish: bool
    reason: str = Field(..., min_length=1)
    current_version: str = Field(..., min_length=1)
    latest_version: str | None = Field(
        default=None,
        description="Última versión publicada (solo si el registry la devolvió).",
    )


class OutcomeStatus(str, Enum):
    SKIPPED = "skipped"
    PUBLISHED = "published"
    FAILED = "failed"


class PublishOutcome(BaseModel):
    """Resultado de un intento de publicación.

    - SKIPPED: `reason` explica por qué no se hizo nada.
    - PUBLISHED: nombre y ruta absoluta del paquete (y de símbolos si existe).
    - FAILED: `error` con el detalle del error fatal.
    """

    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    reason: str | None = None
    package_name: str | None = None
    package_path: str | None = None
    symbols_package_name: str | None = None
    symbols_package_path: str | None = None
    error: str | None = None

    @classmethod
    def skipped(cls, reason: str) -> "PublishOutcome":
        return cls(status=OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def published(
        cls,
        *,
        package_name: str,
        package_path: str,
        symbols_package_name: str | None = None,
        symbols_package_path: str | None = None,
    ) -> "PublishOutcome":
        return cls(
            status=OutcomeStatus.PUBLISHED,
            package_name=package_name,
            package_path=package_path,
            symbols_package_name=symbols_package_name,
            symbols_package_path=symbols_package_path,
        )

    @classmethod
    def failed(cls, error: str) -> "PublishOutcome":
        return cls(status=OutcomeStatus.FAILED, error=error)

    def outputs(self) -> dict[str, str]:
        """Valores de salida del workflow para un paquete publicado."""

        if self.status is not OutcomeStatus.PUBLISHED:
            return {}
        out: dict[str, str] = {
            "PACKAGE_NAME": self.package_name or "",
            "PACKAGE_PATH": self.package_path or "",
        }
        if self.symbols_package_name:
            out["SYMBOLS_PACKAGE_NAME"] = self.symbols_package_name
            out["SYMBOLS_PACKAGE_PATH"] = self.symbols_package_path or ""
        return out


class CommandResult(BaseModel):
    """Resultado de una invocación externa (dotnet, git)."""

    model_config = ConfigDict(frozen=True)

    args: list[str]
    exit_code: int
    output: str = ""
