"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Se resuelve una sola vez al arrancar y se pasa explícitamente a cada
  adaptador: ningún componente vuelve a leer `os.environ`.

Cada opción acepta el nombre de input de GitHub Actions (`INPUT_<NOMBRE>`) y,
como respaldo, la variable de entorno simple (`<NOMBRE>`).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import cast

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError

DEFAULT_VERSION_REGEX = r"^\s*<(Package|)Version>(.*)<\/(Package|)Version>\s*$"
TAG_WILDCARD = "*"


def _env(name: str) -> AliasChoices:
    return AliasChoices(f"INPUT_{name}", name)


class PublishSettings(BaseSettings):
    """Configuración inmutable de una ejecución.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars): un patrón mal formado o un
      fichero de proyecto inexistente fallan antes de tocar red o disco.
    - Un único contrato de configuración para CLI y adaptadores.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        # GitHub Actions exporta los inputs vacíos como "".
        env_ignore_empty=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    project_file_path: Path | None = Field(
        default=None,
        validation_alias=_env("PROJECT_FILE_PATH"),
        description="Ruta al proyecto (.csproj/.fsproj/.vbproj) a compilar y empaquetar.",
    )
    build_configuration: str = Field(
        default="Release",
        min_length=1,
        validation_alias=_env("BUILD_CONFIGURATION"),
        description="Configuración de build (`--configuration`).",
    )
    build_platform: str = Field(
        default="AnyCPU",
        min_length=1,
        validation_alias=_env("BUILD_PLATFORM"),
        description="Plataforma de build (`-property:Platform=`).",
    )
    package_name: str | None = Field(
        default=None,
        validation_alias=_env("PACKAGE_NAME"),
        description="Id del paquete; por defecto el nombre del proyecto sin extensión.",
    )
    version_file_path: Path | None = Field(
        default=None,
        validation_alias=_env("VERSION_FILE_PATH"),
        description="Fichero del que extraer la versión; por defecto el proyecto.",
    )
    version_regex: str = Field(
        default=DEFAULT_VERSION_REGEX,
        validation_alias=_env("VERSION_REGEX"),
        description="Patrón (multilínea) para extraer la versión.",
    )
    version_group: int = Field(
        default=2,
        ge=1,
        validation_alias=_env("VERSION_GROUP"),
        description="Índice del grupo de captura que contiene la versión.",
    )
    version_static: str | None = Field(
        default=None,
        validation_alias=_env("VERSION_STATIC"),
        description="Versión fija; si está presente no se lee ningún fichero.",
    )
    tag_commit: bool = Field(
        default=False,
        validation_alias=_env("TAG_COMMIT"),
        description="Crear y subir un tag de git tras publicar.",
    )
    tag_format: str = Field(
        default="v*",
        validation_alias=_env("TAG_FORMAT"),
        description="Plantilla del tag; `*` se sustituye por la versión.",
    )
    nuget_key: SecretStr | None = Field(
        default=None,
        validation_alias=_env("NUGET_KEY"),
        description="API key para `dotnet nuget push`.",
    )
    nuget_source: str = Field(
        default="https://api.nuget.org",
        min_length=8,
        validation_alias=_env("NUGET_SOURCE"),
        description="URL base del registry NuGet.",
    )
    nuspec_file: Path | None = Field(
        default=None,
        validation_alias=_env("NUSPEC_FILE"),
        description="Fichero .nuspec opcional para `dotnet pack`.",
    )
    include_symbols: bool = Field(
        default=False,
        validation_alias=_env("INCLUDE_SYMBOLS"),
        description="Generar y subir el paquete de símbolos (.snupkg).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias=_env("HTTP_TIMEOUT_SECONDS"),
        description="Timeout de la consulta al registry (segundos).",
    )
    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OUTPUT"),
        description="Fichero de outputs del runner de GitHub Actions.",
    )

    @field_validator("version_regex")
    @classmethod
    def _check_regex(cls, value: str) -> str:
        if not value:
            raise ValueError("version regex is required")
        try:
            re.compile(value, re.MULTILINE)
        except re.error as exc:
            raise ValueError(f"invalid version regex: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _check_inputs(self) -> "PublishSettings":
        project = self.project_file_path
        if project is None or not str(project).strip() or not project.is_file():
            raise ValueError("project file not found")

        groups = self.version_pattern.groups
        if groups < self.version_group:
            raise ValueError(
                f"version regex defines {groups} capture group(s), "
                f"version is expected in group {self.version_group}"
            )
        if self.tag_commit and self.tag_format.count(TAG_WILDCARD) != 1:
            raise ValueError(f"tag format must contain exactly one '{TAG_WILDCARD}': {self.tag_format!r}")
        return self

    @property
    def version_pattern(self) -> re.Pattern[str]:
        return re.compile(self.version_regex, re.MULTILINE)

    @property
    def project_file(self) -> Path:
        return cast(Path, self.project_file_path)

    @property
    def version_file(self) -> Path:
        return self.version_file_path or self.project_file

    @property
    def package_id(self) -> str:
        """Nombre del paquete, derivado del proyecto si no se configuró."""

        if self.package_name and self.package_name.strip():
            return self.package_name.strip()
        return self.project_file.stem

    @property
    def api_key(self) -> str | None:
        if self.nuget_key is None:
            return None
        return self.nuget_key.get_secret_value() or None

    def describe(self) -> list[str]:
        """Líneas de diagnóstico (sin secretos)."""

        lines = [f"Project Filepath: {self.project_file}"]
        if self.version_static:
            lines.append(f"Version (static): {self.version_static}")
        else:
            lines.append(f"Version Filepath: {self.version_file}")
            lines.append(f"Version Regex: {self.version_regex}")
        lines.append(f"Package Name: {self.package_id}")
        lines.append(f"NuGet Source: {self.nuget_source}")
        return lines


def _format_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        msg = str(error.get("msg", "")).removeprefix("Value error, ")
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "__root__")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages) or str(exc)


def resolve_settings(**overrides: object) -> PublishSettings:
    """Construye `PublishSettings` una vez (env + overrides de la CLI).

    Los overrides con valor `None` se ignoran para no pisar el entorno.
    """

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return PublishSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_error(exc)) from exc
