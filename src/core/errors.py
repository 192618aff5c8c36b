"""Errores y avisos del flujo de publicación.

Por qué un módulo propio:
- Los adaptadores (registry, dotnet, git) y el Core comparten la misma
  taxonomía sin importarse entre sí.
- La CLI solo necesita capturar `PublishError` para decidir el exit code.
"""

from __future__ import annotations


class PublishError(Exception):
    """Error fatal: aborta la ejecución completa, sin reintentos."""


class ConfigurationError(PublishError):
    """Falta un input obligatorio o es inválido."""


class MissingFileError(PublishError):
    """El fichero de versión no existe."""


class VersionExtractionError(PublishError):
    """El patrón de versión no encaja con el contenido del fichero."""


class RegistryTransportError(PublishError):
    """Fallo de red al consultar el registry (conexión, DNS, timeout)."""


class RegistryResponseError(PublishError):
    """El registry respondió 200 con un cuerpo que no es el índice esperado."""


class PublishToolError(PublishError):
    """La herramienta externa (build/pack/push) reportó un error."""


class TaggingError(PublishError):
    """`git tag` o `git push` terminaron con código distinto de cero."""


class PublishWarning(UserWarning):
    """Condición no fatal: se informa y el flujo continúa."""


class RegistryStatusWarning(PublishWarning):
    """Status distinto de 200/404: resultado no concluyente, no se publica."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"error calling nuget api '{url}' with status code: '{status_code}'")
        self.status_code = status_code
        self.url = url


class MissingCredentialWarning(PublishWarning):
    """No hay API key: el paso de publicación se omite."""

    def __init__(self) -> None:
        super().__init__("NUGET_KEY not given")
