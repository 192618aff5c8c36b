"""Cliente del registry NuGet (endpoint flat-container).

Fase única:
- `GET {source}/v3-flatcontainer/{id en minúsculas}/index.json`.
- 404 => el paquete no existe; 200 => lista ordenada de versiones; cualquier
  otro status (redirecciones incluidas) => resultado no concluyente.
- Fallos de la petición o URL inválida => error fatal.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import PublishSettings
from core.domain.models import FlatContainerIndex, RegistryLookup
from core.errors import RegistryResponseError, RegistryTransportError


def build_index_url(source: str, package_name: str) -> str:
    base = source.strip().rstrip("/")
    return f"{base}/v3-flatcontainer/{package_name.strip().lower()}/index.json"


class NuGetRegistryClient:
    """Consulta las versiones publicadas de un paquete."""

    def __init__(
        self,
        settings: PublishSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client

    async def lookup(self, package_name: str) -> RegistryLookup:
        url = build_index_url(self._settings.nuget_source, package_name)

        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with build_async_client(self._settings) as client:
                    response = await client.get(url)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise RegistryTransportError(f"error: {exc}") from exc

        if response.status_code == 404:
            return RegistryLookup.not_found(url)
        if response.status_code != 200:
            return RegistryLookup.error(url, response.status_code)

        try:
            index = FlatContainerIndex.model_validate_json(response.content)
        except ValidationError as exc:
            raise RegistryResponseError(f"unexpected response from '{url}': {exc}") from exc
        return RegistryLookup.found(url, index.versions)
