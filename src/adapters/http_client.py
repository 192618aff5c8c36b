"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout y headers de la consulta al registry.
- Facilita testeo: se puede sustituir por un cliente mockeado (respx).
"""

from __future__ import annotations

import httpx

from core.config import PublishSettings

USER_AGENT = "nuget-publish/0.1 (+https://github.com)"


def build_async_client(
    settings: PublishSettings,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Sin reintentos: cada llamada externa se intenta exactamente una vez.
    """

    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
    )
