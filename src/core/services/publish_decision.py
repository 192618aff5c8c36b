"""Decide whether the current version still has to be published.

Comparison is plain string equality. The only normalisation is the trailing
`.0` rule: registries store `1.2.0` for a project that declares `1.2`, and the
index may list either form.
"""

from __future__ import annotations

from core.domain.models import PublishDecision, RegistryLookup, RegistryStatus


def is_already_published(current_version: str, latest_version: str) -> bool:
    return latest_version == current_version or latest_version + ".0" == current_version


def decide(current_version: str, lookup: RegistryLookup) -> PublishDecision:
    if lookup.status is RegistryStatus.NOT_FOUND:
        return PublishDecision(
            publish=True,
            reason="package not found in registry",
            current_version=current_version,
        )

    if lookup.status is RegistryStatus.ERROR:
        return PublishDecision(
            publish=False,
            reason=f"registry returned status {lookup.status_code}; not publishing",
            current_version=current_version,
        )

    latest = lookup.latest_version
    if is_already_published(current_version, latest):
        return PublishDecision(
            publish=False,
            reason=f"version {current_version} already published",
            current_version=current_version,
            latest_version=latest,
        )
    return PublishDecision(
        publish=True,
        reason=f"new version (last published: {latest or 'none'})",
        current_version=current_version,
        latest_version=latest or None,
    )
