"""Conditional publish orchestration.

The workflow is strictly sequential: resolve version, look the package up in
the registry (the only await point), decide, then publish and tag. Any
`PublishError` short-circuits to the FAILED state; nothing is retried and
artifacts already produced stay on disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from adapters.version_extractor import extract_version
from core.config import PublishSettings
from core.domain.models import (
    OutcomeStatus,
    PublishDecision,
    PublishOutcome,
    RegistryLookup,
    RegistryStatus,
)
from core.errors import PublishError, RegistryStatusWarning
from core.interfaces.publishing import (
    CommitTagger,
    PackagePublisher,
    RegistryClient,
    WorkflowOutputSink,
)
from core.services.hooks import WorkflowHooks
from core.services.publish_decision import decide


class WorkflowState(str, Enum):
    INIT = "init"
    CONFIG_RESOLVED = "config_resolved"
    VERSION_KNOWN = "version_known"
    REGISTRY_CHECKED = "registry_checked"
    SKIPPED = "skipped"
    PUBLISHED = "published"
    TAGGED = "tagged"
    UNTAGGED = "untagged"
    FAILED = "failed"


_ALLOWED_TRANSITIONS: dict[WorkflowState, set[WorkflowState]] = {
    WorkflowState.INIT: {WorkflowState.CONFIG_RESOLVED, WorkflowState.FAILED},
    WorkflowState.CONFIG_RESOLVED: {WorkflowState.VERSION_KNOWN, WorkflowState.FAILED},
    WorkflowState.VERSION_KNOWN: {WorkflowState.REGISTRY_CHECKED, WorkflowState.FAILED},
    WorkflowState.REGISTRY_CHECKED: {
        WorkflowState.SKIPPED,
        WorkflowState.PUBLISHED,
        WorkflowState.FAILED,
    },
    WorkflowState.PUBLISHED: {WorkflowState.TAGGED, WorkflowState.UNTAGGED, WorkflowState.FAILED},
    WorkflowState.SKIPPED: set(),
    WorkflowState.TAGGED: set(),
    WorkflowState.UNTAGGED: set(),
    WorkflowState.FAILED: set(),
}


def can_transition(current: WorkflowState, target: WorkflowState) -> bool:
    return target in _ALLOWED_TRANSITIONS.get(current, set())


@dataclass
class WorkflowResult:
    """Output of a workflow invocation."""

    state: WorkflowState = WorkflowState.INIT
    version: str | None = None
    lookup: RegistryLookup | None = None
    decision: PublishDecision | None = None
    outcome: PublishOutcome | None = None
    tag: str | None = None
    error: PublishError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.state is WorkflowState.FAILED

    def transition(self, target: WorkflowState) -> None:
        if not can_transition(self.state, target):
            raise ValueError(f"Illegal state transition: {self.state.value} -> {target.value}")
        self.state = target


class PublishWorkflow:
    """Runs one decision-and-publish pass for a single package."""

    def __init__(
        self,
        *,
        settings: PublishSettings,
        registry: RegistryClient,
        publisher: PackagePublisher,
        tagger: CommitTagger,
        sink: WorkflowOutputSink,
        hooks: WorkflowHooks | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry
        self._publisher = publisher
        self._tagger = tagger
        self._sink = sink
        self._hooks = hooks or WorkflowHooks()

    async def run(self, *, dry_run: bool = False) -> WorkflowResult:
        """Execute the workflow; with `dry_run` stop right after the decision."""

        result = WorkflowResult()
        try:
            await self._run(result, dry_run=dry_run)
        except PublishError as exc:
            result.error = exc
            # A failed tag keeps the PUBLISHED outcome: the push already happened.
            if result.decision is not None and result.outcome is None:
                result.outcome = PublishOutcome.failed(str(exc))
            result.transition(WorkflowState.FAILED)
        result.warnings = list(self._hooks.warnings)
        return result

    async def _run(self, result: WorkflowResult, *, dry_run: bool) -> None:
        settings = self._settings
        hooks = self._hooks

        result.transition(WorkflowState.CONFIG_RESOLVED)
        for line in settings.describe():
            hooks.emit_info(line)

        result.version = extract_version(settings)
        hooks.emit_info(f"Version: {result.version}")
        result.transition(WorkflowState.VERSION_KNOWN)

        hooks.emit_info(f"Calling nuget api for '{settings.package_id}'")
        lookup = await self._registry.lookup(settings.package_id)
        result.lookup = lookup
        result.transition(WorkflowState.REGISTRY_CHECKED)

        if lookup.status is RegistryStatus.ERROR:
            hooks.emit_warning(RegistryStatusWarning(lookup.status_code or 0, lookup.url))
        elif lookup.status is RegistryStatus.FOUND:
            hooks.emit_info(
                f"Last published version: {lookup.latest_version} - "
                f"Published packages: {len(lookup.versions)}"
            )

        decision = decide(result.version, lookup)
        result.decision = decision
        if dry_run:
            return

        if not decision.publish:
            hooks.emit_info(f"Skipping publish: {decision.reason}")
            result.outcome = PublishOutcome.skipped(decision.reason)
            result.transition(WorkflowState.SKIPPED)
            return

        outcome = self._publisher.publish(result.version)
        result.outcome = outcome
        if outcome.status is not OutcomeStatus.PUBLISHED:
            result.transition(WorkflowState.SKIPPED)
            return

        for name, value in outcome.outputs().items():
            self._sink.set_output(name, value)
        result.transition(WorkflowState.PUBLISHED)

        if not settings.tag_commit:
            result.transition(WorkflowState.UNTAGGED)
            return

        result.tag = self._tagger.tag(result.version)
        self._sink.set_output("VERSION", result.tag)
        result.transition(WorkflowState.TAGGED)
