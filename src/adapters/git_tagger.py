"""Tag de la versión publicada en git."""

from __future__ import annotations

from core.config import TAG_WILDCARD, PublishSettings
from core.errors import TaggingError
from core.interfaces.publishing import CommandRunner
from core.services.hooks import WorkflowHooks

REMOTE = "origin"


def format_tag(tag_format: str, version: str) -> str:
    return tag_format.replace(TAG_WILDCARD, version, 1)


class GitTagger:
    """Crea el tag local y lo sube a `origin`, en ese orden."""

    def __init__(
        self,
        settings: PublishSettings,
        runner: CommandRunner,
        *,
        hooks: WorkflowHooks | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._hooks = hooks or WorkflowHooks()

    def tag(self, version: str) -> str:
        tag = format_tag(self._settings.tag_format, version)
        self._hooks.emit_info(f"✨ creating new tag {tag}")

        for args in (["git", "tag", tag], ["git", "push", REMOTE, tag]):
            result = self._runner.run(args)
            if result.exit_code != 0:
                raise TaggingError(f"`{' '.join(args)}` failed with exit code {result.exit_code}")
        return tag
