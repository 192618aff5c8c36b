"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.publishing import (
    CommandRunner,
    CommitTagger,
    PackagePublisher,
    RegistryClient,
    WorkflowOutputSink,
)

__all__ = [
    "CommandRunner",
    "CommitTagger",
    "PackagePublisher",
    "RegistryClient",
    "WorkflowOutputSink",
]
