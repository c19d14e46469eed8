# models.py
# -*- coding: utf-8 -*-
"""Dataclasses for the units of work and the results of a batch run."""

from dataclasses import dataclass, field
from pathlib import Path

from ..utils.constants import MODE_ENCRYPT, MODE_DECRYPT, ENCRYPTED_SUFFIX
from ..utils.exceptions import BatchCryptError, InvalidModeError


@dataclass(frozen=True, slots=True)
class Task:
    """One input file to encrypt or decrypt."""

    source: Path
    mode: str

    def output_name(self) -> str:
        """
        Base name of the file this task writes.

        Only the base name of the source is used; the output directory is
        decided by the run, never by the input path.

        Raises:
            InvalidModeError: If mode is not encrypt/decrypt.
        """
        name = self.source.name
        if self.mode == MODE_ENCRYPT:
            return name + ENCRYPTED_SUFFIX
        if self.mode == MODE_DECRYPT:
            # A file named exactly ".enc" keeps its name
            if name.endswith(ENCRYPTED_SUFFIX) and len(name) > len(ENCRYPTED_SUFFIX):
                return name[: -len(ENCRYPTED_SUFFIX)]
            return name
        raise InvalidModeError(f"Invalid mode: {self.mode!r}")


@dataclass(frozen=True, slots=True)
class TaskResult:
    """Outcome of a single task: the written output, or the error that stopped it."""

    task: Task
    output: Path | None = None
    error: BatchCryptError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> str | None:
        return None if self.error is None else self.error.kind

    def describe(self) -> str:
        """One human-readable report line."""
        if self.ok:
            verb = "Encrypted" if self.task.mode == MODE_ENCRYPT else "Decrypted"
            return f"{verb} {self.task.source} -> {self.output}"
        return f"Error: [{self.kind}] {self.task.source}: {self.error}"


@dataclass(slots=True)
class BatchReport:
    """All results of one run, sorted by source path."""

    mode: str
    results: list[TaskResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.results = sorted(self.results, key=lambda r: str(r.task.source))

    @property
    def succeeded(self) -> list[TaskResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[TaskResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary_lines(self) -> list[str]:
        lines = [f"{self.mode}: {len(self.succeeded)} succeeded, {len(self.failed)} failed"]
        lines.extend(f"  {r.task.source}: {r.kind}" for r in self.failed)
        return lines
