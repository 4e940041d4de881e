"""Core data models shared across reporeadme components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

PLACEHOLDER_NAME = "project-name"
PLACEHOLDER_DESCRIPTION = "This project automatically generates well-formatted README files."
PLACEHOLDER_ISSUES_LINK = "https://github.com/username/project-name/issues"
PLACEHOLDER_COMMAND = "Follow project-specific instructions"

FileKind = Literal["file", "dir"]


@dataclass(frozen=True)
class FileEntry:
    """A single entry of the project's file tree."""

    name: str
    path: str
    kind: FileKind = "file"


@dataclass(frozen=True)
class TechnologyProfile:
    """Coarse technology indicators derived from file names."""

    node: bool = False
    python: bool = False
    typescript: bool = False
    react: bool = False
    next: bool = False
    docker: bool = False
    sql: bool = False
    empty: bool = False

    _LABELS = (
        ("node", "Node.js"),
        ("python", "Python"),
        ("typescript", "TypeScript"),
        ("react", "React"),
        ("next", "Next.js"),
        ("docker", "Docker"),
        ("sql", "SQL"),
    )

    def detected(self) -> List[str]:
        """Return display names of the technologies flagged on this profile."""
        return [label for attr, label in self._LABELS if getattr(self, attr)]

    def as_dict(self) -> Dict[str, bool]:
        values = {attr: bool(getattr(self, attr)) for attr, _ in self._LABELS}
        values["empty"] = self.empty
        return values


@dataclass(frozen=True)
class CommandSet:
    """Install, run and test shell invocations for a project."""

    install: str
    run: str
    test: str


@dataclass
class RepositoryInfo:
    """Best-effort repository identity used to fill the README header."""

    name: str = PLACEHOLDER_NAME
    description: Optional[str] = None
    issues_link: str = PLACEHOLDER_ISSUES_LINK
    url: Optional[str] = None


@dataclass(frozen=True)
class GenerationStatus:
    """Progress report emitted by each pipeline step."""

    step: int
    message: str
    error: bool = False


@dataclass
class GenerationRequest:
    """Transient state for a single README generation run."""

    repository: RepositoryInfo
    entries: List[FileEntry] = field(default_factory=list)
    file_tree: str = ""
    profile: TechnologyProfile = field(default_factory=TechnologyProfile)
    commands: Optional[CommandSet] = None
    features: Optional[str] = None
    tech_stack: Optional[str] = None
    description: Optional[str] = None


@dataclass
class GenerationResult:
    """Outcome of a generation run; ``readme`` is only set on success."""

    readme: Optional[str]
    statuses: List[GenerationStatus] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[str] = None
    request: Optional[GenerationRequest] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.readme is not None
