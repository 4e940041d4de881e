"""Fixed Markdown skeleton for generated READMEs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .models import CommandSet, FileEntry

README_TEMPLATE = "readme.md.j2"
TREE_PREFIX = "|── "
CLONE_PLACEHOLDER = "[repository_url]"

SECTION_ORDER: tuple[str, ...] = (
    "Features",
    "Project Structure",
    "Tech Stack",
    "Installation",
    "Usage",
    "Environment Variables",
    "Testing",
    "Documentation",
    "Contributing",
    "Issues",
    "Roadmap",
    "Author",
    "License",
)


def _create_env() -> Environment:
    loader = FileSystemLoader(str(Path(__file__).with_name("templates")))
    # Values are interpolated verbatim; Markdown is never escaped.
    return Environment(
        loader=loader,
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_ENV = _create_env()


def render_file_tree(entries: Iterable[FileEntry]) -> str:
    """Render one ``|── path`` line per entry, preserving input order."""
    return "\n".join(f"{TREE_PREFIX}{entry.path}" for entry in entries)


def render_readme(
    *,
    project_name: str,
    description: str,
    features: str,
    structure: str,
    tech_stack: str,
    commands: CommandSet,
    issues_link: str,
    clone_url: str | None = None,
) -> str:
    """Fill the README skeleton; identical inputs give identical output."""
    template = _ENV.get_template(README_TEMPLATE)
    rendered = template.render(
        project_name=project_name,
        description=description,
        features=features,
        structure=structure,
        tech_stack=tech_stack,
        install_command=commands.install,
        run_command=commands.run,
        test_command=commands.test,
        issues_link=issues_link,
        clone_url=clone_url or CLONE_PLACEHOLDER,
    )
    return rendered.strip() + "\n"


__all__ = ["SECTION_ORDER", "render_file_tree", "render_readme"]
