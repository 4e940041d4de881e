"""Tests for the README skeleton renderer."""

from __future__ import annotations

from reporeadme.analyzers import GENERIC_COMMANDS, NODE_COMMANDS
from reporeadme.template import SECTION_ORDER, render_file_tree, render_readme
from tests._fixtures.fakes import entries


def _render(**overrides: object) -> str:
    values: dict[str, object] = {
        "project_name": "widget",
        "description": "A small widget.",
        "features": "- Fast\n- Small",
        "structure": "|── package.json",
        "tech_stack": "- Node.js\n- TypeScript",
        "commands": NODE_COMMANDS,
        "issues_link": "https://github.com/acme/widget/issues",
    }
    values.update(overrides)
    return render_readme(**values)  # type: ignore[arg-type]


def test_render_is_deterministic() -> None:
    assert _render() == _render()


def test_sections_appear_in_fixed_order() -> None:
    readme = _render()

    assert readme.startswith("# widget\n\nA small widget.\n")
    positions = [readme.index(f"\n## {title}\n") for title in SECTION_ORDER]
    assert positions == sorted(positions)


def test_values_are_interpolated_verbatim() -> None:
    readme = _render(features="- **bold** <b>raw</b> & _under_")

    assert "## Features\n- **bold** <b>raw</b> & _under_\n" in readme


def test_commands_fill_installation_usage_and_testing() -> None:
    readme = _render()

    assert "```bash\nnpm install\n```" in readme
    assert "```bash\nnpm start\n```" in readme
    assert readme.count("```bash\nnpm test\n```") == 2
    assert "npm test --integration" in readme
    assert "cd widget" in readme


def test_placeholder_sections_are_always_present() -> None:
    readme = _render(
        project_name="project-name",
        features="",
        tech_stack="",
        structure="",
        commands=GENERIC_COMMANDS,
    )

    for title in SECTION_ORDER:
        assert f"## {title}" in readme
    assert readme.count("Follow project-specific instructions") == 5


def test_clone_url_defaults_to_placeholder() -> None:
    assert "git clone [repository_url]" in _render()
    assert "git clone https://github.com/acme/widget" in _render(
        clone_url="https://github.com/acme/widget"
    )


def test_issues_link_is_rendered() -> None:
    readme = _render()

    assert "Found a bug? Open an issue at:\nhttps://github.com/acme/widget/issues" in readme


def test_render_file_tree_keeps_input_order() -> None:
    tree = render_file_tree(entries("src/", "src/index.ts", "package.json"))

    assert tree == "|── src\n|── src/index.ts\n|── package.json"


def test_render_file_tree_empty() -> None:
    assert render_file_tree([]) == ""
