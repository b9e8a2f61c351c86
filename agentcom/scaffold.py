"""Render and write the files that make up a template scaffold."""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Iterable, TextIO

from agentcom.templates import (
    TemplateDefinition,
    TemplateRole,
    builtin_template_definitions,
)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode_json(value: object) -> str:
    """Encode with two-space indentation, escaping HTML-sensitive characters."""
    text = json.dumps(value, indent=2, ensure_ascii=False)
    for raw, escaped in _HTML_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text


def _title_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def render_template_manifest(definition: TemplateDefinition) -> str:
    """Return the template.json text for a template."""
    return _encode_json(definition.to_dict()) + "\n"


def render_template_common_content(definition: TemplateDefinition) -> str:
    """Return the COMMON.md text for a template."""
    return f"# {definition.common_title}\n\n{definition.common_body}\n"


def render_agentcom_shared_skill_content() -> str:
    """Return the shared agentcom skill that role skills build on."""
    return (
        "---\n"
        "name: agentcom\n"
        "description: Shared agentcom skill instructions for generated template roles\n"
        "---\n"
        "\n"
        "# Agentcom\n"
        "\n"
        "- Use this shared skill as the common base for generated agentcom template role skills.\n"
        "- Coordinate with `agentcom send`, `agentcom inbox`, `agentcom task create`, "
        "and `agentcom task delegate`.\n"
        "- Read the role-specific skill under this directory for template and responsibility details.\n"
    )


def render_responsibilities(items: Iterable[str]) -> str:
    """Render responsibilities as a markdown bullet list."""
    return "\n".join(f"- {item}" for item in items)


def template_role_skill_name(template_name: str, role_name: str) -> str:
    """Return the generated skill name for one role of a template."""
    return f"{template_name}-{role_name}"


def render_role_skill_content(
    definition: TemplateDefinition,
    role: TemplateRole,
    generated_skill_name: str,
    common_path: str,
) -> str:
    """Return the SKILL.md text for one role of a template."""
    body_title = _title_words(generated_skill_name.replace("-", " "))
    return (
        "---\n"
        f"name: {generated_skill_name}\n"
        f"description: {role.description}\n"
        "---\n"
        "\n"
        f"# {body_title}\n"
        "\n"
        "- Read shared agentcom instructions first: `../SKILL.md`\n"
        f"- Read common instructions first: `{common_path}`\n"
        f"- Template: `{definition.name}` (`{definition.reference}`)\n"
        f"- Agent identity: `{role.agent_name}` / type `{role.agent_type}`\n"
        "\n"
        "## Responsibilities\n"
        "\n"
        f"{render_responsibilities(role.responsibilities)}\n"
        "\n"
        "## Communication\n"
        "\n"
        f"- Primary contacts: {', '.join(role.communicates_with)}\n"
        "- Use `agentcom send --from <sender> <target> <message-or-json>` for direct coordination.\n"
        "- Use `agentcom task create`, `agentcom task delegate`, and `agentcom inbox --agent <name>` "
        "to coordinate handoffs.\n"
        "- Escalate blockers to `plan` and `architect` when requirements or system boundaries change.\n"
    )


def write_scaffold_file(path: str | os.PathLike[str], content: str) -> None:
    """Write a new scaffold file, creating parent directories; refuse to overwrite."""
    target = Path(path)
    if target.exists():
        raise FileExistsError(f"file already exists: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


def delete_custom_template(
    project_dir: str | os.PathLike[str],
    name: str,
    reader: TextIO,
    writer: TextIO,
    json_output: bool = False,
) -> str:
    """Delete a custom template directory after confirmation and return its path.

    Built-in templates cannot be deleted. Without JSON output the user is asked
    to confirm; anything but ``y`` or ``yes`` cancels the deletion.
    """
    if any(definition.name == name for definition in builtin_template_definitions()):
        raise ValueError(f"cannot delete built-in template {json.dumps(name)}")

    template_path = os.path.join(os.fspath(project_dir), ".agentcom", "templates", name)
    if not os.path.exists(template_path):
        raise FileNotFoundError(f"custom template {json.dumps(name)} not found")

    if not json_output:
        writer.write(f"Delete custom template {name}? [y/N]: ")
        response = reader.readline().strip().lower()
        if response not in ("y", "yes"):
            raise ValueError("delete cancelled")

    if os.path.isdir(template_path) and not os.path.islink(template_path):
        shutil.rmtree(template_path)
    else:
        os.remove(template_path)

    if json_output:
        writer.write(_encode_json({"deleted": name, "path": template_path}) + "\n")
    else:
        writer.write(f"deleted custom template {name}\n")
    return template_path