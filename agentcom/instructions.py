"""Agent instruction and memory file definitions, rendering and writing."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional


@dataclass(frozen=True)
class InstructionFileDefinition:
    """Where and how an agent tool expects its project instructions."""

    agent_id: str
    file_name: str
    relative_path: str
    format: str
    aliases: tuple[str, ...] = field(default_factory=tuple)
    supports_memory: bool = False
    memory_file_name: str = ""
    memory_relative_path: str = ""

    def matches(self, agent_id: str) -> bool:
        """Whether the given id names this agent directly or through an alias."""
        return agent_id == self.agent_id or agent_id in self.aliases


INSTRUCTION_FILE_DEFINITIONS: tuple[InstructionFileDefinition, ...] = (
    InstructionFileDefinition("claude", "CLAUDE.md", "CLAUDE.md", "markdown", aliases=("claude-code",)),
    InstructionFileDefinition(
        "codex",
        "AGENTS.md",
        "AGENTS.md",
        "markdown",
        supports_memory=True,
        memory_file_name="MEMORY.md",
        memory_relative_path=os.path.join(".agents", "MEMORY.md"),
    ),
    InstructionFileDefinition("gemini", "GEMINI.md", "GEMINI.md", "markdown", aliases=("gemini-cli",)),
    InstructionFileDefinition("cursor", "agentcom.mdc", os.path.join(".cursor", "rules", "agentcom.mdc"), "mdc"),
    InstructionFileDefinition(
        "github-copilot",
        "copilot-instructions.md",
        os.path.join(".github", "copilot-instructions.md"),
        "markdown",
    ),
    InstructionFileDefinition("windsurf", ".windsurfrules", ".windsurfrules", "markdown"),
    InstructionFileDefinition("cline", ".clinerules", ".clinerules", "markdown"),
    InstructionFileDefinition("roo-code", ".roorules", ".roorules", "markdown"),
    InstructionFileDefinition("amazon-q", "agentcom.md", os.path.join(".amazonq", "rules", "agentcom.md"), "markdown"),
    InstructionFileDefinition(
        "augment-code", "agentcom.md", os.path.join(".augment", "rules", "agentcom.md"), "markdown"
    ),
    InstructionFileDefinition("continue", "agentcom.md", os.path.join(".continue", "rules", "agentcom.md"), "markdown"),
    InstructionFileDefinition("kilo-code", "agentcom.md", os.path.join(".kilocode", "rules", "agentcom.md"), "markdown"),
    InstructionFileDefinition("trae", "project_rules.md", os.path.join(".trae", "project_rules.md"), "markdown"),
    InstructionFileDefinition("goose", ".goosehints", ".goosehints", "markdown"),
    InstructionFileDefinition("opencode", "AGENTS.md", "AGENTS.md", "markdown"),
    InstructionFileDefinition("amp", "AGENTS.md", "AGENTS.md", "markdown"),
    InstructionFileDefinition("devin", "AGENTS.md", "AGENTS.md", "markdown"),
    InstructionFileDefinition("aider", "CONVENTIONS.md", "CONVENTIONS.md", "markdown"),
    InstructionFileDefinition(
        "universal",
        "AGENTS.md",
        "AGENTS.md",
        "markdown",
        supports_memory=True,
        memory_file_name="MEMORY.md",
        memory_relative_path=os.path.join(".agentcom", "MEMORY.md"),
    ),
)

# Priority tiers, highest first; agents in no tier sort after all of them.
_PRIORITY_TIERS: tuple[frozenset[str], ...] = (
    frozenset(
        {
            "claude",
            "codex",
            "gemini",
            "cursor",
            "github-copilot",
            "windsurf",
            "cline",
            "roo-code",
            "amazon-q",
            "augment-code",
            "continue",
            "kilo-code",
            "trae",
            "goose",
        }
    ),
)


def find_instruction_definition(agent_id: str) -> Optional[InstructionFileDefinition]:
    """Return the definition for an agent id or alias, or None."""
    return next((d for d in INSTRUCTION_FILE_DEFINITIONS if d.matches(agent_id)), None)


def _require_definition(agent_id: str) -> InstructionFileDefinition:
    definition = find_instruction_definition(agent_id)
    if definition is None:
        raise ValueError(f"unsupported instruction agent {agent_id!r}")
    return definition


def resolve_instruction_agents(raw: str) -> list[str]:
    """Turn a comma-separated selection (or ``all``) into canonical agent ids."""
    value = raw.strip()
    if not value:
        return []
    if value == "all":
        return [d.agent_id for d in INSTRUCTION_FILE_DEFINITIONS if d.agent_id != "universal"]

    agents: list[str] = []
    for part in value.split(","):
        name = part.strip()
        if not name:
            continue
        definition = find_instruction_definition(name)
        if definition is None:
            raise ValueError(f"invalid agent {name!r}")
        if definition.agent_id not in agents:
            agents.append(definition.agent_id)
    return agents


def instruction_priority(agent_id: str) -> int:
    """Sort key placing the common agent tools ahead of the rest."""
    for tier, members in enumerate(_PRIORITY_TIERS):
        if agent_id in members:
            return tier
    return len(_PRIORITY_TIERS)


def instruction_workflow_body(project_name: str) -> str:
    """Return the shared agentcom workflow bullet list."""
    if not project_name.strip():
        project_name = "this project"
    quoted = json.dumps(project_name, ensure_ascii=False)
    return "\n".join(
        [
            f"- Work inside {quoted} and keep instructions aligned with the current repository state.",
            "- Run `agentcom init` once per machine to create the local SQLite database and socket directories.",
            "- Register each long-running agent session with `agentcom register --name <name> --type <type>`.",
            "- Send direct messages with `agentcom send --from <sender> <target> <message-or-json>`.",
            "- Broadcast updates with `agentcom broadcast --from <sender> <message-or-json>`.",
            "- Create and delegate tasks with `agentcom task create` and `agentcom task delegate`.",
            "- Check inbox and system status with `agentcom inbox` and `agentcom status`.",
            "- Start MCP mode with `agentcom mcp-server` for tool-based integrations.",
        ]
    )


def render_instruction_content(agent_id: str, project_name: str) -> str:
    """Render the instruction file text for one agent tool."""
    definition = _require_definition(agent_id)
    common = (
        f"# {definition.file_name}\n\n"
        "## agentcom Workflow\n\n"
        f"{instruction_workflow_body(project_name)}\n\n"
        "## Recommended Conventions\n\n"
        "- Use stable agent names per worktree or terminal session.\n"
        "- Keep one registered process per agent name.\n"
        "- Prefer JSON payloads for structured messages between agents.\n"
        "- Deregister agents cleanly on shutdown, or let `register` auto-clean up on signal.\n"
    ).strip()

    if definition.format == "mdc":
        return f"---\ndescription: agentcom workflow instructions\nalwaysApply: true\n---\n\n{common}\n"
    if definition.format == "markdown":
        return common + "\n"
    raise ValueError(f"unsupported instruction format {definition.format!r}")


def render_memory_content(agent_id: str) -> str:
    """Render the memory file text for an agent that supports one."""
    definition = _require_definition(agent_id)
    if not definition.supports_memory:
        raise ValueError(f"agent {agent_id!r} does not support memory files")
    return (
        f"# {definition.memory_file_name}\n\n"
        "## Current State\n\n"
        "- Track the current phase, active branch, and the next concrete action.\n\n"
        "## Completed Work\n\n"
        "- Record finished tasks with enough detail to resume safely in a later session.\n\n"
        "## Decisions\n\n"
        "- Capture each important decision with the reason it was made.\n\n"
        "## Open Issues\n\n"
        "- Keep unresolved bugs, blockers, or follow-up questions here.\n\n"
        "## Next Session\n\n"
        "- Leave the exact starting point for the next agent session.\n"
    )


def write_instruction_file(path: str | os.PathLike[str], content: str) -> None:
    """Write a new file, creating parent directories; refuse to overwrite."""
    target = Path(path)
    if target.exists():
        raise FileExistsError(f"instruction file already exists: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


def write_agent_instructions(project_dir: str | os.PathLike[str], agent_ids: Iterable[str]) -> list[str]:
    """Write instruction files for the given agents and return their sorted paths."""
    project_dir = os.fspath(project_dir)
    project_name = os.path.basename(os.path.normpath(project_dir))
    generated: list[str] = []
    seen_agents: set[str] = set()
    seen_paths: set[str] = set()

    for agent_id in agent_ids:
        definition = _require_definition(agent_id)
        if definition.agent_id in seen_agents:
            continue
        seen_agents.add(definition.agent_id)

        content = render_instruction_content(definition.agent_id, project_name)
        path = os.path.join(project_dir, definition.relative_path)
        if path in seen_paths:
            continue
        write_instruction_file(path, content)
        seen_paths.add(path)
        generated.append(path)

    return sorted(generated)


def write_agent_memory_files(project_dir: str | os.PathLike[str], agent_ids: Iterable[str]) -> list[str]:
    """Write memory files for agents that support them and return their sorted paths."""
    project_dir = os.fspath(project_dir)
    generated: list[str] = []
    seen: set[str] = set()

    for agent_id in agent_ids:
        definition = _require_definition(agent_id)
        if not definition.supports_memory or definition.memory_relative_path in seen:
            continue
        seen.add(definition.memory_relative_path)

        content = render_memory_content(definition.agent_id)
        path = os.path.join(project_dir, definition.memory_relative_path)
        write_instruction_file(path, content)
        generated.append(path)

    return sorted(generated)


def write_project_agents_md(path: str | os.PathLike[str]) -> None:
    """Write AGENTS.md at the given path inside its project directory."""
    path = os.fspath(path)
    generated = write_agent_instructions(os.path.dirname(path), ["codex"])
    if generated != [path]:
        raise ValueError(f"unexpected AGENTS.md path {', '.join(generated)!r}")