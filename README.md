# agentcom

A library for setting up projects in which several AI coding agents work side
by side. It writes per-agent instruction and memory files, describes
multi-agent team templates and renders their scaffold files, and offers small
helpers for message payloads, capability lists and heartbeat timestamps.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Instruction and memory files

`agentcom.instructions` knows where each supported agent tool reads its project
instructions (`CLAUDE.md`, `AGENTS.md`, `GEMINI.md`,
`.cursor/rules/agentcom.mdc`, `.github/copilot-instructions.md`, and more),
listed in `INSTRUCTION_FILE_DEFINITIONS` as `InstructionFileDefinition` records.

```python
from agentcom.instructions import (
    resolve_instruction_agents,
    write_agent_instructions,
    write_agent_memory_files,
)

agents = resolve_instruction_agents("claude,codex")   # or "all"
paths = write_agent_instructions("/path/to/project", agents)
memory = write_agent_memory_files("/path/to/project", agents)
```

- `find_instruction_definition` looks an agent up by id or alias
  (`claude-code`, `gemini-cli`) and returns `None` when it is unknown.
- `resolve_instruction_agents` raises `ValueError` for an unknown agent and
  drops duplicates.
- `render_instruction_content` and `render_memory_content` return the file text
  without writing it; `.mdc` files get a front-matter header.
- Agents that share a file (for example `codex`, `opencode`, `amp` and `devin`
  all use `AGENTS.md`) produce it once.
- Existing files are never overwritten: `FileExistsError` is raised instead.
- `write_project_agents_md(path)` writes `AGENTS.md` at the given path.

## Team templates

`agentcom.templates` holds two built-in templates, `company` and
`oh-my-opencode`, each with six roles: frontend, backend, plan, review,
architect and design.

```python
from agentcom.templates import (
    builtin_template_definitions,
    filter_template_summaries,
    format_template_definition,
    list_template_summaries,
    resolve_template_definition,
)

definition = resolve_template_definition("company", builtin_template_definitions())
print(format_template_definition(definition))

summaries = filter_template_summaries(list_template_summaries(), "open")
```

`resolve_template_definition` raises `ValueError` naming the available
templates when the name is unknown. `select_template_summary(summaries,
reader, writer)` runs a small text prompt: a search query, then a numbered
choice, returning the chosen template's name.

## Scaffold files

`agentcom.scaffold` renders the pieces of a template scaffold:

- `render_template_manifest` – the `template.json` text (the common body is
  left out of it);
- `render_template_common_content` – the `COMMON.md` text;
- `render_agentcom_shared_skill_content` – the shared agentcom skill;
- `render_role_skill_content` – a `SKILL.md` for one role, named with
  `template_role_skill_name`;
- `write_scaffold_file` – writes a new file, refusing to overwrite one.

`delete_custom_template(project_dir, name, reader, writer, json_output=False)`
removes `.agentcom/templates/<name>` after asking for `y` or `yes`; built-in
templates cannot be deleted.

## Init options

`agentcom.initopts` helps a front end build the init choices:
`consume_init_optional_values` gives bare `--agents-md` / `--template` flags
their value from the next argument, and `init_template_options` and
`init_instruction_options` return the choice lists for templates and agent
tools.

## Parsing helpers

- `agentcom.parsing.build_payload` returns text that already is JSON unchanged
  (raising `ValueError` if it is not valid) and wraps anything else as
  `{"text": ...}`.
- `parse_capabilities` and `split_csv_values` split comma-separated lists,
  trimming items and dropping empty ones.
- `parse_timestamp` reads RFC 3339 and `YYYY-MM-DD HH:MM:SS` timestamps into
  UTC datetimes; `heartbeat_verdict` returns `Verdict.OK`, `Verdict.STALE`
  (heartbeat older than 30 seconds) or `Verdict.DEAD`.

## What this package does not do

It is a library only. It has no command-line program, does not register agents
or keep them in a database, does not send, store or deliver messages or tasks,
and does not check whether a process is running: `heartbeat_verdict` expects
the caller to say whether the agent's process is alive.