"""Option handling for the init command: flag values and wizard choices."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from agentcom.instructions import INSTRUCTION_FILE_DEFINITIONS, instruction_priority
from agentcom.templates import TemplateDefinition, builtin_template_definitions

PROMPT_INSTRUCTION_SELECTION = "__prompt__"
PROMPT_TEMPLATE_SELECTION = "__prompt__"


def _title_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def _takes_value(remaining: Sequence[str]) -> bool:
    return bool(remaining) and not remaining[0].startswith("-")


def consume_init_optional_values(
    agents_value: str, template_value: str, args: Sequence[str]
) -> tuple[str, str, list[str]]:
    """Fill flags given without a value from the following positional arguments.

    ``--agents-md`` and ``--template`` may be given bare, in which case they hold
    the prompt marker; a following argument that is not a flag becomes their
    value. Returns the agents selection, the template selection and the
    arguments left over.
    """
    remaining = list(args)
    agents_selection = agents_value
    template_selection = template_value

    if agents_selection == PROMPT_INSTRUCTION_SELECTION and _takes_value(remaining):
        agents_selection = remaining.pop(0)
    if template_selection == PROMPT_TEMPLATE_SELECTION and _takes_value(remaining):
        template_selection = remaining.pop(0)

    return agents_selection, template_selection, remaining


def init_template_options(
    definitions: Optional[Iterable[TemplateDefinition]] = None,
) -> list[tuple[str, str]]:
    """Return ``(label, value)`` choices for the template step of the wizard."""
    if definitions is None:
        definitions = builtin_template_definitions()
    options = [("None", "none")]
    options.extend(
        (_title_words(definition.name.replace("-", " ")), definition.name) for definition in definitions
    )
    options.append(("Create custom template...", "custom"))
    return options


def init_instruction_options(selected: Iterable[str] = ()) -> list[tuple[str, str, bool]]:
    """Return ``(label, agent_id, preselected)`` choices for the agent tools step."""
    chosen = set(selected)
    definitions = sorted(INSTRUCTION_FILE_DEFINITIONS, key=lambda d: instruction_priority(d.agent_id))

    options: list[tuple[str, str, bool]] = []
    seen: set[str] = set()
    for definition in definitions:
        agent_id = definition.agent_id
        if agent_id == "universal" or agent_id in seen:
            continue
        seen.add(agent_id)
        label = _title_words(agent_id.replace("-", " "))
        options.append((label, agent_id, agent_id in chosen))
    return options