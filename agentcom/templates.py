"""Built-in agent team templates and helpers to list, search and show them."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, TextIO


@dataclass
class TemplateRole:
    """One role of a team template and the agent that fills it."""

    name: str
    description: str
    agent_name: str
    agent_type: str
    communicates_with: list[str] = field(default_factory=list)
    responsibilities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the role in its manifest form."""
        return {
            "name": self.name,
            "description": self.description,
            "agent_name": self.agent_name,
            "agent_type": self.agent_type,
            "communicates_with": list(self.communicates_with),
            "responsibilities": list(self.responsibilities),
        }


@dataclass
class TemplateSummary:
    """Short listing form of a template."""

    name: str
    description: str
    roles: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the summary as a JSON-ready mapping."""
        return {"name": self.name, "description": self.description, "roles": list(self.roles)}


@dataclass
class TemplateDefinition:
    """A team template: shared instructions and a set of roles."""

    name: str
    description: str
    reference: str
    common_title: str
    common_body: str = ""
    roles: list[TemplateRole] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the manifest form; the common body is kept out of it."""
        return {
            "name": self.name,
            "description": self.description,
            "reference": self.reference,
            "common_title": self.common_title,
            "roles": [role.to_dict() for role in self.roles],
        }

    def summary(self) -> TemplateSummary:
        """Return the listing form of this template."""
        return TemplateSummary(
            name=self.name,
            description=self.description,
            roles=[role.name for role in self.roles],
        )


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


_COMMUNICATION_MAP: dict[str, tuple[str, ...]] = {
    "frontend": ("design", "backend", "review", "architect"),
    "backend": ("frontend", "architect", "review", "plan"),
    "plan": ("architect", "frontend", "backend", "design", "review"),
    "review": ("frontend", "backend", "architect", "plan"),
    "architect": ("plan", "frontend", "backend", "design", "review"),
    "design": ("plan", "frontend", "architect", "review"),
}


def _role(
    name: str, description: str, agent_name: str, agent_type: str, responsibilities: Sequence[str]
) -> TemplateRole:
    return TemplateRole(
        name=name,
        description=description,
        agent_name=agent_name,
        agent_type=agent_type,
        communicates_with=list(_COMMUNICATION_MAP[name]),
        responsibilities=list(responsibilities),
    )


_COMPANY_BODY = "\n".join(
    [
        "Use this template when a small product team needs clear functional ownership.",
        "",
        "- Keep agent names stable across sessions.",
        "- Register each active role with `agentcom register --name <name> --type <type>` "
        "before starting collaboration.",
        "- Prefer direct role-to-role communication for execution details, "
        "and keep planning updates visible to the planning role.",
        "- Store structured payloads as JSON so review and architect can audit decisions.",
        "- This template is inspired by Paperclip's company/org model, but uses six delivery-focused "
        "roles: frontend, backend, plan, review, architect, and design.",
    ]
)

_OH_MY_OPENCODE_BODY = "\n".join(
    [
        "Use this template when you want a planning-heavy workflow inspired by Oh-My-OpenCode.",
        "",
        "- Keep the planner, reviewer, and architect roles distinct from implementation roles.",
        "- Use `agentcom send` for targeted messages and `agentcom task` for explicit handoffs.",
        "- Treat role skills as execution guidance layered on top of the shared agentcom workflow.",
        "- This template references official Oh-My-OpenCode agent patterns such as Prometheus (planning), "
        "Momus (review), Oracle (architecture), and Sisyphus-Junior style execution specialists.",
    ]
)


def builtin_template_definitions() -> list[TemplateDefinition]:
    """Return fresh copies of the built-in templates."""
    return [
        TemplateDefinition(
            name="company",
            description="Company-style multi-agent template inspired by Paperclip org roles.",
            reference="paperclip",
            common_title="Company Template Common Instructions",
            common_body=_COMPANY_BODY,
            roles=[
                _role(
                    "frontend",
                    "Frontend implementation specialist for UI delivery, design handoff, and agentcom coordination.",
                    "frontend",
                    "engineer-frontend",
                    [
                        "Implement UI work from design direction.",
                        "Coordinate API contracts with backend.",
                        "Send review-ready updates with file and state summaries.",
                    ],
                ),
                _role(
                    "backend",
                    "Backend implementation specialist for APIs, data flows, and agentcom coordination.",
                    "backend",
                    "engineer-backend",
                    [
                        "Implement services, schemas, and interfaces.",
                        "Confirm payload contracts with frontend.",
                        "Escalate system risks and migration needs to architect and plan.",
                    ],
                ),
                _role(
                    "plan",
                    "Planning specialist for breaking work into milestones, sequencing tasks, "
                    "and routing updates through agentcom.",
                    "plan",
                    "pm",
                    [
                        "Turn requests into deliverable task breakdowns.",
                        "Coordinate handoffs between execution roles.",
                        "Track blockers and completion signals across the team.",
                    ],
                ),
                _role(
                    "review",
                    "Review specialist for QA, regression checks, and cross-role feedback loops using agentcom.",
                    "review",
                    "qa",
                    [
                        "Review delivered changes for correctness and risk.",
                        "Request missing context from frontend, backend, or architect.",
                        "Report approval status and follow-up tasks back to plan.",
                    ],
                ),
                _role(
                    "architect",
                    "Architecture specialist for system boundaries, design reviews, and escalations via agentcom.",
                    "architect",
                    "cto",
                    [
                        "Define system-level constraints and interfaces.",
                        "Review cross-cutting tradeoffs before implementation expands.",
                        "Advise plan and review on architectural risk.",
                    ],
                ),
                _role(
                    "design",
                    "Design specialist for UX direction, handoff quality, and collaboration through agentcom.",
                    "design",
                    "designer",
                    [
                        "Produce UI intent, states, and interaction direction.",
                        "Resolve ambiguities with frontend and architect.",
                        "Support review with expected behavior and acceptance notes.",
                    ],
                ),
            ],
        ),
        TemplateDefinition(
            name="oh-my-opencode",
            description="Oh-My-OpenCode-inspired template with planner, reviewer, architect, "
            "and execution specialists.",
            reference="oh-my-opencode",
            common_title="Oh-My-OpenCode Template Common Instructions",
            common_body=_OH_MY_OPENCODE_BODY,
            roles=[
                _role(
                    "frontend",
                    "Frontend execution specialist aligned with visual-engineering style delivery "
                    "and agentcom handoffs.",
                    "sisyphus-junior-frontend",
                    "sisyphus-junior/visual-engineering",
                    [
                        "Execute UI work after plan or design handoff.",
                        "Sync API assumptions with backend and architect.",
                        "Return review-ready updates with concrete verification notes.",
                    ],
                ),
                _role(
                    "backend",
                    "Backend execution specialist aligned with Sisyphus-Junior implementation work "
                    "and agentcom handoffs.",
                    "sisyphus-junior-backend",
                    "sisyphus-junior/unspecified-high",
                    [
                        "Execute service and data-layer changes after planning.",
                        "Confirm interfaces with frontend and architect.",
                        "Report verification details back to review and plan.",
                    ],
                ),
                _role(
                    "plan",
                    "Planner specialist modeled after Prometheus for decomposition, sequencing, "
                    "and agentcom task routing.",
                    "prometheus",
                    "planner",
                    [
                        "Create the initial execution plan and handoff order.",
                        "Coordinate dependencies between specialists.",
                        "Request architectural or review input before major expansions.",
                    ],
                ),
                _role(
                    "review",
                    "Review specialist modeled after Momus for QA, gap detection, and agentcom feedback loops.",
                    "momus",
                    "reviewer",
                    [
                        "Check whether work matches the plan and acceptance bar.",
                        "Request missing evidence from execution roles.",
                        "Send concise approval or follow-up tasks back through plan.",
                    ],
                ),
                _role(
                    "architect",
                    "Architecture specialist modeled after Oracle for read-mostly system guidance "
                    "and escalation handling.",
                    "oracle",
                    "architect",
                    [
                        "Advise on system boundaries and risky tradeoffs.",
                        "Unblock plan when implementation paths diverge.",
                        "Provide stable interface guidance to frontend and backend.",
                    ],
                ),
                _role(
                    "design",
                    "Design execution specialist aligned with visual-engineering style work "
                    "and agentcom collaboration.",
                    "sisyphus-junior-design",
                    "sisyphus-junior/visual-engineering",
                    [
                        "Translate product intent into design-ready direction.",
                        "Align closely with frontend on final handoff quality.",
                        "Provide expected UX outcomes to review and architect.",
                    ],
                ),
            ],
        ),
    ]


def list_template_summaries(
    definitions: Optional[Iterable[TemplateDefinition]] = None,
) -> list[TemplateSummary]:
    """Summarise the given templates, or the built-in ones when none are given."""
    if definitions is None:
        definitions = builtin_template_definitions()
    return [definition.summary() for definition in definitions]


def filter_template_summaries(summaries: Sequence[TemplateSummary], query: str) -> list[TemplateSummary]:
    """Keep summaries whose name, description or role names contain the lower-case query."""
    if not query:
        return list(summaries)

    def haystack(summary: TemplateSummary) -> str:
        return f"{summary.name} {summary.description} {' '.join(summary.roles)}".lower()

    return [summary for summary in summaries if query in haystack(summary)]


def resolve_template_definition(
    name: str, definitions: Optional[Iterable[TemplateDefinition]] = None
) -> TemplateDefinition:
    """Find a template by name among the given (or built-in) templates."""
    candidates = list(builtin_template_definitions() if definitions is None else definitions)
    for definition in candidates:
        if definition.name == name:
            return definition
    available = ", ".join(sorted(d.name for d in candidates))
    raise ValueError(f"unknown template {_quote(name)}: must be one of {available}")


_INTEGER = re.compile(r"[+-]?[0-9]+")


def select_template_summary(summaries: Sequence[TemplateSummary], reader: TextIO, writer: TextIO) -> str:
    """Ask for a search query and a number, and return the chosen template's name."""
    writer.write("Search templates (blank for all): ")
    query = reader.readline().lower().strip()

    filtered = filter_template_summaries(summaries, query)
    if not filtered:
        raise ValueError(f"no templates matched {_quote(query)}")

    for number, summary in enumerate(filtered, start=1):
        writer.write(f"{number}. {summary.name} - {summary.description}\n")
    writer.write("Select template number: ")
    selection = reader.readline().strip()

    if not _INTEGER.fullmatch(selection) or not 1 <= int(selection) <= len(filtered):
        raise ValueError(f"invalid selection {_quote(selection)}")
    return filtered[int(selection) - 1].name


def format_template_definition(definition: TemplateDefinition) -> str:
    """Render a template as human-readable text."""
    lines = [
        definition.name,
        definition.description,
        f"reference: {definition.reference}",
    ]
    lines.extend(
        f"- {role.name} ({role.agent_name}): talks to {', '.join(role.communicates_with)}"
        for role in definition.roles
    )
    return "\n".join(lines) + "\n"