import io
import json

import pytest

from agentcom.templates import (
    TemplateDefinition,
    TemplateRole,
    TemplateSummary,
    builtin_template_definitions,
    filter_template_summaries,
    format_template_definition,
    list_template_summaries,
    resolve_template_definition,
    select_template_summary,
)


def _custom_template() -> TemplateDefinition:
    return TemplateDefinition(
        name="custom-team",
        description="Custom team template",
        reference="local",
        common_title="Custom Team Common Instructions",
        common_body="Coordinate through agentcom.",
        roles=[TemplateRole(name="planner", description="desc", agent_name="planner", agent_type="planner")],
    )


@pytest.mark.parametrize("name", ["company", "oh-my-opencode"])
def test_resolve_template_definition(name):
    definition = resolve_template_definition(name)
    assert definition.name == name
    assert len(definition.roles) == 6


def test_resolve_template_definition_missing():
    with pytest.raises(ValueError, match="unknown template"):
        resolve_template_definition("missing")


def test_resolve_missing_lists_available_sorted():
    with pytest.raises(ValueError) as excinfo:
        resolve_template_definition("missing", builtin_template_definitions() + [_custom_template()])
    assert "must be one of company, custom-team, oh-my-opencode" in str(excinfo.value)


def test_resolve_finds_custom_template():
    definitions = builtin_template_definitions() + [_custom_template()]
    assert resolve_template_definition("custom-team", definitions).reference == "local"


def test_to_dict_json_output():
    definition = resolve_template_definition("oh-my-opencode")
    decoded = json.loads(json.dumps(definition.to_dict(), indent=2))
    assert decoded["name"] == "oh-my-opencode"
    assert len(decoded["roles"]) == 6
    assert "common_body" not in decoded
    assert decoded["roles"][2]["agent_name"] == "prometheus"


def test_company_communication_map():
    definition = resolve_template_definition("company")
    frontend = definition.roles[0]
    assert frontend.name == "frontend"
    assert frontend.communicates_with == ["design", "backend", "review", "architect"]
    assert "frontend, backend, plan, review, architect, and design" in definition.common_body


def test_builtin_definitions_are_independent_copies():
    first = builtin_template_definitions()
    first[0].roles[0].communicates_with.append("extra")
    second = builtin_template_definitions()
    assert second[0].roles[0].communicates_with == ["design", "backend", "review", "architect"]


def test_summary_roles():
    summary = resolve_template_definition("company").summary()
    assert summary == TemplateSummary(
        name="company",
        description="Company-style multi-agent template inspired by Paperclip org roles.",
        roles=["frontend", "backend", "plan", "review", "architect", "design"],
    )


def test_list_includes_custom_templates():
    summaries = list_template_summaries(builtin_template_definitions() + [_custom_template()])
    assert [s.name for s in summaries] == ["company", "oh-my-opencode", "custom-team"]
    assert summaries[-1].roles == ["planner"]


def test_list_defaults_to_builtin():
    assert [s.name for s in list_template_summaries()] == ["company", "oh-my-opencode"]


def test_filter_blank_returns_all():
    summaries = list_template_summaries()
    assert filter_template_summaries(summaries, "") == summaries


def test_filter_matches_role_names():
    summaries = list_template_summaries(builtin_template_definitions() + [_custom_template()])
    assert [s.name for s in filter_template_summaries(summaries, "planner")] == ["oh-my-opencode", "custom-team"]
    assert filter_template_summaries(summaries, "nothing-here") == []


def test_interactive_selection():
    reader = io.StringIO("open\n1\n")
    writer = io.StringIO()
    selected = select_template_summary(list_template_summaries(), reader, writer)
    assert selected == "oh-my-opencode"

    text = writer.getvalue() + format_template_definition(resolve_template_definition(selected))
    assert "Search templates" in text
    assert "oh-my-opencode" in text
    assert "reference: oh-my-opencode" in text
    assert "company-style" not in text.lower()


def test_selection_no_match():
    with pytest.raises(ValueError, match="no templates matched"):
        select_template_summary(list_template_summaries(), io.StringIO("zzz\n1\n"), io.StringIO())


@pytest.mark.parametrize("choice", ["0", "3", "abc", ""])
def test_selection_invalid_number(choice):
    with pytest.raises(ValueError, match="invalid selection"):
        select_template_summary(list_template_summaries(), io.StringIO(f"\n{choice}\n"), io.StringIO())


def test_selection_blank_query_second():
    writer = io.StringIO()
    assert select_template_summary(list_template_summaries(), io.StringIO("\n2\n"), writer) == "oh-my-opencode"
    assert "1. company - " in writer.getvalue()


def test_format_template_definition():
    text = format_template_definition(resolve_template_definition("company"))
    lines = text.splitlines()
    assert lines[0] == "company"
    assert lines[2] == "reference: paperclip"
    assert lines[3] == "- frontend (frontend): talks to design, backend, review, architect"
    assert len(lines) == 9
    assert text.endswith("\n")