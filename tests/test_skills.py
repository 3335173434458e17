import pytest

from echoagent.builtin_tools import AddTool, ThinkTool
from echoagent.skills import Skill, SkillInfo, SkillManager


class _DemoSkill(Skill):
    name = "demo"
    description = "demo skill"

    def tools(self):
        return [AddTool(), ThinkTool()]

    def system_prompt_injection(self):
        return "use add"


class _PlainSkill(Skill):
    name = "plain"
    description = "no prompt"

    def tools(self):
        return []


def test_skill_cannot_be_instantiated_without_tools():
    with pytest.raises(TypeError):
        Skill()


def test_default_prompt_injection_is_none():
    assert Skill.system_prompt_injection(_PlainSkill()) is None


def test_info_collects_tool_names_and_prompt_flag():
    info = Skill.info(_DemoSkill())
    assert info.name == "demo"
    assert info.description == "demo skill"
    assert info.tool_names == [AddTool.name, ThinkTool.name]
    assert info.has_prompt_injection is True


def test_info_without_prompt_or_tools():
    info = Skill.info(_PlainSkill())
    assert info.tool_names == []
    assert info.has_prompt_injection is False


def test_tools_returns_fresh_instances():
    skill = _DemoSkill()
    first_info, second_info = Skill.info(skill), Skill.info(skill)
    assert first_info.tool_names == second_info.tool_names
    first, second = skill.tools(), skill.tools()
    assert [t.name for t in first] == first_info.tool_names
    assert all(a is not b for a, b in zip(first, second))


def test_empty_manager():
    manager = SkillManager()
    assert manager.count() == 0
    assert manager.list() == []
    assert manager.get("demo") is None
    assert not manager.is_installed("demo")


def test_record_and_query():
    manager = SkillManager()
    manager.record(_DemoSkill().info())
    assert manager.is_installed("demo")
    assert manager.count() == 1
    assert manager.get("demo").tool_names == [AddTool.name, ThinkTool.name]
    assert "demo" in manager
    assert len(manager) == 1


def test_list_is_sorted_by_name():
    manager = SkillManager()
    for name in ["zeta", "alpha", "mid"]:
        manager.record(SkillInfo(name=name, description=name))
    assert [info.name for info in manager.list()] == ["alpha", "mid", "zeta"]


def test_record_replaces_same_name():
    manager = SkillManager()
    manager.record(SkillInfo(name="demo", description="old"))
    manager.record(SkillInfo(name="demo", description="new"))
    assert manager.count() == 1
    assert manager.get("demo").description == "new"