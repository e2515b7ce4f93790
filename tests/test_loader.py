"""Tests for agent metadata loading and configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from handoff.config import HandoffConfig, load_config
from handoff.errors import AgentNotFoundError, ConfigError, MetadataError
from handoff.graph import (
    Resolver,
    Validator,
    build_dependency_graph,
    load_agent_metas,
    load_dependency_graph,
)
from handoff.models import AgentRole
from handoff.delegation import SkillContext


@pytest.fixture
def agents_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "agents"
    directory.mkdir()
    (directory / "lead.yaml").write_text(
        "name: lead\n"
        "description: Plans the work\n"
        "model: opus\n"
        "skills: [planning]\n"
        "tools: [Read, Grep]\n"
        "dependencies: [dev]\n"
    )
    (directory / "dev.yml").write_text(
        "name: dev\n"
        "model: sonnet\n"
        "dependencies:\n"
        "  - tester\n"
    )
    (directory / "tester.md").write_text(
        "---\n"
        "model: haiku\n"
        "tools:\n"
        "  Bash: true\n"
        "  Write: false\n"
        "---\n"
        "\n"
        "Runs the test suite.\n"
    )
    (directory / "notes.txt").write_text("not an agent")
    return directory


# ═══════════════════════════════════════════════════════════════════════════
# LOADER
# ═══════════════════════════════════════════════════════════════════════════


class TestLoadAgentMetas:
    def test_loads_yaml_and_markdown(self, agents_dir: Path):
        metas = load_agent_metas(agents_dir)

        assert set(metas) == {"lead", "dev", "tester"}
        lead = metas["lead"]
        assert lead.description == "Plans the work"
        assert lead.model == "opus"
        assert lead.skills == ("planning",)
        assert lead.tools == frozenset({"Read", "Grep"})
        assert lead.dependencies == ("dev",)
        assert lead.file_path.endswith("lead.yaml")

    def test_markdown_name_falls_back_to_stem(self, agents_dir: Path):
        tester = load_agent_metas(agents_dir)["tester"]

        assert tester.model == "haiku"
        assert tester.tools == frozenset({"Bash"})
        assert tester.content == "Runs the test suite."

    def test_markdown_without_front_matter(self, tmp_path: Path):
        (tmp_path / "scribe.md").write_text("Just prose.\n")
        scribe = load_agent_metas(tmp_path)["scribe"]
        assert scribe.content == "Just prose."
        assert scribe.dependencies == ()

    def test_yaml_requires_name(self, tmp_path: Path):
        (tmp_path / "nameless.yaml").write_text("model: opus\n")
        with pytest.raises(MetadataError, match="name is required"):
            load_agent_metas(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path):
        (tmp_path / "broken.yaml").write_text("name: [unclosed\n")
        with pytest.raises(MetadataError, match="broken.yaml"):
            load_agent_metas(tmp_path)

    def test_dependencies_must_be_a_list(self, tmp_path: Path):
        (tmp_path / "odd.yaml").write_text("name: odd\ndependencies: {a: 1}\n")
        with pytest.raises(MetadataError, match="dependencies"):
            load_agent_metas(tmp_path)

    def test_undecodable_file(self, tmp_path: Path):
        (tmp_path / "bad.yaml").write_bytes(b"name: caf\xe9\n")
        with pytest.raises(MetadataError, match="bad.yaml: cannot read file"):
            load_agent_metas(tmp_path)

    def test_undecodable_markdown(self, tmp_path: Path):
        (tmp_path / "bad.md").write_bytes(b"---\nname: caf\xe9\n---\n")
        with pytest.raises(MetadataError, match="bad.md"):
            load_agent_metas(tmp_path)

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(MetadataError, match="cannot read agents directory"):
            load_agent_metas(tmp_path / "nope")


class TestBuildDependencyGraph:
    def test_graph_from_directory(self, agents_dir: Path):
        graph = load_dependency_graph(agents_dir)

        assert len(graph) == 3
        assert graph.adjacency("lead") == ["dev"]
        assert Resolver(graph).resolve_dependencies(["lead"]) == ["lead", "dev", "tester"]
        assert Resolver(graph).load_order() == ["tester", "dev", "lead"]
        Validator(graph).validate()

    def test_dangling_dependency_left_for_validator(self, agents_dir: Path):
        metas = load_agent_metas(agents_dir)
        del metas["tester"]

        graph = build_dependency_graph(metas)

        assert graph.adjacency("dev") == ["tester"]
        with pytest.raises(AgentNotFoundError, match="tester"):
            Validator(graph).validate()


# ═══════════════════════════════════════════════════════════════════════════
# CONFIG
# ═══════════════════════════════════════════════════════════════════════════


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "missing.yaml")

        assert isinstance(config, HandoffConfig)
        assert config.skills == []
        assert config.log_level == "WARNING"
        assert config.agents_dir.name == "agents"

    def test_reads_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "agents_dir: my-agents\n"
            "log_level: debug\n"
            "skills:\n"
            "  - name: go-code\n"
            "    triggers: [go, golang]\n"
            "  - name: reviewing\n"
            "    triggers: [review]\n"
        )
        config = load_config(path)

        assert config.agents_dir == tmp_path / "my-agents"
        assert config.log_level == "DEBUG"
        assert [s.name for s in config.skills] == ["go-code", "reviewing"]

        matcher = config.skill_matcher()
        context = SkillContext(role=AgentRole.REVIEWER, metadata={"language": "golang"})
        assert matcher.match_for_context(context) == ["go-code", "reviewing"]

    def test_absolute_agents_dir_kept(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(f"agents_dir: {tmp_path / 'elsewhere'}\n")
        assert load_config(path).agents_dir == tmp_path / "elsewhere"

    def test_invalid_log_level(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: loud\n")
        with pytest.raises(ConfigError, match="invalid configuration"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("skills: [\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path).skills == []
