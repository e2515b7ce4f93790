"""Agent metadata loader.

Reads agent definitions from a directory and builds a DependencyGraph from
them. Two file formats are accepted:

- ``*.yaml`` / ``*.yml``: a mapping with ``name`` (required), ``description``,
  ``model``, ``color``, ``skills``, ``tools`` and ``dependencies``
- ``*.md``: the same keys as YAML front matter; the markdown body becomes
  ``content`` and a missing ``name`` falls back to the file stem
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from handoff.errors import MetadataError

from .deps import AgentMeta, DependencyGraph

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)

YAML_SUFFIXES = {".yaml", ".yml"}
MARKDOWN_SUFFIXES = {".md"}


def _string_list(value: Any, key: str, path: Path) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    raise MetadataError(f"{path.name}: '{key}' must be a list, got {type(value).__name__}")


def _tool_set(value: Any, path: Path) -> frozenset[str]:
    # Tools come either as a list of names or as a {name: enabled} mapping
    if isinstance(value, dict):
        return frozenset(str(name) for name, enabled in value.items() if enabled)
    return frozenset(_string_list(value, "tools", path))


def meta_from_mapping(data: dict[str, Any], path: Path, content: str = "") -> AgentMeta:
    """Build AgentMeta from parsed YAML data."""
    name = data.get("name")
    if not name:
        raise MetadataError(f"{path.name}: name is required")

    return AgentMeta(
        name=str(name),
        description=str(data.get("description") or ""),
        model=str(data.get("model") or ""),
        color=str(data.get("color") or ""),
        skills=_string_list(data.get("skills"), "skills", path),
        tools=_tool_set(data.get("tools"), path),
        dependencies=_string_list(data.get("dependencies"), "dependencies", path),
        content=content,
        file_path=str(path),
    )


def _load_yaml(text: str, path: Path) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MetadataError(f"{path.name}: invalid YAML: {e}") from e


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataError(f"{path.name}: cannot read file: {e}") from e


def parse_yaml_file(path: Path) -> AgentMeta:
    data = _load_yaml(_read_text(path), path)
    if not isinstance(data, dict):
        raise MetadataError(f"{path.name}: expected a mapping at top level")
    return meta_from_mapping(data, path)


def parse_markdown_file(path: Path) -> AgentMeta:
    text = _read_text(path)
    match = FRONTMATTER_PATTERN.match(text)
    if match:
        data = _load_yaml(match.group(1), path) or {}
        if not isinstance(data, dict):
            raise MetadataError(f"{path.name}: front matter must be a mapping")
        body = text[match.end():]
    else:
        data, body = {}, text

    data = dict(data)
    data.setdefault("name", path.stem)
    if not data["name"]:
        data["name"] = path.stem
    return meta_from_mapping(data, path, content=body.strip())


def load_agent_metas(directory: Path) -> dict[str, AgentMeta]:
    """Load every agent definition in a directory (non-recursive).

    Raises:
        MetadataError: the directory is unreadable or a file is malformed
    """
    try:
        entries = sorted(p for p in directory.iterdir() if p.is_file())
    except OSError as e:
        raise MetadataError(f"cannot read agents directory {directory}: {e}") from e

    metas: dict[str, AgentMeta] = {}
    for path in entries:
        suffix = path.suffix.lower()
        if suffix in YAML_SUFFIXES:
            meta = parse_yaml_file(path)
        elif suffix in MARKDOWN_SUFFIXES:
            meta = parse_markdown_file(path)
        else:
            continue

        if meta.name in metas:
            logger.warning(
                "Agent %s defined in %s overrides %s",
                meta.name,
                path.name,
                Path(metas[meta.name].file_path).name,
            )
        metas[meta.name] = meta

    logger.debug("Loaded %d agent(s) from %s", len(metas), directory)
    return metas


def build_dependency_graph(metas: dict[str, AgentMeta]) -> DependencyGraph:
    """Insert every agent, then every declared dependency edge.

    Missing dependency targets are not rejected here; Validator reports them.
    """
    graph = DependencyGraph()
    for name, meta in metas.items():
        graph.add_node(name, meta)

    for name, meta in metas.items():
        for dep in meta.dependencies:
            graph.add_edge(name, dep)

    return graph


def load_dependency_graph(directory: Path) -> DependencyGraph:
    return build_dependency_graph(load_agent_metas(directory))
