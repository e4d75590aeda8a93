"""Tests for compose document loading."""

from __future__ import annotations

import pytest

from compose_graph_tools.defs.compose import (
    DocumentError,
    load_document,
    networks_of,
    services_of,
    volumes_of,
)


class TestLoadDocument:
    def test_mapping(self, stack_yaml: str) -> None:
        compose = load_document(stack_yaml)
        assert compose["version"] == "3.8"
        assert list(services_of(compose)) == ["frontend", "backend", "postgres", "redis"]

    def test_syntax_error_has_line(self) -> None:
        with pytest.raises(DocumentError) as info:
            load_document("services:\n  web:\n    image: [nginx\n")
        assert info.value.message.startswith("YAML parsing error")
        assert info.value.line is not None
        assert info.value.line >= 3
        assert info.value.empty is False

    def test_syntax_error_line_is_one_based(self) -> None:
        with pytest.raises(DocumentError) as info:
            load_document("a: 1\nb: 2\n\tc: 3\n")
        assert info.value.line == 3

    def test_deep_nesting(self) -> None:
        text = "a: " + "[" * 5000 + "]" * 5000 + "\n"
        with pytest.raises(DocumentError) as info:
            load_document(text)
        assert info.value.message == "YAML parsing error: document nested too deeply"
        assert info.value.line is None
        assert info.value.empty is False

    def test_scalar(self) -> None:
        with pytest.raises(DocumentError, match="Invalid YAML structure"):
            load_document("just some text")

    def test_empty(self) -> None:
        with pytest.raises(DocumentError) as info:
            load_document("# only a comment\n")
        assert info.value.empty is True


class TestSections:
    def test_null_entries_become_empty(self, stack_yaml: str) -> None:
        compose = load_document(stack_yaml)
        assert volumes_of(compose) == {"db-data": {}}
        assert networks_of(compose) == {"app-net": {}, "db-net": {}}

    def test_missing_sections(self) -> None:
        compose = load_document("version: '3'\n")
        assert services_of(compose) == {}
        assert networks_of(compose) == {}
        assert volumes_of(compose) == {}

    def test_non_mapping_section(self) -> None:
        compose = load_document("services: [web, db]\n")
        assert services_of(compose) == {}

    def test_names_are_strings(self) -> None:
        compose = load_document("services:\n  1:\n    image: x\n")
        assert list(services_of(compose)) == ["1"]
