"""Tests for the security and best practice heuristics."""

from __future__ import annotations

import pytest

from compose_graph_tools.validator import Severity, detect_security_issues


def fields(services: dict) -> list[tuple[str, str]]:
    return [(w.service, w.field) for w in detect_security_issues(services)]


class TestExposedPorts:
    @pytest.mark.parametrize("port", ["0.0.0.0:80:80", "*:80:80"])
    def test_all_interfaces(self, port: str) -> None:
        warnings = detect_security_issues({"web": {"build": ".", "ports": [port]}})
        assert len(warnings) == 1
        assert warnings[0].severity == Severity.WARNING
        assert warnings[0].field == "ports"

    def test_long_syntax_host_ip(self) -> None:
        services = {
            "web": {
                "build": ".",
                "ports": [{"host_ip": "0.0.0.0", "published": 80, "target": 80}],
            }
        }
        assert fields(services) == [("web", "ports")]

    @pytest.mark.parametrize("port", ["80:80", "127.0.0.1:80:80", "80"])
    def test_restricted(self, port: str) -> None:
        assert fields({"web": {"build": ".", "ports": [port]}}) == []

    def test_one_warning_per_binding(self) -> None:
        services = {"web": {"build": ".", "ports": ["0.0.0.0:80:80", "0.0.0.0:443:443"]}}
        assert fields(services) == [("web", "ports"), ("web", "ports")]


class TestPrivilegesAndUser:
    def test_privileged(self) -> None:
        assert fields({"web": {"build": ".", "privileged": True}}) == [("web", "privileged")]

    def test_privileged_must_be_boolean(self) -> None:
        assert fields({"web": {"build": ".", "privileged": "true"}}) == []

    @pytest.mark.parametrize("user", ["root", "0", 0])
    def test_root_user(self, user) -> None:
        assert fields({"web": {"build": ".", "user": user}}) == [("web", "user")]

    @pytest.mark.parametrize("user", ["1000", "app", "1000:1000", False])
    def test_other_user(self, user) -> None:
        assert fields({"web": {"build": ".", "user": user}}) == []


class TestHealthcheck:
    def test_image_without_healthcheck(self) -> None:
        warnings = detect_security_issues({"web": {"image": "nginx"}})
        assert len(warnings) == 1
        assert warnings[0].severity == Severity.INFO
        assert warnings[0].field == "healthcheck"

    def test_healthcheck_present(self) -> None:
        services = {"web": {"image": "nginx", "healthcheck": {"test": ["CMD", "true"]}}}
        assert fields(services) == []

    def test_healthcheck_key_without_value(self) -> None:
        assert fields({"web": {"image": "nginx", "healthcheck": None}}) == []

    def test_build_skips_healthcheck_hint(self) -> None:
        assert fields({"web": {"image": "nginx", "build": "."}}) == []

    def test_without_image(self) -> None:
        assert fields({"web": {}}) == []


def test_order_within_service() -> None:
    services = {
        "web": {
            "image": "nginx",
            "ports": ["0.0.0.0:80:80"],
            "privileged": True,
            "user": "root",
        }
    }
    assert [w.field for w in detect_security_issues(services)] == [
        "ports",
        "privileged",
        "user",
        "healthcheck",
    ]
