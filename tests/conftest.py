"""Shared pytest fixtures for compose_graph_tools tests."""

from __future__ import annotations

import logging
import textwrap

import pytest
import structlog


STACK_YAML = textwrap.dedent(
    """\
    version: '3.8'

    services:
      frontend:
        image: node:18-alpine
        ports:
          - "3000:3000"
        environment:
          - REACT_APP_API_URL=http://backend:8080
        depends_on:
          - backend
        networks:
          - app-net

      backend:
        image: golang:1.19
        volumes:
          - ./server:/app
        environment:
          - DB_HOST=postgres
          - DB_USER=admin
        depends_on:
          - postgres
          - redis
        networks:
          - app-net
          - db-net

      postgres:
        image: postgres:15
        volumes:
          - db-data:/var/lib/postgresql/data
        environment:
          - POSTGRES_PASSWORD=secret
        networks:
          - db-net

      redis:
        image: redis:alpine
        networks:
          - db-net

    volumes:
      db-data:

    networks:
      app-net:
      db-net:
    """
)


def dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


@pytest.fixture
def stack_yaml() -> str:
    """Four services on two declared networks with one declared volume."""
    return STACK_YAML


@pytest.fixture
def cyclic_yaml() -> str:
    return dedent(
        """
        services:
          a:
            image: alpine
            depends_on: [b]
          b:
            image: alpine
            depends_on: [a]
        """
    )


@pytest.fixture
def restore_logging():
    """Restore logging state changed by configure_logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger("compose_graph_tools")
    package_level = package.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)
    structlog.reset_defaults()
