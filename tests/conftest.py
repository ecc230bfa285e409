"""Shared fixtures for http-echo tests."""

import socket

import pytest
from fastapi.testclient import TestClient

from http_echo.app import create_app
from http_echo.config import ServerConfig
from http_echo.metrics import RequestMetrics


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config():
    return ServerConfig(listen=":5678", server_id="blue")


@pytest.fixture
def metrics():
    return RequestMetrics(process_metrics=False)


@pytest.fixture
def app(config, metrics):
    return create_app(config, metrics=metrics)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def free_port():
    """A port that was free a moment ago."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
