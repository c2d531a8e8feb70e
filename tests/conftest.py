"""Pytest configuration and fixtures."""

import base64
import json
import pytest
import tempfile
from pathlib import Path
from typing import Any, Dict


def make_data_url(text: str, media_type: str = "") -> str:
    """Build a canonical base64 data URL for test documents."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def data_url():
    """Factory for inline content values."""
    return make_data_url


@pytest.fixture
def scenario_a_document():
    """Single file with inline content, as produced by Butane for /etc/test."""
    return {
        "storage": {
            "files": [
                {
                    "path": "/etc/test",
                    "contents": {"source": "data:;base64,dGVzdCBjb250ZW50"}
                }
            ]
        }
    }


@pytest.fixture
def sample_ignition() -> Dict[str, Any]:
    """Ignition config exercising every kind of content occurrence."""
    return {
        "ignition": {
            "version": "3.4.0",
            "config": {
                "merge": [
                    {"source": make_data_url('{"ignition": {"version": "3.4.0"}}', "application/json")}
                ]
            }
        },
        "passwd": {
            "users": [
                {"name": "core", "sshAuthorizedKeys": ["ssh-ed25519 AAAA core@example"]}
            ]
        },
        "storage": {
            "files": [
                {
                    "path": "/etc/hostname",
                    "mode": 420,
                    "overwrite": True,
                    "contents": {"source": make_data_url("node-01\n", "text/plain;charset=utf-8")}
                },
                {
                    "path": "/etc/motd",
                    "append": [
                        {"source": make_data_url("Welcome\n")},
                        {"source": make_data_url("Maintenance window: Sunday\n")}
                    ]
                },
                {
                    "path": "/etc/issue.d/greeting.issue",
                    "contents": {"source": "data:,hello%20world"}
                },
                {
                    "path": "/usr/local/bin/remote-tool",
                    "mode": 493,
                    "contents": {"source": "https://example.com/remote-tool"}
                }
            ]
        },
        "systemd": {
            "units": [
                {"name": "hello.service", "enabled": True, "contents": "[Service]\nExecStart=/bin/echo hello\n"}
            ]
        }
    }


@pytest.fixture
def sample_ignition_json(sample_ignition):
    """Sample config serialized the way Butane pretty-prints it."""
    return json.dumps(sample_ignition, indent=2)
