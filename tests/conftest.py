"""Pytest configuration for release rollup tests."""
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path so 'rollup' can be imported
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def make_response(status_code=200, payload=None, text=None):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    response.text = text if text is not None else ("" if payload is None else str(payload))
    return response


@pytest.fixture
def clean_env(monkeypatch):
    """Remove credential and ROLLUP_* variables from the environment."""
    import os
    for key in list(os.environ):
        if key.startswith("ROLLUP_") or key in ("SYSTEM_ACCESSTOKEN", "AZURE_DEVOPS_PAT"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
