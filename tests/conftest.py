"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Config fixtures: EdgeGrid credentials and .edgerc files
- Logging fixtures: Reset logging between tests
- Mock fixtures: Pre-configured mock API client
- Data fixtures: Sample API payloads
"""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from tfexport.api.client import EdgeClient
from tfexport.config import EdgeGridConfig
from tfexport.observability import clear_all_context, configure_logging

# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def edgegrid_config() -> EdgeGridConfig:
    """Credentials pointing at a fake API host."""
    return EdgeGridConfig(
        host="akab-test.luna.akamaiapis.net",
        client_token="akab-client-token",
        client_secret="c2VjcmV0",
        access_token="akab-access-token",
    )


@pytest.fixture
def edgerc_file(tmp_path: Path) -> Path:
    """An .edgerc file with a default and a named section."""
    path = tmp_path / ".edgerc"
    path.write_text(
        "[default]\n"
        "host = akab-default.luna.akamaiapis.net\n"
        "client_token = ct-default\n"
        "client_secret = cs-default\n"
        "access_token = at-default\n"
        "\n"
        "[papi]\n"
        "host = akab-papi.luna.akamaiapis.net\n"
        "client_token = ct-papi\n"
        "client_secret = cs-papi\n"
        "access_token = at-papi\n"
        "max-body = 2048\n"
    )
    return path


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging():
    """Point logging back at the current stderr after each test.

    CLI tests reconfigure logging onto the runner's temporary streams.
    """
    yield
    clear_all_context()
    configure_logging()


# =============================================================================
# Mock API Client Fixtures
# =============================================================================


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock API client.

    Example:
        def test_something(mock_client):
            mock_client.get_zone.return_value = Zone(zone="example.com", type="PRIMARY")
    """
    return AsyncMock(spec=EdgeClient)


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def er_policy_payload() -> dict[str, Any]:
    """Edge redirector policy with two staging and one prod activation."""
    return {
        "policyId": 2,
        "groupId": 123,
        "name": "test_policy",
        "cloudletId": 0,
        "cloudletCode": "ER",
        "activations": [
            {
                "network": "staging",
                "policyInfo": {"policyId": 2, "name": "test_policy", "version": 2},
                "propertyInfo": {"name": "prp_0", "version": 1},
            },
            {
                "network": "staging",
                "policyInfo": {"policyId": 2, "name": "test_policy", "version": 2},
                "propertyInfo": {"name": "prp_1", "version": 1},
            },
            {
                "network": "prod",
                "policyInfo": {"policyId": 2, "name": "test_policy", "version": 1},
                "propertyInfo": {"name": "prp_0", "version": 1},
            },
        ],
    }


@pytest.fixture
def er_version_payload() -> dict[str, Any]:
    """Latest version of the edge redirector policy."""
    return {
        "policyId": 2,
        "version": 2,
        "description": "test policy description",
        "matchRuleFormat": "1.0",
        "matchRules": [
            {
                "type": "erMatchRule",
                "name": "r1",
                "start": 1,
                "end": 2,
                "matchURL": "abc.com",
                "statusCode": 301,
                "redirectURL": "/ddd",
                "useIncomingQueryString": False,
                "useRelativeUrl": "copy_scheme_hostname",
                "matches": [
                    {
                        "matchType": "hostname",
                        "matchValue": "3333.dom",
                        "matchOperator": "equals",
                        "caseSensitive": True,
                        "negate": False,
                    }
                ],
            }
        ],
    }
