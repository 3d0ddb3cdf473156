"""Tests for EdgeClient request handling, mocked with respx."""

import json

import httpx
import pytest
import respx

from tfexport.api.client import EdgeClient
from tfexport.api.models import MatchRuleER, Policy, PolicyVersion
from tfexport.utils.exceptions import APIError, AuthenticationError

BASE = "https://akab-test.luna.akamaiapis.net"


class TestRequest:
    @pytest.mark.asyncio
    async def test_requests_are_signed(self, edgegrid_config):
        with respx.mock:
            route = respx.get(f"{BASE}/config-gtm/v1/domains/test.akadns.net").mock(
                return_value=httpx.Response(200, json={"name": "test.akadns.net"})
            )

            async with EdgeClient(edgegrid_config) as client:
                result = await client.get_domain("test.akadns.net")

        assert result == {"name": "test.akadns.net"}
        assert route.calls.last.request.headers["Authorization"].startswith("EG1-HMAC-SHA256 ")

    @pytest.mark.asyncio
    async def test_account_switch_key_is_added(self, edgegrid_config):
        edgegrid_config.account_key = "1-ABCDE"
        with respx.mock:
            route = respx.get(f"{BASE}/appsec/v1/configs").mock(
                return_value=httpx.Response(200, json={"configurations": []})
            )

            async with EdgeClient(edgegrid_config) as client:
                assert await client.list_configurations() == []

        assert route.calls.last.request.url.params["accountSwitchKey"] == "1-ABCDE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_failures(self, edgegrid_config, status):
        with respx.mock:
            respx.get(f"{BASE}/config-dns/v2/zones/a.com").mock(
                return_value=httpx.Response(status, json={"title": "Forbidden", "detail": "no access"})
            )

            async with EdgeClient(edgegrid_config) as client:
                with pytest.raises(AuthenticationError) as exc_info:
                    await client.get_zone("a.com")

        assert exc_info.value.status_code == status
        assert str(exc_info.value) == "Forbidden: no access"

    @pytest.mark.asyncio
    async def test_error_status_maps_to_api_error(self, edgegrid_config):
        with respx.mock:
            respx.get(f"{BASE}/config-dns/v2/zones/a.com").mock(
                return_value=httpx.Response(404, json={"title": "Not Found"})
            )

            async with EdgeClient(edgegrid_config) as client:
                with pytest.raises(APIError) as exc_info:
                    await client.get_zone("a.com")

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "API Error 404: Not Found"

    @pytest.mark.asyncio
    async def test_transport_error_maps_to_api_error(self, edgegrid_config):
        with respx.mock:
            respx.get(f"{BASE}/config-gtm/v1/domains/d").mock(
                side_effect=httpx.ConnectError("refused")
            )

            async with EdgeClient(edgegrid_config) as client:
                with pytest.raises(APIError, match="HTTP request failed"):
                    await client.get_domain("d")

    @pytest.mark.asyncio
    async def test_non_json_body_maps_to_api_error(self, edgegrid_config):
        with respx.mock:
            respx.get(f"{BASE}/config-gtm/v1/domains/d").mock(
                return_value=httpx.Response(200, text="<html>gateway</html>")
            )

            async with EdgeClient(edgegrid_config) as client:
                with pytest.raises(APIError, match="Unexpected response body") as exc_info:
                    await client.get_domain("d")

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_unexpected_body_maps_to_api_error(self, edgegrid_config):
        with respx.mock:
            respx.get(f"{BASE}/config-dns/v2/zones/a.com").mock(
                return_value=httpx.Response(200, json={"comment": "no zone field"})
            )

            async with EdgeClient(edgegrid_config) as client:
                with pytest.raises(APIError, match="Unexpected zone response"):
                    await client.get_zone("a.com")


class TestCloudlets:
    @pytest.mark.asyncio
    async def test_list_policies_passes_offset_and_page_size(
        self, edgegrid_config, er_policy_payload
    ):
        with respx.mock:
            route = respx.get(f"{BASE}/cloudlets/api/v2/policies").mock(
                return_value=httpx.Response(200, json=[er_policy_payload])
            )

            async with EdgeClient(edgegrid_config) as client:
                policies = await client.list_policies(offset=1000, page_size=1000)

        params = route.calls.last.request.url.params
        assert params["offset"] == "1000"
        assert params["pageSize"] == "1000"
        assert isinstance(policies[0], Policy)
        assert policies[0].cloudlet_code == "ER"
        assert len(policies[0].activations) == 3

    @pytest.mark.asyncio
    async def test_get_policy_version_parses_match_rules(
        self, edgegrid_config, er_version_payload
    ):
        with respx.mock:
            route = respx.get(f"{BASE}/cloudlets/api/v2/policies/2/versions/2").mock(
                return_value=httpx.Response(200, json=er_version_payload)
            )

            async with EdgeClient(edgegrid_config) as client:
                version = await client.get_policy_version(2, 2)

        assert route.calls.last.request.url.params["omitRules"] == "false"
        assert isinstance(version, PolicyVersion)
        rule = version.match_rules[0]
        assert isinstance(rule, MatchRuleER)
        assert rule.redirect_url == "/ddd"
        assert rule.match_url == "abc.com"


class TestPaging:
    @pytest.mark.asyncio
    async def test_recordsets_translate_offset_to_page(self, edgegrid_config):
        with respx.mock:
            route = respx.get(f"{BASE}/config-dns/v2/zones/a.com/recordsets").mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "recordsets": [
                            {"name": "a.com", "type": "A", "ttl": 300, "rdata": ["1.2.3.4"]}
                        ]
                    },
                )
            )

            async with EdgeClient(edgegrid_config) as client:
                records = await client.list_recordsets("a.com", offset=200, page_size=100)

        assert route.calls.last.request.url.params["page"] == "3"
        assert records[0].rdata == ["1.2.3.4"]

    @pytest.mark.asyncio
    async def test_find_property_posts_name(self, edgegrid_config):
        with respx.mock:
            route = respx.post(f"{BASE}/papi/v1/search/find-by-value").mock(
                return_value=httpx.Response(
                    200, json={"versions": {"items": [{"propertyId": "prp_1"}]}}
                )
            )

            async with EdgeClient(edgegrid_config) as client:
                items = await client.find_property("www.example.com")

        assert items == [{"propertyId": "prp_1"}]
        assert json.loads(route.calls.last.request.content) == {"propertyName": "www.example.com"}

    @pytest.mark.asyncio
    async def test_property_version_without_items(self, edgegrid_config):
        with respx.mock:
            respx.get(f"{BASE}/papi/v1/properties/prp_1/versions/3").mock(
                return_value=httpx.Response(200, json={"versions": {"items": []}})
            )

            async with EdgeClient(edgegrid_config) as client:
                with pytest.raises(APIError, match="returned no items"):
                    await client.get_property_version("prp_1", "ctr_1", "grp_1", 3)
