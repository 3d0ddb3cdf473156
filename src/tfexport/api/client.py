"""Vendor management API client.

Wraps the read-only endpoints used by the exporters.

Architecture Overview:
---------------------
- Async HTTP communication via httpx
- EdgeGrid signing through an httpx.Auth flow (see auth.py)
- One request at a time; nothing is retried
- Typed responses (api.models) where templates branch on variants,
  plain dictionaries for large free-form bodies

Account switching:
-----------------
When an account key is configured every request carries the
`accountSwitchKey` query parameter.

Pagination:
----------
List methods take `offset` and `page_size` so they can be plugged into
core.resolver. Endpoints that paginate by page number translate the
offset into a 1-based page index.
"""

from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from ..config import EdgeGridConfig
from ..constants import DEFAULT_PAGE_SIZE
from ..utils.exceptions import APIError, AuthenticationError
from .auth import EdgeGridAuth
from .endpoints import Endpoints
from .models import (
    LoadBalancerActivation,
    LoadBalancerVersion,
    Policy,
    PolicyVersion,
    Recordset,
    Zone,
)

logger = structlog.get_logger(__name__)

_policies = TypeAdapter(list[Policy])
_policy_versions = TypeAdapter(list[PolicyVersion])
_lb_versions = TypeAdapter(list[LoadBalancerVersion])
_lb_activations = TypeAdapter(list[LoadBalancerActivation])
_recordsets = TypeAdapter(list[Recordset])


def _problem_message(response: httpx.Response) -> str:
    """Extract a readable message from an RFC 7807 problem body."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    if not isinstance(data, dict):
        return response.text
    title = data.get("title")
    detail = data.get("detail")
    if title and detail and title != detail:
        return f"{title}: {detail}"
    return str(title or detail or response.text)


class EdgeClient:
    """
    Read-only client for the vendor management API.

    Usage:
        async with EdgeClient(config) as client:
            page = await client.list_policies(offset=0, page_size=1000)
    """

    def __init__(self, config: EdgeGridConfig):
        """
        Initialize the client.

        Args:
            config: Host and signing credentials
        """
        self.config = config
        host = config.host.removeprefix("https://").rstrip("/")
        self.base_url = f"https://{host}"
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "EdgeClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """HTTP client, created on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=EdgeGridAuth(self.config),
                verify=self.config.verify_ssl,
                timeout=self.config.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a signed request.

        Args:
            method: HTTP method
            endpoint: Path relative to the API host
            params: Query parameters
            json: JSON body

        Returns:
            Parsed JSON response, None for 204

        Raises:
            AuthenticationError: For 401/403
            APIError: For any other error status or transport failure
        """
        query = dict(params or {})
        if self.config.account_key:
            query["accountSwitchKey"] = self.config.account_key

        url = f"/{endpoint.lstrip('/')}"
        logger.verbose("API request", method=method, endpoint=url, params=params)
        try:
            response = await self.client.request(method, url, params=query or None, json=json)
        except httpx.HTTPError as e:
            raise APIError(f"HTTP request failed: {e}") from e

        if response.status_code in (401, 403):
            message = _problem_message(response)
            logger.error("Request rejected", status=response.status_code, endpoint=url)
            raise AuthenticationError(message, status_code=response.status_code)
        if response.is_error:
            message = _problem_message(response)
            raise APIError(
                f"API Error {response.status_code}: {message}", status_code=response.status_code
            )

        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Unexpected response body from {url}", status_code=response.status_code
            ) from e

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Helper for GET requests."""
        return await self.request("GET", endpoint, params=params)

    def _parse(self, adapter: TypeAdapter, data: Any, what: str) -> Any:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            raise APIError(f"Unexpected {what} response: {e}") from e

    # -------------------------------------------------------------------------
    # Cloudlets
    # -------------------------------------------------------------------------

    async def list_policies(self, offset: int = 0, page_size: int = DEFAULT_PAGE_SIZE) -> list[Policy]:
        data = await self.get(Endpoints.POLICIES, params={"offset": offset, "pageSize": page_size})
        return self._parse(_policies, data or [], "policy list")

    async def list_policy_versions(
        self, policy_id: int, offset: int = 0, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[PolicyVersion]:
        data = await self.get(
            Endpoints.POLICY_VERSIONS.format(policy_id=policy_id),
            params={"offset": offset, "pageSize": page_size},
        )
        return self._parse(_policy_versions, data or [], "policy version list")

    async def get_policy_version(self, policy_id: int, version: int) -> PolicyVersion:
        data = await self.get(
            Endpoints.POLICY_VERSION.format(policy_id=policy_id, version=version),
            params={"omitRules": "false"},
        )
        return self._parse(TypeAdapter(PolicyVersion), data, "policy version")

    async def list_load_balancer_versions(self, origin_id: str) -> list[LoadBalancerVersion]:
        data = await self.get(
            Endpoints.LOAD_BALANCER_VERSIONS.format(origin_id=origin_id),
            params={"includeModel": "true"},
        )
        return self._parse(_lb_versions, data or [], "load balancer version list")

    async def list_load_balancer_activations(self, origin_id: str) -> list[LoadBalancerActivation]:
        data = await self.get(Endpoints.LOAD_BALANCER_ACTIVATIONS.format(origin_id=origin_id))
        return self._parse(_lb_activations, data or [], "load balancer activation list")

    # -------------------------------------------------------------------------
    # Application security
    # -------------------------------------------------------------------------

    async def list_configurations(self) -> list[dict[str, Any]]:
        data = await self.get(Endpoints.APPSEC_CONFIGS)
        return (data or {}).get("configurations", [])

    async def list_configuration_versions(
        self, config_id: int, offset: int = 0, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[dict[str, Any]]:
        page = offset // page_size + 1
        data = await self.get(
            Endpoints.APPSEC_CONFIG_VERSIONS.format(config_id=config_id),
            params={"page": page, "pageSize": page_size, "detail": "false"},
        )
        return (data or {}).get("versionList", [])

    async def get_export(self, config_id: int, version: int) -> dict[str, Any]:
        """Full export of one security configuration version."""
        return await self.get(Endpoints.APPSEC_EXPORT.format(config_id=config_id, version=version))

    # -------------------------------------------------------------------------
    # Edge DNS
    # -------------------------------------------------------------------------

    async def get_zone(self, zone: str) -> Zone:
        data = await self.get(Endpoints.DNS_ZONE.format(zone=zone))
        return self._parse(TypeAdapter(Zone), data, "zone")

    async def list_recordsets(
        self, zone: str, offset: int = 0, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[Recordset]:
        """One page of recordsets; the API pages are 1-based."""
        page = offset // page_size + 1
        data = await self.get(
            Endpoints.DNS_RECORDSETS.format(zone=zone),
            params={"page": page, "pageSize": page_size, "sortBy": "name,type"},
        )
        return self._parse(_recordsets, (data or {}).get("recordsets", []), "recordset list")

    # -------------------------------------------------------------------------
    # Global Traffic Management
    # -------------------------------------------------------------------------

    async def get_domain(self, domain: str) -> dict[str, Any]:
        return await self.get(Endpoints.GTM_DOMAIN.format(domain=domain))

    # -------------------------------------------------------------------------
    # Property Manager
    # -------------------------------------------------------------------------

    async def find_property(self, name: str) -> list[dict[str, Any]]:
        """Search property versions by property name."""
        data = await self.request(
            "POST", Endpoints.PAPI_FIND_BY_VALUE, json={"propertyName": name}
        )
        return ((data or {}).get("versions") or {}).get("items", [])

    def _papi_params(self, contract_id: str, group_id: str, **extra: Any) -> dict[str, Any]:
        return {"contractId": contract_id, "groupId": group_id, **extra}

    async def list_property_versions(
        self,
        property_id: str,
        contract_id: str,
        group_id: str,
        offset: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        data = await self.get(
            Endpoints.PAPI_PROPERTY_VERSIONS.format(property_id=property_id),
            params=self._papi_params(contract_id, group_id, offset=offset, limit=page_size),
        )
        return ((data or {}).get("versions") or {}).get("items", [])

    async def get_property_version(
        self, property_id: str, contract_id: str, group_id: str, version: int
    ) -> dict[str, Any]:
        data = await self.get(
            Endpoints.PAPI_PROPERTY_VERSION.format(property_id=property_id, version=version),
            params=self._papi_params(contract_id, group_id),
        )
        items = ((data or {}).get("versions") or {}).get("items", [])
        if not items:
            raise APIError(f"property version {version} returned no items")
        return items[0]

    async def get_rule_tree(
        self, property_id: str, contract_id: str, group_id: str, version: int
    ) -> dict[str, Any]:
        return await self.get(
            Endpoints.PAPI_RULE_TREE.format(property_id=property_id, version=version),
            params=self._papi_params(contract_id, group_id, validateRules="false"),
        )

    async def get_hostnames(
        self, property_id: str, contract_id: str, group_id: str, version: int
    ) -> list[dict[str, Any]]:
        data = await self.get(
            Endpoints.PAPI_HOSTNAMES.format(property_id=property_id, version=version),
            params=self._papi_params(contract_id, group_id),
        )
        return ((data or {}).get("hostnames") or {}).get("items", [])

    async def list_edge_hostnames(self, contract_id: str, group_id: str) -> list[dict[str, Any]]:
        data = await self.get(
            Endpoints.PAPI_EDGE_HOSTNAMES, params=self._papi_params(contract_id, group_id)
        )
        return ((data or {}).get("edgeHostnames") or {}).get("items", [])

    async def list_property_activations(
        self, property_id: str, contract_id: str, group_id: str
    ) -> list[dict[str, Any]]:
        data = await self.get(
            Endpoints.PAPI_ACTIVATIONS.format(property_id=property_id),
            params=self._papi_params(contract_id, group_id),
        )
        return ((data or {}).get("activations") or {}).get("items", [])
