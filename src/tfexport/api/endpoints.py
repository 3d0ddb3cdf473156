"""Centralized API endpoint paths.

Usage:
    from tfexport.api.endpoints import Endpoints

    endpoint = Endpoints.POLICY_VERSIONS.format(policy_id=123)
    # Returns: "cloudlets/api/v2/policies/123/versions"
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoints:
    """
    API endpoint constants.

    All endpoints are relative to https://<host>/.
    Use .format() to substitute path parameters.
    """

    # -------------------------------------------------------------------------
    # Cloudlets
    # -------------------------------------------------------------------------
    POLICIES: str = "cloudlets/api/v2/policies"
    POLICY_VERSIONS: str = "cloudlets/api/v2/policies/{policy_id}/versions"
    POLICY_VERSION: str = "cloudlets/api/v2/policies/{policy_id}/versions/{version}"
    LOAD_BALANCER_VERSIONS: str = "cloudlets/api/v2/origins/{origin_id}/versions"
    LOAD_BALANCER_ACTIVATIONS: str = "cloudlets/api/v2/origins/{origin_id}/activations"

    # -------------------------------------------------------------------------
    # Application security
    # -------------------------------------------------------------------------
    APPSEC_CONFIGS: str = "appsec/v1/configs"
    APPSEC_CONFIG_VERSIONS: str = "appsec/v1/configs/{config_id}/versions"
    APPSEC_EXPORT: str = "appsec/v1/export/configs/{config_id}/versions/{version}"

    # -------------------------------------------------------------------------
    # Edge DNS
    # -------------------------------------------------------------------------
    DNS_ZONE: str = "config-dns/v2/zones/{zone}"
    DNS_RECORDSETS: str = "config-dns/v2/zones/{zone}/recordsets"

    # -------------------------------------------------------------------------
    # Global Traffic Management
    # -------------------------------------------------------------------------
    GTM_DOMAIN: str = "config-gtm/v1/domains/{domain}"

    # -------------------------------------------------------------------------
    # Property Manager
    # -------------------------------------------------------------------------
    PAPI_FIND_BY_VALUE: str = "papi/v1/search/find-by-value"
    PAPI_PROPERTY_VERSIONS: str = "papi/v1/properties/{property_id}/versions"
    PAPI_PROPERTY_VERSION: str = "papi/v1/properties/{property_id}/versions/{version}"
    PAPI_RULE_TREE: str = "papi/v1/properties/{property_id}/versions/{version}/rules"
    PAPI_HOSTNAMES: str = "papi/v1/properties/{property_id}/versions/{version}/hostnames"
    PAPI_ACTIVATIONS: str = "papi/v1/properties/{property_id}/activations"
    PAPI_EDGE_HOSTNAMES: str = "papi/v1/edgehostnames"
