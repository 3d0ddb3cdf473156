"""Configuration constants for the Terraform exporter."""

# -----------------------------------------------------------------------------
# Pagination
# -----------------------------------------------------------------------------

# Page size used by every paginated list call
DEFAULT_PAGE_SIZE: int = 1000


# -----------------------------------------------------------------------------
# Cloudlets
# -----------------------------------------------------------------------------

# Cloudlet codes that have templates
SUPPORTED_CLOUDLETS: frozenset[str] = frozenset({"ALB", "AP", "AS", "CD", "ER", "FR", "IG", "VP"})

# Policy activation networks, in the order they are emitted
POLICY_NETWORK_STAGING: str = "staging"
POLICY_NETWORK_PRODUCTION: str = "prod"
POLICY_NETWORKS: tuple[str, ...] = (POLICY_NETWORK_STAGING, POLICY_NETWORK_PRODUCTION)

# Load balancer activation networks, in lookup order
LOAD_BALANCER_NETWORKS: tuple[str, ...] = ("PRODUCTION", "STAGING")

# Match rule data source per cloudlet code
MATCH_RULE_DATA_SOURCES: dict[str, str] = {
    "ALB": "akamai_cloudlets_application_load_balancer_match_rule",
    "AP": "akamai_cloudlets_api_prioritization_match_rule",
    "AS": "akamai_cloudlets_audience_segmentation_match_rule",
    "CD": "akamai_cloudlets_phased_release_match_rule",
    "ER": "akamai_cloudlets_edge_redirector_match_rule",
    "FR": "akamai_cloudlets_forward_rewrite_match_rule",
    "IG": "akamai_cloudlets_request_control_match_rule",
    "VP": "akamai_cloudlets_visitor_prioritization_match_rule",
}


# -----------------------------------------------------------------------------
# GTM
# -----------------------------------------------------------------------------

# Datacenters created by the platform for every domain; referenced by ID only
DEFAULT_DATACENTER_IDS: frozenset[int] = frozenset({5400, 5401, 5402})


# -----------------------------------------------------------------------------
# Application security
# -----------------------------------------------------------------------------

APPSEC_NETWORKS: tuple[str, ...] = ("STAGING", "PRODUCTION")


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

TERRAFORM_STATE_FILE: str = "terraform.tfstate"
DEFAULT_EDGERC_PATH: str = "~/.edgerc"
DEFAULT_EDGERC_SECTION: str = "default"
