"""Pydantic models for vendor API responses.

Only payloads whose shape drives template branching are modelled; large,
free-form bodies (security configuration exports, GTM domains, rule trees)
stay as plain dictionaries.

Design Principles:
- Graceful degradation: extra="allow" for unknown fields
- Field names are snake_case, aliases match the API's camelCase
- Match rules are a tagged union selected by their `type` field
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base model: camelCase aliases, unknown fields kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# -----------------------------------------------------------------------------
# Cloudlet policies
# -----------------------------------------------------------------------------


class PolicyInfo(APIModel):
    policy_id: int | None = None
    name: str | None = None
    version: int = 0
    status: str | None = None


class PropertyInfo(APIModel):
    name: str = ""
    version: int | None = None
    group_id: int | None = None
    status: str | None = None


class PolicyActivation(APIModel):
    """One raw activation entry: a policy version live for one property."""

    network: str
    policy_info: PolicyInfo = Field(default_factory=PolicyInfo)
    property_info: PropertyInfo = Field(default_factory=PropertyInfo)


class Policy(APIModel):
    policy_id: int
    group_id: int = 0
    name: str
    description: str | None = None
    cloudlet_id: int | None = None
    cloudlet_code: str
    activations: list[PolicyActivation] = Field(default_factory=list)


class Options(APIModel):
    value: list[str] | None = None
    value_has_wildcard: bool = False
    value_case_sensitive: bool = False
    value_escaped: bool = False


class ObjectMatchValueSimple(APIModel):
    type: Literal["simple"]
    value: list[str] = Field(default_factory=list)


class ObjectMatchValueObject(APIModel):
    type: Literal["object"]
    name: str
    name_case_sensitive: bool = False
    name_has_wildcard: bool = False
    options: Options | None = None


class ObjectMatchValueRange(APIModel):
    type: Literal["range"]
    value: list[int] = Field(default_factory=list)


ObjectMatchValue = Annotated[
    Union[ObjectMatchValueSimple, ObjectMatchValueObject, ObjectMatchValueRange],
    Field(discriminator="type"),
]


class MatchCriteria(APIModel):
    match_type: str | None = None
    match_value: str | None = None
    match_operator: str | None = None
    case_sensitive: bool = False
    negate: bool = False
    check_ips: str | None = Field(default=None, alias="checkIPs")
    object_match_value: ObjectMatchValue | None = None


class MatchRuleBase(APIModel):
    """Fields shared by every match rule variant."""

    name: str = ""
    start: int = 0
    end: int = 0
    id: int | None = None
    matches: list[MatchCriteria] = Field(default_factory=list)
    match_url: str | None = Field(default=None, alias="matchURL")
    disabled: bool = False


class MatchRuleER(MatchRuleBase):
    type: Literal["erMatchRule"]
    use_relative_url: str | None = None
    status_code: int | None = None
    redirect_url: str | None = Field(default=None, alias="redirectURL")
    use_incoming_query_string: bool = False
    use_incoming_scheme_and_host: bool = False
    matches_always: bool = False


class ForwardSettingsALB(APIModel):
    origin_id: str = ""


class MatchRuleALB(MatchRuleBase):
    type: Literal["albMatchRule"]
    matches_always: bool = False
    forward_settings: ForwardSettingsALB = Field(default_factory=ForwardSettingsALB)


class ForwardSettingsFR(APIModel):
    path_and_qs: str | None = Field(default=None, alias="pathAndQS")
    use_incoming_query_string: bool = False
    origin_id: str | None = None


class MatchRuleFR(MatchRuleBase):
    type: Literal["frMatchRule"]
    forward_settings: ForwardSettingsFR = Field(default_factory=ForwardSettingsFR)


class ForwardSettingsPR(APIModel):
    origin_id: str = ""
    percent: int = 0


class MatchRulePR(MatchRuleBase):
    """Phased release (CD) rule."""

    type: Literal["cdMatchRule"]
    matches_always: bool = False
    forward_settings: ForwardSettingsPR = Field(default_factory=ForwardSettingsPR)


class MatchRuleVP(MatchRuleBase):
    type: Literal["vpMatchRule"]
    pass_through_percent: float | None = None


class MatchRuleAP(MatchRuleBase):
    type: Literal["apMatchRule"]
    pass_through_percent: float | None = None


class ForwardSettingsAS(APIModel):
    origin_id: str | None = None
    path_and_qs: str | None = Field(default=None, alias="pathAndQS")
    use_incoming_query_string: bool = False
    use_incoming_source_path: bool = False


class MatchRuleAS(MatchRuleBase):
    type: Literal["asMatchRule"]
    forward_settings: ForwardSettingsAS = Field(default_factory=ForwardSettingsAS)


class MatchRuleRC(MatchRuleBase):
    """Request control (IG) rule."""

    type: Literal["igMatchRule"]
    allow_deny: str | None = None


MatchRule = Annotated[
    Union[
        MatchRuleER,
        MatchRuleALB,
        MatchRuleFR,
        MatchRulePR,
        MatchRuleVP,
        MatchRuleAP,
        MatchRuleAS,
        MatchRuleRC,
    ],
    Field(discriminator="type"),
]


class PolicyVersion(APIModel):
    policy_id: int | None = None
    version: int
    description: str | None = None
    match_rule_format: str | None = None
    match_rules: list[MatchRule] | None = None


# -----------------------------------------------------------------------------
# Application load balancers
# -----------------------------------------------------------------------------


class DataCenter(APIModel):
    city: str | None = None
    cloud_server_host_header_override: bool = False
    cloud_service: bool = False
    continent: str | None = None
    country: str | None = None
    hostname: str | None = None
    latitude: float | None = None
    liveness_hosts: list[str] = Field(default_factory=list)
    longitude: float | None = None
    origin_id: str | None = None
    percent: float | None = None
    state_or_province: str | None = None


class LivenessSettings(APIModel):
    host_header: str | None = None
    additional_headers: dict[str, str] = Field(default_factory=dict)
    interval: int | None = None
    path: str | None = None
    peer_certificate_verification: bool = False
    port: int | None = None
    protocol: str | None = None
    request_string: str | None = None
    response_string: str | None = None
    status_3xx_failure: bool = Field(default=False, alias="status3xxFailure")
    status_4xx_failure: bool = Field(default=False, alias="status4xxFailure")
    status_5xx_failure: bool = Field(default=False, alias="status5xxFailure")
    timeout: float | None = None


class LoadBalancerVersion(APIModel):
    origin_id: str
    version: int = 0
    description: str | None = None
    balancing_type: str | None = None
    data_centers: list[DataCenter] = Field(default_factory=list)
    liveness_settings: LivenessSettings | None = None


class LoadBalancerActivation(APIModel):
    origin_id: str
    network: str
    version: int = 0
    status: str | None = None
    activated_date: str = ""


# -----------------------------------------------------------------------------
# Edge DNS
# -----------------------------------------------------------------------------


class TSIGKey(APIModel):
    name: str
    algorithm: str
    secret: str


class Zone(APIModel):
    zone: str
    type: str
    masters: list[str] = Field(default_factory=list)
    comment: str | None = None
    sign_and_serve: bool = False
    sign_and_serve_algorithm: str | None = None
    tsig_key: TSIGKey | None = None
    target: str | None = None
    end_customer_id: str | None = None
    contract_id: str | None = None


class Recordset(APIModel):
    name: str
    type: str
    ttl: int
    rdata: list[str] = Field(default_factory=list)


def dump(model: Any) -> Any:
    """Dump a model (or a list of them) to plain JSON-ready data."""
    if isinstance(model, BaseModel):
        return model.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(model, list):
        return [dump(item) for item in model]
    return model
