"""Functions and filters installed into every template environment.

Formatting helpers:
- escape: make a value safe inside an HCL string literal
- tf_name: make a value safe as a Terraform resource identifier
- to_json / to_pretty_json: embed nested data as JSON
- tf_list / hcl_value: render scalars and lists as HCL literals

Cross-reference lookups take the full data snapshot and an identifier and
return "" (or False) when nothing matches, so a dangling reference never
aborts rendering.
"""

import json
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from ..constants import DEFAULT_DATACENTER_IDS

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def escape(value: Any) -> str:
    """Escape a value for use inside a double-quoted HCL string."""
    if value is None:
        return ""
    text = str(value)
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    text = text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
    return text.replace("${", "$${").replace("%{", "%%{")


def tf_name(value: Any) -> str:
    """
    Normalize a value into a Terraform resource identifier.

    Characters outside [A-Za-z0-9_-] become "_" and an identifier that
    would start with a digit or dash is prefixed with "_". Applying it to
    its own output changes nothing.
    """
    name = _INVALID_NAME_CHARS.sub("_", str(value))
    if not name or name[0].isdigit() or name[0] == "-":
        name = f"_{name}"
    return name


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def to_json(value: Any) -> str:
    """Compact JSON, keys in source order."""
    return json.dumps(_plain(value), separators=(",", ":"), ensure_ascii=False)


def to_pretty_json(value: Any) -> str:
    return json.dumps(_plain(value), indent=2, ensure_ascii=False)


def tf_list(values: Iterable[Any] | None) -> str:
    """Render scalars as an HCL list literal, e.g. ["a", "b"] or [1, 2]."""
    items = []
    for value in values or []:
        if isinstance(value, bool):
            items.append("true" if value else "false")
        elif isinstance(value, (int, float)):
            items.append(str(value))
        else:
            items.append(f'"{escape(value)}"')
    return f"[{', '.join(items)}]"


def hcl_value(value: Any) -> str:
    """Render a scalar or a list of scalars as an HCL literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return tf_list(value)
    return f'"{escape(value)}"'


# -----------------------------------------------------------------------------
# Security configuration lookups
# -----------------------------------------------------------------------------


def _find(items: Iterable[Mapping[str, Any]] | None, key: str, value: Any) -> Mapping[str, Any] | None:
    for item in items or []:
        if str(item.get(key)) == str(value):
            return item
    return None


def waf_rule_name(export: Mapping[str, Any], rule_id: Any) -> str:
    """Title of a WAF rule, searched across all rulesets."""
    for ruleset in export.get("rulesets") or []:
        rule = _find(ruleset.get("rules"), "id", rule_id)
        if rule:
            return str(rule.get("title") or rule.get("tag") or "")
    return ""


def attack_group_name(export: Mapping[str, Any], group_id: Any) -> str:
    """Display name of an attack group such as SQL or XSS."""
    for ruleset in export.get("rulesets") or []:
        group = _find(ruleset.get("attackGroups"), "group", group_id)
        if group:
            return str(group.get("groupName") or group.get("group") or "")
    return ""


def custom_rule_name(export: Mapping[str, Any], rule_id: Any) -> str:
    rule = _find(export.get("customRules"), "id", rule_id)
    return str(rule.get("name") or "") if rule else ""


def is_legacy_custom_rule(export: Mapping[str, Any], rule_id: Any) -> bool:
    """True for custom rules that predate structured conditions."""
    rule = _find(export.get("customRules"), "id", rule_id)
    if rule is None:
        return False
    return rule.get("structured") is False


def rate_policy_name(export: Mapping[str, Any], policy_id: Any) -> str:
    policy = _find(export.get("ratePolicies"), "id", policy_id)
    return str(policy.get("name") or "") if policy else ""


def malware_policy_name(export: Mapping[str, Any], policy_id: Any) -> str:
    policy = _find(export.get("malwarePolicies"), "id", policy_id)
    return str(policy.get("name") or "") if policy else ""


# -----------------------------------------------------------------------------
# GTM lookups
# -----------------------------------------------------------------------------


def datacenter_nickname(domain: Mapping[str, Any], datacenter_id: Any) -> str:
    datacenter = _find(domain.get("datacenters"), "datacenterId", datacenter_id)
    return str(datacenter.get("nickname") or "") if datacenter else ""


def is_default_datacenter(datacenter_id: Any) -> bool:
    """True for the platform-provided datacenters every domain carries."""
    try:
        return int(datacenter_id) in DEFAULT_DATACENTER_IDS
    except (TypeError, ValueError):
        return False


def base_functions() -> dict[str, Callable[..., Any]]:
    """Functions shared by every command's template environment."""
    return {
        "escape": escape,
        "tf_name": tf_name,
        "to_json": to_json,
        "to_pretty_json": to_pretty_json,
        "tf_list": tf_list,
        "hcl_value": hcl_value,
        "waf_rule_name": waf_rule_name,
        "attack_group_name": attack_group_name,
        "custom_rule_name": custom_rule_name,
        "is_legacy_custom_rule": is_legacy_custom_rule,
        "rate_policy_name": rate_policy_name,
        "malware_policy_name": malware_policy_name,
        "datacenter_nickname": datacenter_nickname,
        "is_default_datacenter": is_default_datacenter,
    }
