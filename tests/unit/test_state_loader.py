"""Tests for terraform state lookups."""

import json

from tfexport.core.state_loader import TerraformState


def write_state(path, resources):
    (path / "terraform.tfstate").write_text(json.dumps({"version": 4, "resources": resources}))


def test_resource_in_state(tmp_path):
    write_state(
        tmp_path,
        [
            {"mode": "managed", "type": "akamai_dns_zone", "name": "example_com"},
            {"mode": "managed", "type": "akamai_dns_record", "name": "www_A"},
        ],
    )
    state = TerraformState(tmp_path)

    assert state.has_resource("akamai_dns_zone", "example_com")
    assert state.has_resource("akamai_dns_record", "www_A")
    assert not state.has_resource("akamai_dns_record", "example_com")


def test_missing_state_means_nothing_imported(tmp_path):
    state = TerraformState(tmp_path)

    assert not state.has_resource("akamai_dns_zone", "example_com")
    assert state.resources == set()


def test_unreadable_state_means_nothing_imported(tmp_path):
    (tmp_path / "terraform.tfstate").write_text("{not json")

    assert not TerraformState(tmp_path).has_resource("akamai_dns_zone", "example_com")


def test_unexpected_shape_means_nothing_imported(tmp_path):
    (tmp_path / "terraform.tfstate").write_text("[1, 2, 3]")

    assert TerraformState(tmp_path).resources == set()


def test_state_is_read_once(tmp_path):
    write_state(tmp_path, [{"type": "akamai_gtm_domain", "name": "domain"}])
    state = TerraformState(tmp_path)
    assert state.has_resource("akamai_gtm_domain", "domain")

    write_state(tmp_path, [])

    assert state.has_resource("akamai_gtm_domain", "domain")
