import pytest

from bizhub.domain.capabilities import (
    ALL_CAPABILITIES,
    Capability,
    parse_overrides,
    resolve_capabilities,
)
from bizhub.domain.entities import MembershipRole


def test_owner_has_everything_regardless_of_overrides():
    capabilities = resolve_capabilities(
        MembershipRole.owner, {"manage_members": False}
    )
    assert capabilities == ALL_CAPABILITIES


def test_manager_defaults():
    capabilities = resolve_capabilities(MembershipRole.manager)

    assert Capability.manage_members in capabilities
    assert Capability.manage_settings not in capabilities
    assert Capability.view_audit_log not in capabilities


def test_overrides_grant_and_revoke():
    capabilities = resolve_capabilities(
        MembershipRole.employee,
        {"view_reports": True, "manage_services": False},
    )
    assert capabilities == frozenset({Capability.view_reports})


def test_unknown_stored_keys_are_ignored():
    capabilities = resolve_capabilities(MembershipRole.employee, {"launch_rockets": True})
    assert capabilities == frozenset({Capability.manage_services})


def test_parse_overrides():
    overrides = parse_overrides({"view_reports": True, "manage_services": False})
    assert overrides == {
        Capability.view_reports: True,
        Capability.manage_services: False,
    }


@pytest.mark.parametrize(
    "raw", [{"launch_rockets": True}, {"view_reports": "yes"}, {"view_reports": 1}]
)
def test_parse_overrides_rejects_invalid(raw):
    with pytest.raises(ValueError):
        parse_overrides(raw)
