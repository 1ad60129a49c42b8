"""Tests for role-based permission resolution"""
import asyncio

import pytest

from hrdesk.domain.enums import PermissionLevel
from hrdesk.domain.models import ActorContext
from hrdesk.engine.permission_resolver import PermissionResolver, level_from_permissions
from tests.fakes import FakeRoleRepository, staff_doc


def actor_with_role(role):
    return ActorContext.from_document(staff_doc("u-1", "Test User", "test@example.com", role=role))


def make_resolver(**roles):
    return PermissionResolver(FakeRoleRepository(roles))


def resolve(resolver, role, module, page=None):
    return asyncio.run(resolver.resolve(actor_with_role(role), module, page))


class TestLevelFromPermissions:
    def test_page_level(self):
        perms = {"Leave": {"Leave Tracker": "view"}}
        assert level_from_permissions(perms, "Leave", "Leave Tracker") == PermissionLevel.VIEW

    def test_missing_page_is_none(self):
        perms = {"Leave": {"Leave Tracker": "view"}}
        assert level_from_permissions(perms, "Leave", "Upcoming Leaves") == PermissionLevel.NONE

    def test_page_map_without_page_is_none(self):
        perms = {"Leave": {"Leave Tracker": "full"}}
        assert level_from_permissions(perms, "Leave") == PermissionLevel.NONE

    def test_stored_level_is_case_sensitive(self):
        assert level_from_permissions({"Payroll": "View"}, "Payroll") == PermissionLevel.NONE
        assert level_from_permissions({"Payroll": "view"}, "Payroll") == PermissionLevel.VIEW

    def test_module_string_applies_to_every_page(self):
        perms = {"Payroll": "full"}
        assert level_from_permissions(perms, "Payroll") == PermissionLevel.FULL
        assert level_from_permissions(perms, "Payroll", "Salary Management") == PermissionLevel.FULL

    def test_unknown_level_string_is_none(self):
        assert level_from_permissions({"Payroll": "admin"}, "Payroll") == PermissionLevel.NONE

    def test_empty_map_is_none(self):
        assert level_from_permissions({}, "Payroll") == PermissionLevel.NONE
        assert level_from_permissions(None, "Payroll") == PermissionLevel.NONE


class TestResolve:
    def test_admin_is_always_full(self):
        resolver = make_resolver(admin={"Payroll": "none"})
        assert resolve(resolver, "admin", "Payroll") == PermissionLevel.FULL
        assert resolve(resolver, "admin", "Anything", "Any Page") == PermissionLevel.FULL

    def test_role_document_decides(self):
        resolver = make_resolver(payroll_officer={"Payroll": {"Salary Management": "view"}})
        assert resolve(resolver, "payroll_officer", "Payroll", "Salary Management") == PermissionLevel.VIEW
        assert resolve(resolver, "payroll_officer", "Inventory", "Create Items") == PermissionLevel.NONE

    def test_role_name_match_is_case_sensitive(self):
        resolver = make_resolver(payroll_officer={"Payroll": "full"})
        assert resolve(resolver, "Payroll_Officer", "Payroll") == PermissionLevel.NONE

    @pytest.mark.parametrize("role", ["staff", "academic_admin", "inventory_manager"])
    def test_legacy_role_without_document_is_full(self, role):
        assert resolve(make_resolver(), role, "Payroll", "Salary Management") == PermissionLevel.FULL

    def test_legacy_role_with_document_uses_document(self):
        resolver = make_resolver(staff={"Leave": {"Leave Tracker": "view"}})
        assert resolve(resolver, "staff", "Payroll", "Salary Management") == PermissionLevel.NONE
        assert resolve(resolver, "staff", "Leave", "Leave Tracker") == PermissionLevel.VIEW

    def test_unknown_role_is_none(self):
        assert resolve(make_resolver(), "ghost", "Payroll") == PermissionLevel.NONE


class TestAuthorize:
    def test_missing_actor_is_denied(self):
        decision = asyncio.run(make_resolver().authorize(None, "Payroll"))
        assert not decision.allowed
        assert decision.reason == "Not authenticated"

    def test_full_satisfies_view(self):
        resolver = make_resolver(clerk={"Payroll": "full"})
        decision = asyncio.run(resolver.authorize(actor_with_role("clerk"), "Payroll", PermissionLevel.VIEW))
        assert decision.allowed
        assert decision.level == PermissionLevel.FULL

    def test_view_does_not_satisfy_full(self):
        resolver = make_resolver(clerk={"Payroll": {"Salary Management": "view"}})
        decision = asyncio.run(resolver.authorize(
            actor_with_role("clerk"), "Payroll", PermissionLevel.FULL, "Salary Management"
        ))
        assert not decision.allowed
        assert decision.reason == "Insufficient permission for Payroll - Salary Management"

    def test_denial_without_page_names_module(self):
        decision = asyncio.run(make_resolver().authorize(actor_with_role("ghost"), "Payroll"))
        assert decision.reason == "Insufficient permission for Payroll"

    def test_required_none_always_allowed(self):
        decision = asyncio.run(make_resolver().authorize(
            actor_with_role("ghost"), "Payroll", PermissionLevel.NONE
        ))
        assert decision.allowed

    def test_granting_more_never_denies(self):
        for granted in ["none", "view", "full"]:
            resolver = make_resolver(clerk={"Payroll": granted})
            for required in PermissionLevel:
                decision = asyncio.run(resolver.authorize(actor_with_role("clerk"), "Payroll", required))
                assert decision.allowed == (PermissionLevel(granted).rank >= required.rank)


class TestPermissionLevel:
    def test_parse_invalid_is_none(self):
        assert PermissionLevel.parse("superuser") == PermissionLevel.NONE
        assert PermissionLevel.parse(None) == PermissionLevel.NONE

    def test_order(self):
        assert PermissionLevel.FULL.satisfies(PermissionLevel.VIEW)
        assert PermissionLevel.VIEW.satisfies(PermissionLevel.NONE)
        assert not PermissionLevel.VIEW.satisfies(PermissionLevel.FULL)
