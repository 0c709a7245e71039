"""Unit tests for role-ordered access control."""

import itertools

import pytest

from fluent_admin.kernel.errors import ErrorKind, Forbidden
from fluent_admin.kernel.models.user import UserRole
from fluent_admin.kernel.permissions import (
    MINIMUM_ADMIN_ROLE,
    ROLE_RANK,
    authorize,
    is_administrative,
    role_satisfies,
)

ORDERED_ROLES = [UserRole.USER, UserRole.ADMIN, UserRole.SUPER_ADMIN]


class TestRoleOrder:

    def test_every_role_is_ranked(self):
        assert set(ROLE_RANK) == set(UserRole)

    def test_rank_follows_declaration_order(self):
        assert [ROLE_RANK[r] for r in ORDERED_ROLES] == sorted(ROLE_RANK.values())

    @pytest.mark.parametrize("subject, required", itertools.product(ORDERED_ROLES, repeat=2))
    def test_allowed_iff_subject_ranks_at_or_above(self, subject: UserRole, required: UserRole):
        expected = ORDERED_ROLES.index(subject) >= ORDERED_ROLES.index(required)

        assert role_satisfies(subject, required) is expected

    def test_monotonic(self):
        """If a role is allowed, every higher role is allowed too."""
        for required in ORDERED_ROLES:
            allowed = [role_satisfies(subject, required) for subject in ORDERED_ROLES]
            first = allowed.index(True)
            assert all(allowed[first:])
            assert not any(allowed[:first])

    def test_accepts_string_values(self):
        assert role_satisfies("super_admin", "admin") is True
        assert role_satisfies("user", "admin") is False


class TestAuthorize:

    def test_allows_equal_role(self):
        authorize(UserRole.ADMIN, UserRole.ADMIN)

    def test_allows_higher_role(self):
        authorize(UserRole.SUPER_ADMIN, UserRole.ADMIN)

    def test_denies_lower_role(self):
        with pytest.raises(Forbidden) as exc_info:
            authorize(UserRole.ADMIN, UserRole.SUPER_ADMIN)

        assert exc_info.value.kind == ErrorKind.FORBIDDEN
        assert exc_info.value.message == "Insufficient permissions"

    def test_denies_standard_user_everything_administrative(self):
        for required in (UserRole.ADMIN, UserRole.SUPER_ADMIN):
            with pytest.raises(Forbidden):
                authorize(UserRole.USER, required)


class TestAdministrativeRoles:

    def test_only_admin_roles_are_administrative(self):
        assert is_administrative(UserRole.ADMIN)
        assert is_administrative(UserRole.SUPER_ADMIN)
        assert not is_administrative(UserRole.USER)

    def test_minimum_admin_role_is_the_lowest_administrative_role(self):
        assert is_administrative(MINIMUM_ADMIN_ROLE)
        assert all(role_satisfies(role, MINIMUM_ADMIN_ROLE) for role in ORDERED_ROLES if is_administrative(role))
        assert not role_satisfies(UserRole.USER, MINIMUM_ADMIN_ROLE)
