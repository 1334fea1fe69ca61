import pytest

from utils.roles import (
    DEFAULT_ROLE_LABEL,
    ROLE_CAPABILITIES,
    ROLE_LABELS,
    Role,
    capabilities_for,
    page_for_target,
    resolve,
)

SECTION_TITLES = [
    "الإحصائيات",
    "إدارة الحجوزات",
    "إدارة الطلاب",
    "إدارة الموارد",
    "التقارير المالية",
    "إدارة النظام",
]


def _titles(resolution):
    return [s.title for s in resolution.navigation]


def _targets(resolution):
    return [item.target for s in resolution.navigation for item in s.items]


def test_every_role_has_capabilities_and_label():
    for role in Role:
        assert role in ROLE_CAPABILITIES
        assert role in ROLE_LABELS


@pytest.mark.parametrize("role", ["owner", "manager"])
def test_owner_and_manager_are_privileged(role):
    caps = capabilities_for(role)
    assert caps.can_create_booking
    assert caps.is_owner_or_admin
    assert caps.is_resource_manager


@pytest.mark.parametrize("role", ["space_manager", "read_only", "teacher", None, "", "superuser"])
def test_other_roles_cannot_create_bookings(role):
    caps = capabilities_for(role)
    assert not caps.can_create_booking
    assert not caps.is_owner_or_admin


def test_space_manager_is_resource_manager_only():
    caps = capabilities_for(Role.SPACE_MANAGER)
    assert caps.is_resource_manager
    assert not caps.is_owner_or_admin


@pytest.mark.parametrize("role", ["read_only", "teacher"])
def test_read_only_and_teacher_are_not_resource_managers(role):
    assert not capabilities_for(role).is_resource_manager


def test_admin_flag_does_not_grant_capabilities():
    resolution = resolve("teacher", True)
    assert resolution.is_admin
    assert not resolution.capabilities.is_owner_or_admin


def test_resolve_is_idempotent():
    for role in list(Role) + [None, "unknown"]:
        for flag in (True, False):
            assert resolve(role, flag) == resolve(role, flag)


def test_owner_sees_all_sections_in_fixed_order():
    resolution = resolve("owner")
    assert _titles(resolution) == SECTION_TITLES
    assert "/booking" in _targets(resolution)
    assert "/audit-logs" in _targets(resolution)


def test_teacher_navigation_hides_admin_sections():
    resolution = resolve("teacher")
    titles = _titles(resolution)
    assert "إدارة النظام" not in titles
    assert "التقارير المالية" not in titles
    assert "إدارة الموارد" not in titles
    assert "/booking" not in _targets(resolution)
    assert titles == ["الإحصائيات", "إدارة الحجوزات", "إدارة الطلاب"]


def test_space_manager_navigation():
    resolution = resolve("space_manager")
    assert _titles(resolution) == ["الإحصائيات", "إدارة الحجوزات", "إدارة الطلاب", "إدارة الموارد"]
    resources = resolution.navigation[3]
    assert [i.target for i in resources.items] == ["/halls", "/teachers", "/subjects", "/stages"]
    assert "/booking" not in _targets(resolution)


def test_booking_section_keeps_all_bookings_for_everyone():
    bookings = resolve(None).navigation[1]
    assert [i.target for i in bookings.items] == ["/bookings"]


def test_role_labels():
    assert resolve("owner").role_label == "مالك"
    assert resolve("manager").role_label == "مدير"
    assert resolve("space_manager").role_label == "مدير قاعات"
    assert resolve("teacher").role_label == "معلم"
    assert resolve("read_only").role_label == "قراءة فقط"
    assert resolve("nobody").role_label == DEFAULT_ROLE_LABEL
    assert resolve().role_label == DEFAULT_ROLE_LABEL


def test_role_parse():
    assert Role.parse(" Owner ") is Role.OWNER
    assert Role.parse(Role.TEACHER) is Role.TEACHER
    assert Role.parse(None) is None
    assert Role.parse("admin") is None


def test_page_for_target():
    assert page_for_target("/") == "dashboard"
    assert page_for_target("/audit-logs") == "audit_logs"
    assert page_for_target("/class-financial-reports") == "class_financial_reports"
