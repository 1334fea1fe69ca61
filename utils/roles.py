"""
Role definitions, role-to-capability mappings and the navigation menu.

Everything here is a pure function of the role (and admin flag) held by the
current session, so pages can call `resolve()` on every rerun.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Role(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"
    SPACE_MANAGER = "space_manager"
    READ_ONLY = "read_only"
    TEACHER = "teacher"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Return the matching Role, or None for empty/unknown values."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CapabilitySet:
    can_create_booking: bool = False
    is_owner_or_admin: bool = False
    is_resource_manager: bool = False

    def has(self, name: Optional[str]) -> bool:
        # None means "no capability required"
        if name is None:
            return True
        return bool(getattr(self, name))


NO_CAPABILITIES = CapabilitySet()

ROLE_CAPABILITIES: Dict[Role, CapabilitySet] = {
    Role.OWNER: CapabilitySet(
        can_create_booking=True,
        is_owner_or_admin=True,
        is_resource_manager=True,
    ),
    Role.MANAGER: CapabilitySet(
        can_create_booking=True,
        is_owner_or_admin=True,
        is_resource_manager=True,
    ),
    # Halls, teachers, subjects and stages only
    Role.SPACE_MANAGER: CapabilitySet(is_resource_manager=True),
    Role.READ_ONLY: NO_CAPABILITIES,
    Role.TEACHER: NO_CAPABILITIES,
}

ROLE_LABELS: Dict[Role, str] = {
    Role.OWNER: "مالك",
    Role.MANAGER: "مدير",
    Role.SPACE_MANAGER: "مدير قاعات",
    Role.TEACHER: "معلم",
    Role.READ_ONLY: "قراءة فقط",
}
DEFAULT_ROLE_LABEL = "مستخدم"


@dataclass(frozen=True)
class NavigationItem:
    title: str
    target: str
    icon: str
    description: str
    requires: Optional[str] = None


@dataclass(frozen=True)
class NavigationSection:
    title: str
    items: Tuple[NavigationItem, ...]
    requires: Optional[str] = None


# Fixed menu order. `requires` names a CapabilitySet field.
NAVIGATION: Tuple[NavigationSection, ...] = (
    NavigationSection(
        title="الإحصائيات",
        items=(
            NavigationItem("لوحة التحكم", "/", "home", "نظرة عامة على النظام"),
        ),
    ),
    NavigationSection(
        title="إدارة الحجوزات",
        items=(
            NavigationItem("جميع الحجوزات", "/bookings", "calendar_month", "عرض وإدارة الحجوزات"),
            NavigationItem("حجز جديد", "/booking", "calendar_month", "إنشاء حجز جديد",
                           requires="can_create_booking"),
        ),
    ),
    NavigationSection(
        title="إدارة الطلاب",
        items=(
            NavigationItem("الطلاب", "/students", "group", "إدارة بيانات الطلاب"),
            NavigationItem("تسجيل الطلاب", "/student-registrations", "group", "تسجيل الطلاب الجدد"),
        ),
    ),
    NavigationSection(
        title="إدارة الموارد",
        requires="is_resource_manager",
        items=(
            NavigationItem("القاعات", "/halls", "apartment", "إدارة القاعات والمساحات"),
            NavigationItem("المعلمين", "/teachers", "school", "إدارة بيانات المعلمين"),
            NavigationItem("المواد الدراسية", "/subjects", "menu_book", "إدارة المواد الدراسية"),
            NavigationItem("المراحل التعليمية", "/stages", "school", "إدارة المراحل الدراسية"),
        ),
    ),
    NavigationSection(
        title="التقارير المالية",
        requires="is_owner_or_admin",
        items=(
            NavigationItem("التقارير", "/reports", "menu_book", "عرض التقارير المالية"),
            NavigationItem("تقارير المجموعات", "/class-financial-reports", "menu_book",
                           "التقارير المالية للمجموعات"),
        ),
    ),
    NavigationSection(
        title="إدارة النظام",
        requires="is_owner_or_admin",
        items=(
            NavigationItem("المستخدمين", "/users", "group", "إدارة المستخدمين والأذونات"),
            NavigationItem("سجل التدقيق", "/audit-logs", "shield", "عرض سجل أنشطة المستخدمين"),
            NavigationItem("صلاحيات المدراء", "/admin-privileges", "settings", "إدارة صلاحيات المدراء"),
            NavigationItem("الإعدادات", "/settings", "settings", "إعدادات النظام العامة"),
        ),
    ),
)


@dataclass(frozen=True)
class Resolution:
    capabilities: CapabilitySet
    navigation: Tuple[NavigationSection, ...]
    role_label: str
    role: Optional[Role] = None
    is_admin: bool = False


def capabilities_for(role) -> CapabilitySet:
    parsed = Role.parse(role)
    if parsed is None:
        return NO_CAPABILITIES
    return ROLE_CAPABILITIES[parsed]


def role_label(role) -> str:
    parsed = Role.parse(role)
    if parsed is None:
        return DEFAULT_ROLE_LABEL
    return ROLE_LABELS[parsed]


def build_navigation(capabilities: CapabilitySet) -> Tuple[NavigationSection, ...]:
    """Filter the fixed menu down to what `capabilities` may see.

    Hidden sections and items are dropped entirely; a visible section keeps
    its items in their original order.
    """
    sections = []
    for section in NAVIGATION:
        if not capabilities.has(section.requires):
            continue
        items = tuple(item for item in section.items if capabilities.has(item.requires))
        sections.append(NavigationSection(title=section.title, items=items))
    return tuple(sections)


def resolve(role=None, is_admin: bool = False) -> Resolution:
    """Compute capabilities, visible navigation and role label for a session.

    The admin flag is carried through for display only; capabilities are
    derived from the role alone.
    """
    parsed = Role.parse(role)
    capabilities = capabilities_for(parsed)
    return Resolution(
        capabilities=capabilities,
        navigation=build_navigation(capabilities),
        role_label=role_label(parsed),
        role=parsed,
        is_admin=bool(is_admin),
    )


def page_for_target(target: str) -> str:
    """Map a router path (e.g. '/audit-logs') to a dispatcher page key."""
    path = (target or "").strip().strip("/")
    if not path:
        return "dashboard"
    return path.replace("-", "_").replace("/", "_")
