"""
Audit trail reconstruction.

Turns raw `audit_logs` rows into display-ready entries: actor names are
joined from `profiles`, action codes are translated and classified, and the
free-form `details` payload is flattened into "key: value" lines.

The supabase client is always passed in explicitly so the fetch helpers can
be exercised with a mock client.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from utils.roles import capabilities_for

logger = logging.getLogger(__name__)

AUDIT_TABLE = "audit_logs"
DIRECTORY_TABLE = "profiles"

UNKNOWN_ACTOR = "Unknown User"
EMPTY_DETAIL = "-"

ACTION_LABELS: Dict[str, str] = {
    "user_created": "إنشاء مستخدم",
    "user_updated": "تحديث مستخدم",
    "user_deleted": "حذف مستخدم",
    "booking_created": "إنشاء حجز",
    "booking_updated": "تحديث حجز",
    "booking_deleted": "حذف حجز",
    "teacher_created": "إنشاء معلم",
    "teacher_updated": "تحديث معلم",
    "teacher_deleted": "حذف معلم",
    "hall_created": "إنشاء قاعة",
    "hall_updated": "تحديث قاعة",
    "hall_deleted": "حذف قاعة",
    "subject_created": "إنشاء مادة",
    "subject_updated": "تحديث مادة",
    "subject_deleted": "حذف مادة",
    "stage_created": "إنشاء مرحلة",
    "stage_updated": "تحديث مرحلة",
    "stage_deleted": "حذف مرحلة",
}

CATEGORY_CREATE = "create"
CATEGORY_UPDATE = "update"
CATEGORY_DELETE = "delete"
CATEGORY_OTHER = "other"

ACTION_CATEGORIES: Dict[str, str] = {
    code: (
        CATEGORY_CREATE if code.endswith("_created")
        else CATEGORY_UPDATE if code.endswith("_updated")
        else CATEGORY_DELETE
    )
    for code in ACTION_LABELS
}

# Fallback for codes outside ACTION_CATEGORIES, checked in this order.
_CATEGORY_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("created", CATEGORY_CREATE),
    ("updated", CATEGORY_UPDATE),
    ("deleted", CATEGORY_DELETE),
)

CATEGORY_BADGES: Dict[str, str] = {
    CATEGORY_CREATE: "إضافة",
    CATEGORY_UPDATE: "تعديل",
    CATEGORY_DELETE: "حذف",
}


class DataUnavailable(RuntimeError):
    """Raised when the audit log or the actor directory can't be fetched."""


@dataclass(frozen=True)
class AuditEvent:
    id: Any
    actor_user_id: Optional[str]
    action: str
    details: Any
    occurred_at: datetime

    def __post_init__(self):
        # Naive or textual timestamps would not sort against UTC ones
        object.__setattr__(self, "occurred_at", parse_timestamp(self.occurred_at))

    @classmethod
    def from_row(cls, row: dict) -> "AuditEvent":
        return cls(
            id=row.get("id"),
            actor_user_id=row.get("actor_user_id"),
            action=row.get("action") or "",
            details=row.get("details"),
            occurred_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class ActorDirectoryEntry:
    user_id: str
    display_name: str

    @classmethod
    def from_row(cls, row: dict) -> "ActorDirectoryEntry":
        return cls(user_id=row.get("user_id"), display_name=row.get("name"))


@dataclass(frozen=True)
class EnrichedAuditEntry:
    id: Any
    actor_display_name: str
    action_code: str
    action_label: str
    action_category: str
    rendered_detail: Tuple[str, ...]
    occurred_at: datetime

    @property
    def badge_label(self) -> str:
        return CATEGORY_BADGES.get(self.action_category, self.action_code)

    @property
    def occurred_at_display(self) -> str:
        return self.occurred_at.strftime("%d/%m/%Y %H:%M")


def parse_timestamp(value) -> datetime:
    """Parse a Supabase timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        dt = value
    elif value:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Unparseable audit timestamp %r", value)
            dt = datetime.min
    else:
        dt = datetime.min
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def action_label(code: str) -> str:
    return ACTION_LABELS.get(code, code)


def action_category(code: str) -> str:
    if code in ACTION_CATEGORIES:
        return ACTION_CATEGORIES[code]
    for marker, category in _CATEGORY_MARKERS:
        if marker in (code or ""):
            return category
    return CATEGORY_OTHER


def display_value(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return repr(value)
    try:
        return str(value)
    except Exception:
        return repr(value)


def render_detail(details) -> Tuple[str, ...]:
    """Flatten an event's details payload into display lines.

    A missing or empty-string payload renders as a single "-" line. Anything
    that isn't a mapping (after decoding JSON text) becomes one stringified line.
    """
    if details is None or details == "":
        return (EMPTY_DETAIL,)
    if isinstance(details, str):
        try:
            decoded = json.loads(details)
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            details = decoded
    if isinstance(details, dict):
        return tuple(f"{key}: {display_value(value)}" for key, value in details.items())
    return (display_value(details),)


def _id_sort_key(event):
    # Numeric ids compare as numbers and sort before textual ones
    if isinstance(event.id, (int, float)) and not isinstance(event.id, bool):
        return (0, event.id, "")
    return (1, 0, str(event.id))


def reconstruct(events: Iterable[AuditEvent],
                directory: Iterable[ActorDirectoryEntry]) -> List[EnrichedAuditEntry]:
    """Join events with actor names and sort them most recent first.

    Ties on the timestamp are ordered by id so repeated renders agree.
    """
    names = {}
    for entry in directory:
        if entry.user_id is not None:
            names[entry.user_id] = entry.display_name

    ordered = sorted(events, key=_id_sort_key)
    ordered = sorted(ordered, key=lambda e: e.occurred_at, reverse=True)

    entries = []
    for event in ordered:
        entries.append(EnrichedAuditEntry(
            id=event.id,
            actor_display_name=names.get(event.actor_user_id) or UNKNOWN_ACTOR,
            action_code=event.action,
            action_label=action_label(event.action),
            action_category=action_category(event.action),
            rendered_detail=render_detail(event.details),
            occurred_at=event.occurred_at,
        ))
    return entries


def distinct_actor_ids(events: Iterable[AuditEvent]) -> List[str]:
    ids = []
    seen = set()
    for event in events:
        if event.actor_user_id and event.actor_user_id not in seen:
            seen.add(event.actor_user_id)
            ids.append(event.actor_user_id)
    return ids


def fetch_audit_events(client, limit: Optional[int] = None) -> List[AuditEvent]:
    try:
        query = (
            client.table(AUDIT_TABLE)
            .select("id,actor_user_id,action,details,created_at")
            .order("created_at", desc=True)
        )
        if limit:
            query = query.limit(limit)
        res = query.execute()
    except Exception as e:
        logger.error("Failed to fetch %s: %s", AUDIT_TABLE, e)
        raise DataUnavailable(f"Failed to load audit logs: {e}") from e
    return [AuditEvent.from_row(row) for row in (res.data or [])]


def fetch_actor_directory(client, user_ids: Sequence[str]) -> List[ActorDirectoryEntry]:
    if not user_ids:
        return []
    try:
        res = (
            client.table(DIRECTORY_TABLE)
            .select("user_id,name")
            .in_("user_id", list(user_ids))
            .execute()
        )
    except Exception as e:
        logger.error("Failed to fetch %s for %d actors: %s", DIRECTORY_TABLE, len(user_ids), e)
        raise DataUnavailable(f"Failed to load user profiles: {e}") from e
    return [ActorDirectoryEntry.from_row(row) for row in (res.data or [])]


def load_audit_trail(client, limit: Optional[int] = None) -> List[EnrichedAuditEntry]:
    """Fetch events, then the profiles of exactly their actors, and join.

    The directory query depends on the event query's result, so the two
    fetches always run in that order.
    """
    events = fetch_audit_events(client, limit=limit)
    directory = fetch_actor_directory(client, distinct_actor_ids(events))
    logger.debug("Reconstructing %d audit events with %d known actors", len(events), len(directory))
    return reconstruct(events, directory)


class AuditViewState(str, Enum):
    LOADING = "loading"
    UNAUTHORIZED = "unauthorized"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"


def audit_log_enabled(session) -> bool:
    """Whether the audit query may be issued at all for this session."""
    if session.loading or not session.user_id:
        return False
    return capabilities_for(session.role).is_owner_or_admin


def audit_view_state(session, entries: Optional[Sequence[EnrichedAuditEntry]] = None,
                     error: Optional[Exception] = None) -> AuditViewState:
    if session.loading:
        return AuditViewState.LOADING
    if not audit_log_enabled(session):
        return AuditViewState.UNAUTHORIZED
    if error is not None:
        return AuditViewState.ERROR
    if entries is None:
        return AuditViewState.LOADING
    if not entries:
        return AuditViewState.EMPTY
    return AuditViewState.POPULATED
