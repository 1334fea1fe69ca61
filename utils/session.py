import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import streamlit as st
from supabase import create_client

from config import SUPABASE_URL, SUPABASE_SERVICE_ROLE
from utils.roles import Role

logger = logging.getLogger(__name__)

SESSION_DEFAULTS = {
    "authenticated": False,
    "user": None,
    "user_id": None,
    "role": None,
    "email": None,
    "display_name": None,
    "is_admin": False,
    "loading": False,
}


def init_session():
    for key, value in SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value


@dataclass(frozen=True)
class SessionContext:
    """Explicit snapshot of the signed-in user, passed down to pages."""

    user_id: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[Role] = None
    is_admin: bool = False
    loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @property
    def is_owner(self) -> bool:
        return self.role is Role.OWNER

    @classmethod
    def from_state(cls, state: Mapping) -> "SessionContext":
        if not state.get("authenticated"):
            return cls(loading=bool(state.get("loading")))
        user_id = state.get("user_id")
        if not user_id:
            user = state.get("user")
            user_id = getattr(user, "id", None) or (user.get("id") if isinstance(user, dict) else None)
        return cls(
            user_id=user_id,
            email=state.get("email"),
            display_name=state.get("display_name"),
            role=Role.parse(state.get("role")),
            is_admin=bool(state.get("is_admin")),
            loading=bool(state.get("loading")),
        )


def current_session() -> SessionContext:
    return SessionContext.from_state(st.session_state)


def get_supabase_service():
    """Return a Supabase client using the service role key from SUPABASE_SERVICE_ROLE.

    Raises RuntimeError if the env var is not set.
    """
    svc = os.getenv('SUPABASE_SERVICE_ROLE') or SUPABASE_SERVICE_ROLE
    if not svc:
        raise RuntimeError('SUPABASE_SERVICE_ROLE not configured')
    url = os.getenv('SUPABASE_URL') or SUPABASE_URL
    if not url:
        raise RuntimeError('SUPABASE_URL not configured')
    return create_client(url, svc)


def fetch_profile(client, user_id: str) -> dict:
    """Load the `profiles` row (name, role, admin flag) for an auth user."""
    res = client.table("profiles").select("user_id,name,user_role,is_admin").eq("user_id", user_id).execute()
    rows = res.data or []
    return rows[0] if rows else {}


def sign_in(client, email: str, password: str, state=None) -> dict:
    """Sign in with email/password and store the profile in the session.

    Returns {'ok': True} on success or {'error': msg} on failure.
    """
    state = st.session_state if state is None else state
    state["loading"] = True
    try:
        res = client.auth.sign_in_with_password({"email": email, "password": password})
        user = getattr(res, "user", None)
        if not user:
            return {'error': 'Login failed. Check credentials or confirm email.'}
        try:
            profile = fetch_profile(client, user.id)
        except Exception as e:
            logger.error("Failed to load profile for %s: %s", user.id, e)
            profile = {}
        role = Role.parse(profile.get("user_role"))
        state["authenticated"] = True
        state["user"] = user
        state["user_id"] = user.id
        state["email"] = getattr(user, "email", None) or email
        state["display_name"] = profile.get("name")
        state["role"] = role.value if role else None
        state["is_admin"] = bool(profile.get("is_admin"))
        logger.info("Signed in %s with role %s", state["email"], state["role"])
        return {'ok': True}
    except Exception as e:
        logger.warning("Sign-in failed for %s: %s", email, e)
        return {'error': str(e)}
    finally:
        state["loading"] = False


def sign_out(client, state=None):
    state = st.session_state if state is None else state
    try:
        client.auth.sign_out()
    except Exception as e:
        logger.warning("Supabase sign-out failed: %s", e)

    # Clear session state (preserve any internal runner key)
    for k in list(state.keys()):
        if k != "_is_running":
            try:
                del state[k]
            except KeyError:
                pass
    for key, value in SESSION_DEFAULTS.items():
        state[key] = value
