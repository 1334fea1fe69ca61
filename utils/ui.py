import logging

import streamlit as st
from streamlit.errors import StreamlitAPIException

from utils.roles import Resolution, page_for_target

logger = logging.getLogger(__name__)


def hide_page_list():
    """Hide Streamlit's auto-generated Pages list in the sidebar.

    Navigation is rendered by `render_navigation` from the resolved role, so
    the built-in list would expose pages the user can't open.
    """
    st.markdown(
        """
        <style>
        div[data-testid="stSidebarNav"] {
            display: none !important;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def safe_rerun():
    """Rerun the script, falling back to a client-side reload."""
    try:
        st.rerun()
    except StreamlitAPIException:
        st.markdown("<script>window.location.reload()</script>", unsafe_allow_html=True)
        st.stop()


def go_to(target: str):
    """Route a navigation path (e.g. '/audit-logs') through the dispatcher."""
    logger.debug("Navigating to %s", target)
    st.session_state['page'] = page_for_target(target)
    safe_rerun()


def redirect_to_login():
    st.session_state['page'] = 'login'
    safe_rerun()


def icon_for(token: str) -> str:
    return f":material/{token}:" if token else ""


def render_navigation(resolution: Resolution, session, on_sign_out=None):
    """Render the role-filtered menu, user badge and sign-out in the sidebar."""
    current = st.session_state.get('page')
    with st.sidebar:
        st.markdown("### نادي العلوم")
        st.caption("نظام إدارة القاعات")

        for section in resolution.navigation:
            st.markdown(f"**{section.title}**")
            for item in section.items:
                page = page_for_target(item.target)
                if st.button(
                    item.title,
                    key=f"nav_{page}",
                    icon=icon_for(item.icon),
                    help=item.description,
                    use_container_width=True,
                    type="primary" if page == current else "secondary",
                ):
                    go_to(item.target)

        st.markdown("---")
        st.write(session.display_name or session.email or "مستخدم")
        st.caption(resolution.role_label)

        if st.button("تسجيل الخروج", key="nav_sign_out", icon=icon_for("logout"), use_container_width=True):
            if on_sign_out is not None:
                on_sign_out()
            redirect_to_login()
