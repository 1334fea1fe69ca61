import logging
import os
import runpy

import streamlit as st

from config import APP_TITLE, LOG_LEVEL
from utils.database import supabase
from utils.roles import resolve
from utils.session import current_session, init_session, sign_out
from utils.ui import hide_page_list, render_navigation

# Configure the app once (must be called only once) and before any other Streamlit calls
st.set_page_config(page_title=APP_TITLE, layout="wide")

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("console")

# Ensure session state defaults exist for all pages
init_session()
hide_page_list()

# Unauthenticated sessions always land on the login page.
if not st.session_state.get("authenticated"):
    st.session_state['page'] = 'login'
elif not st.session_state.get('page') or st.session_state.get('page') == 'login':
    st.session_state['page'] = 'dashboard'

session = current_session()
if session.is_authenticated:
    render_navigation(
        resolve(session.role, session.is_admin),
        session,
        on_sign_out=lambda: sign_out(supabase),
    )


# Simple dispatcher: execute the `pages/<page>.py` module matching the
# `page` session key so navigation works without Streamlit's Pages list.
def _dispatch_page():
    page = st.session_state.get('page')
    base_dir = os.path.dirname(__file__)
    candidate = os.path.join(base_dir, 'pages', f"{page}.py")
    if not os.path.isfile(candidate):
        logger.info("No page module for %r", page)
        st.title(APP_TITLE)
        st.info("هذه الصفحة غير متوفرة في هذه النسخة من لوحة التحكم.")
        if st.button("العودة إلى لوحة التحكم"):
            st.session_state['page'] = 'dashboard'
            st.rerun()
        return

    logger.debug("Dispatching page %s", page)
    runpy.run_path(candidate, run_name="__main__")


_dispatch_page()
