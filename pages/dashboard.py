import streamlit as st
from utils.roles import resolve
from utils.session import current_session
from utils.ui import go_to, icon_for, redirect_to_login

session = current_session()
if not session.is_authenticated:
    redirect_to_login()
    st.stop()

resolution = resolve(session.role, session.is_admin)

st.title("لوحة التحكم")
st.write(f"مرحباً {session.display_name or session.email or 'مستخدم'} ({resolution.role_label})")

# One card per visible section; items open the matching page.
for section in resolution.navigation:
    st.markdown("---")
    st.subheader(section.title)
    cols = st.columns(max(len(section.items), 1))
    for col, item in zip(cols, section.items):
        with col:
            st.caption(item.description)
            if st.button(item.title, key=f"dash_{item.target}", icon=icon_for(item.icon)):
                go_to(item.target)
