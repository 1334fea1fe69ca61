import streamlit as st
from config import APP_TITLE
from utils.database import supabase
from utils.session import sign_in
from utils.ui import safe_rerun

st.title(APP_TITLE)
st.subheader("تسجيل الدخول")

with st.form("login_form"):
    email = st.text_input("البريد الإلكتروني", key="login_email")
    password = st.text_input("كلمة المرور", type="password", key="login_pw")
    submitted = st.form_submit_button("دخول")

if submitted:
    if not email or not password:
        st.error("يرجى إدخال البريد الإلكتروني وكلمة المرور.")
    else:
        with st.spinner("جاري تسجيل الدخول..."):
            result = sign_in(supabase, email, password)
        if result.get('ok'):
            st.session_state['page'] = 'dashboard'
            safe_rerun()
        else:
            st.error("فشل تسجيل الدخول. تحقق من البيانات أو قم بتأكيد بريدك الإلكتروني.")
            with st.expander("Details"):
                st.write(result.get('error'))
