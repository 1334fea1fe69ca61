import streamlit as st
from utils.audit import DataUnavailable
from utils.database import supabase
from utils.session import current_session
from utils.students import contact_lines, fetch_student, registration_lines
from utils.ui import go_to, redirect_to_login

session = current_session()
if not session.is_authenticated:
    redirect_to_login()
    st.stop()

# The students list page stores the selected id before routing here.
student_id = st.session_state.get('student_id')
if not student_id:
    try:
        student_id = st.query_params.get('student_id')
    except Exception:
        student_id = None

back_col, title_col = st.columns([1, 8])
with back_col:
    if st.button("رجوع", key="student_profile_back"):
        go_to("/students")
with title_col:
    st.title("ملف الطالب")

student = None
try:
    with st.spinner("جاري التحميل..."):
        student = fetch_student(supabase, student_id)
except DataUnavailable:
    student = None

if not student:
    st.error("تعذر تحميل بيانات الطالب")
    st.stop()

st.subheader(student.get('name') or '-')
st.caption(f"رقم: {student.get('serial_number') or '-'}")

col1, col2 = st.columns(2)
with col1:
    st.markdown("**معلومات الاتصال**")
    for label, value in contact_lines(student):
        st.write(f"{label}: {value}")
with col2:
    st.markdown("**معلومات التسجيل**")
    for label, value in registration_lines(student):
        st.write(f"{label}: {value}")
