import logging

import pandas as pd
import streamlit as st

from utils.audit import AuditViewState, DataUnavailable, audit_log_enabled, audit_view_state, load_audit_trail
from utils.database import supabase
from utils.session import current_session
from utils.ui import redirect_to_login

logger = logging.getLogger(__name__)

session = current_session()

if session.loading:
    st.info("جاري التحميل...")
    st.stop()

# Non owner/manager sessions never issue the audit query.
if audit_view_state(session) is AuditViewState.UNAUTHORIZED:
    redirect_to_login()
    st.stop()

st.title("سجل التدقيق")

entries = None
error = None
if audit_log_enabled(session):
    with st.spinner("جاري تحميل السجلات..."):
        try:
            entries = load_audit_trail(supabase)
        except DataUnavailable as e:
            logger.error("Audit log unavailable for %s: %s", session.user_id, e)
            error = e

state = audit_view_state(session, entries, error)

st.subheader("سجل أنشطة النظام")
st.caption("عرض جميع العمليات التي تم تنفيذها في النظام")

if state is AuditViewState.ERROR:
    st.error("تعذر تحميل سجل التدقيق. يرجى المحاولة مرة أخرى.")
    if st.button("إعادة المحاولة"):
        st.rerun()
elif state is AuditViewState.EMPTY:
    st.info("لا توجد سجلات. لم يتم تسجيل أي أنشطة بعد")
elif state is AuditViewState.POPULATED:
    rows = []
    for entry in entries:
        rows.append({
            'المستخدم': entry.actor_display_name,
            'النشاط': entry.badge_label,
            'الوصف': entry.action_label,
            'التفاصيل': "\n".join(entry.rendered_detail),
            'التاريخ': entry.occurred_at_display,
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
