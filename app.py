import streamlit as st
from datetime import datetime

from infrastructure.observability import setup_observability
setup_observability()

from utils import session_manager
from views import login_view

st.set_page_config(page_title="Sign in - Q&A Assistant", page_icon="🔐", layout="centered")

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.utcnow().isoformat()})
    st.stop()

# --- SIGN-IN GATE ---
# mount (once per browser session) -> rebind adapters -> push session status -> render
session_manager.init_session_state()
login_controller = session_manager.mount_login_controller()
login_view.render_login_screen(login_controller)
