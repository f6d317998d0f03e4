import asyncio

import streamlit as st

from use_cases.login_flow import LoginViewController, LoginViewState

REGISTER_URL = "/auth/register"
HOME_URL = "/"
TERMS_URL = "/terms"
PRIVACY_URL = "/privacy"

LOADER_HTML = """
<style>
@keyframes qa-spin { to { transform: rotate(360deg); } }
.qa-loader { margin: 30vh auto 0; width: 48px; height: 48px; border-radius: 50%;
             border-bottom: 2px solid #3b82f6; animation: qa-spin 1s linear infinite; }
</style>
<div class="qa-loader"></div>
"""


def _on_sign_in(controller: LoginViewController):
    # Button callbacks run before the rerun, so the disabled state shows up immediately.
    asyncio.run(controller.trigger_sign_in())


def render_login_screen(controller: LoginViewController) -> LoginViewState:
    state = controller.render()

    if state.phase == "checking":
        st.markdown(LOADER_HTML, unsafe_allow_html=True)
        return state

    if state.phase == "redirecting":
        st.caption(f"Redirecting to [{controller.return_target}]({controller.return_target})...")
        return state

    st.title("🔐 Q&A Assistant")
    st.subheader("Welcome Back")
    st.caption("Sign in to access the real-time Q&A assistant")

    if state.banner:
        st.warning(state.banner)

    st.button(
        state.sign_in_label,
        type="primary",
        disabled=state.sign_in_disabled,
        on_click=_on_sign_in,
        args=(controller,),
        width="stretch",
    )

    st.divider()
    st.caption("Or continue with")
    st.link_button("Create new account", REGISTER_URL, width="stretch")

    st.caption(
        f"By signing in, you agree to our [Terms of Service]({TERMS_URL}) and [Privacy Policy]({PRIVACY_URL})"
    )
    st.markdown(f"[← Back to home]({HOME_URL})")
    return state
