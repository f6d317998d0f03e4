import streamlit as st

import auth
from use_cases.login_flow import LoginParams, LoginViewController
from use_cases.session_models import SessionStatusCell

"""
SESSION STATE CONTRACT

This module owns the Streamlit session state of the sign-in gate.

st.session_state keys:

session_cell: SessionStatusCell | None
    observable session status of the current browser session
    default: None (created on first access, starts as "loading")
    owner: session_manager

login_controller: LoginViewController | None
    login view controller; survives reruns, one per mounted view
    default: None
    owner: session_manager
"""


def init_session_state():
    if "session_cell" not in st.session_state:
        st.session_state.session_cell = None
    if "login_controller" not in st.session_state:
        st.session_state.login_controller = None


def get_session_cell() -> SessionStatusCell:
    if st.session_state.session_cell is None:
        st.session_state.session_cell = SessionStatusCell()
    return st.session_state.session_cell


def refresh_session_status(cell: SessionStatusCell) -> None:
    cell.set(auth.current_session_status())


def read_login_params() -> LoginParams:
    query = auth.read_login_query(auth.current_session_status())
    return LoginParams.from_query(query, fallback=auth.default_return_url())


def _build_login_controller(cell: SessionStatusCell, params: LoginParams) -> LoginViewController:
    return LoginViewController(
        cell,
        params,
        navigate_to=auth.navigate_to,
        notify=auth.notify,
        begin_oauth_sign_in=auth.begin_oauth_sign_in,
        provider=auth.oauth_provider(),
    )


def mount_login_controller() -> LoginViewController:
    """
    Return the login controller for this browser session, mounting it on first use.

    Different query parameters on a rerun mean the user navigated to a new
    login view: the old controller is torn down and a fresh one is mounted.
    A controller that is already redirecting is kept until the page leaves.
    Every rerun rebinds the Streamlit adapters and then pushes the current
    session status, so redirects always go through the latest capabilities.
    """
    cell = get_session_cell()
    params = read_login_params()
    controller = st.session_state.login_controller
    if controller is not None and _is_new_view(controller, params):
        controller.teardown()
    if controller is None or controller.is_destroyed:
        controller = _build_login_controller(cell, params)
        st.session_state.login_controller = controller
    else:
        controller.rebind(
            navigate_to=auth.navigate_to,
            notify=auth.notify,
            begin_oauth_sign_in=auth.begin_oauth_sign_in,
        )
    controller.mount()
    refresh_session_status(cell)
    if controller.render().phase == "ready":
        auth.remember_return_url(controller.return_target)
    return controller


def _is_new_view(controller: LoginViewController, params: LoginParams) -> bool:
    if controller.is_destroyed or controller.render().phase == "redirecting":
        return False
    return controller.params != params
