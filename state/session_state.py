"""
Session State Utilities

Thin helpers over ``st.session_state`` for the page's widget keys.
Presentation layer only; services never import this module.
"""

import streamlit as st
from typing import TypeVar, Any, Optional

T = TypeVar('T')


def ss_get(key: str, default: T = None) -> Optional[T]:
    """Return session_state[key] when it is set and not None, else default."""
    value = st.session_state.get(key)
    return default if value is None else value


def ss_init(defaults: dict[str, Any]) -> None:
    """Seed widget keys on the first run of a session.

    Args:
        defaults: Mapping of key to initial value; existing keys are left alone
    """
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


def ss_set(key: str, value: Any) -> None:
    st.session_state[key] = value
