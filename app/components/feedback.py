from __future__ import annotations

from typing import Any

import streamlit as st


def show_result(result: Any) -> bool:
    """
    Surface a service result's warning or error.

    Returns False when the caller should stop rendering (an error was shown).
    Works for read results (warning/error) and WriteResult (ok/message/errors).
    """
    error = getattr(result, "error", None)
    if error is None and getattr(result, "ok", True) is False:
        error = getattr(result, "message", None) or "Something went wrong."

    if error:
        st.toast(error, icon="⚠️")
        st.error(error)
        for detail in getattr(result, "errors", None) or []:
            st.markdown(f"- {detail}")
        return False

    warning = getattr(result, "warning", None)
    if warning:
        st.toast(warning, icon="ℹ️")
        st.warning(warning)
    return True


def show_write(result: Any) -> bool:
    """Toast the outcome of a write; errors are also shown inline."""
    if result.ok:
        st.toast(result.message, icon="✅")
        return True
    return show_result(result)
