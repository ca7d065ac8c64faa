# =============================================================================
# streamlit_app.py — Create App (describe → generated HTML app) & raw prompt
# =============================================================================
# Run: streamlit run streamlit_app.py
# Backend: BACKEND_URL (default http://127.0.0.1:8080)
# =============================================================================

import os

import requests
import streamlit as st
import streamlit.components.v1 as components

# No trailing slash so paths like /generate work
BASE_URL = (os.environ.get("BACKEND_URL") or "http://127.0.0.1:8080").rstrip("/")


def fetch_post_json(path: str, json_payload: dict) -> dict | None:
    path = path if path.startswith("/") else "/" + path
    url = f"{BASE_URL}{path}"
    try:
        r = requests.post(url, json=json_payload, timeout=120)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.HTTPError as e:
        detail = ""
        if e.response is not None:
            try:
                detail = e.response.json().get("error", "")
            except ValueError:
                detail = e.response.text[:500]
        st.error(f"Request failed: {e}" + (f"\n\n{detail}" if detail else ""))
        return None
    except requests.exceptions.RequestException as e:
        st.error(f"Request failed: {e}")
        return None


st.set_page_config(page_title="App Builder", layout="wide")
st.title("App Builder")
with st.sidebar:
    st.caption(f"Backend: `{BASE_URL}`")
    st.caption("Start both: `python run.py`")

tab_create, tab_prompt = st.tabs(["Create App", "Prompt"])

# -----------------------------------------------------------------------------
# Create App — description in, self-contained HTML app out
# -----------------------------------------------------------------------------
with tab_create:
    description = st.text_area(
        "Description",
        placeholder="Describe the app you want to create...",
        height=200,
        label_visibility="collapsed",
    )
    if st.button("Vibe Code It", type="primary"):
        if not (description and description.strip()):
            st.warning("Please describe the app first.")
        else:
            with st.spinner("Generating..."):
                out = fetch_post_json("/generate-app", {"prompt": description.strip()})
            if out:
                st.session_state["app_html"] = out.get("text", "")

    html = st.session_state.get("app_html")
    if html:
        st.divider()
        components.html(html, height=640, scrolling=True)
        with st.expander("HTML source"):
            st.code(html, language="html")
        st.download_button("Download", html, file_name="app.html", mime="text/html")

# -----------------------------------------------------------------------------
# Prompt — plain relay through /generate
# -----------------------------------------------------------------------------
with tab_prompt:
    prompt = st.text_area("Prompt", height=120, label_visibility="collapsed")
    if st.button("Send"):
        if not (prompt and prompt.strip()):
            st.warning("Please enter a prompt.")
        else:
            with st.spinner("Thinking..."):
                out = fetch_post_json("/generate", {"prompt": prompt.strip()})
            if out:
                st.divider()
                st.write(out.get("text", ""))
            else:
                st.info("No response. Check backend is running and ANTHROPIC_API_KEY is set.")
