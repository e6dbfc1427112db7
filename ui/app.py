"""Streamlit UI for Circuit Flow - prompt to document board.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from ui.helpers import (  # noqa: E402
    build_board_regions,
    cached_download,
    download_document,
    fetch_document,
    fetch_documents,
    generate_documentation,
    get_api_base_url,
    make_client,
)

BACKEND_URL = get_api_base_url()
BOARD_COLUMNS = 5

# Page config
st.set_page_config(
    page_title="Circuit Flow",
    page_icon="🔌",
    layout="wide",
)

# Initialize session state
if "generated" not in st.session_state:
    st.session_state.generated = []
if "selected" not in st.session_state:
    st.session_state.selected = None
if "downloads" not in st.session_state:
    st.session_state.downloads = {}

# Title
st.title("🔌 Circuit Flow")
st.markdown("*Describe a product; get a PRD, TRD, architecture, API spec and deployment guide.*")
st.caption(f"API: `{BACKEND_URL}`")
st.divider()


@st.cache_resource
def get_client() -> httpx.Client:
    """One API client shared by every rerun of the page."""
    return make_client(BACKEND_URL)


def render_board(documents: list[dict], key_prefix: str, in_memory: bool) -> None:
    """Render documents as board regions with view/download controls.

    Generated documents download from memory. Catalog files are fetched only
    after "Fetch file" is clicked, then cached for the session.
    """
    regions = build_board_regions(documents)
    columns = st.columns(min(len(regions), BOARD_COLUMNS) or 1)

    for index, region in enumerate(regions):
        with columns[index % len(columns)]:
            st.markdown(f"### {region['icon']}")
            st.markdown(f"**{region['label']}**")
            st.caption(f"{region['motif']} · {region['description']}")

            if st.button("View", key=f"{key_prefix}-view-{region['id']}"):
                st.session_state.selected = (key_prefix, region["id"])

            if in_memory:
                download = download_document(get_client(), region["id"], documents)
            else:
                download = st.session_state.downloads.get(region["id"])
                if download is None and st.button(
                    "Fetch file", key=f"{key_prefix}-fetch-{region['id']}"
                ):
                    download = cached_download(
                        st.session_state.downloads, get_client(), region["id"]
                    )
                    if download is None:
                        st.caption("_Download unavailable_")

            if download is not None:
                filename, body = download
                st.download_button(
                    "Download",
                    data=body,
                    file_name=filename,
                    mime="text/markdown",
                    key=f"{key_prefix}-download-{region['id']}",
                )


# =============================================================================
# PROMPT
# =============================================================================
with st.form("prompt_form"):
    prompt = st.text_area(
        "What do you want to build? *",
        value="Build a todo app with AI",
        help="Required",
    )
    submitted = st.form_submit_button("⚡ Generate", type="primary", use_container_width=True)

    if submitted:
        if not prompt.strip():
            st.error("❌ Prompt is required")
        else:
            st.session_state.generated = generate_documentation(get_client(), prompt.strip())
            st.session_state.selected = None
            st.rerun()

# =============================================================================
# GENERATED BOARD
# =============================================================================
st.subheader("🧩 Generated Documents")

if st.session_state.generated:
    render_board(st.session_state.generated, "generated", in_memory=True)

    selected = st.session_state.selected
    if selected and selected[0] == "generated":
        doc = next((d for d in st.session_state.generated if d["id"] == selected[1]), None)
        if doc:
            with st.expander(f"📄 {doc['title']}", expanded=True):
                st.markdown(doc["content"])
else:
    st.info("👆 Enter a prompt and hit **Generate** to light up the board.")

st.divider()

# =============================================================================
# CATALOG
# =============================================================================
st.subheader("📚 Catalog")

catalog = fetch_documents(get_client())

if catalog:
    render_board(catalog, "catalog", in_memory=False)

    selected = st.session_state.selected
    if selected and selected[0] == "catalog":
        doc = fetch_document(get_client(), selected[1])
        if doc:
            with st.expander(f"📄 {doc['title']}", expanded=True):
                st.markdown(doc["content"])
        else:
            st.warning("Document not found")
else:
    st.caption("_Catalog unavailable or empty_")
