import streamlit as st

from frontend.pages import HOME, PAGES, ROUTES

# --- CONFIGURATION & DESIGN ---
st.set_page_config(page_title="StockBox", layout="wide", page_icon="📦")

st.markdown("""
    <style>
    .stMetric {
        background-color: #f3f4f6;
        padding: 15px;
        border-radius: 10px;
        border-left: 5px solid #2563eb;
    }
    h1 {
        color: #1d4ed8;
    }
    .stButton>button {
        width: 100%;
        border-radius: 5px;
        font-weight: bold;
    }
    </style>
    """, unsafe_allow_html=True)

# --- NAVIGATION ---
if "page" not in st.session_state:
    st.session_state["page"] = HOME

st.sidebar.title("📦 StockBox")
# la page courante peut aussi être changée par les boutons des écrans
choice = st.sidebar.radio("Navegação", PAGES, index=PAGES.index(st.session_state["page"]))
if choice != st.session_state["page"]:
    st.session_state["page"] = choice
    st.rerun()

ROUTES[st.session_state["page"]]()
