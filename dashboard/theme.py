import streamlit as st

from dashboard.constants import DAY_STATUS_COLORS

THEME = {
    "bg_main": "#0f172a",
    "bg_card": "#111c33",
    "bg_panel": "#1e293b",
    "border": "#334155",
    "text_main": "#f1f5f9",
    "text_soft": "#94a3b8",
    "button": "#1f6f4a",
    "button_hover": "#22c55e",
    "today_border": "#facc15",
    "divider": "rgba(255,255,255,0.08)",
}


def inject_theme_css():
    variables = "\n".join(f"    --{key.replace('_', '-')}: {value};" for key, value in THEME.items())
    status_vars = "\n".join(f"    --day-{key}: {value};" for key, value in DAY_STATUS_COLORS.items())
    st.markdown(
        f"""
<style>
:root {{
{variables}
{status_vars}
}}
.stApp {{
    background: var(--bg-main);
    color: var(--text-main);
}}
.stButton > button {{
    background: var(--button);
    color: var(--text-main);
    border: 1px solid var(--border);
    border-radius: 10px;
}}
.stButton > button:hover {{
    background: var(--button-hover);
}}
.sticky-header-wrap {{
    position: sticky;
    top: 0;
    z-index: 20;
    padding: 0.4rem 0;
    background: var(--bg-main);
    border-bottom: 1px solid var(--divider);
}}
.section-title {{
    font-size: 1.15rem;
    font-weight: 600;
    margin: 0.6rem 0 0.3rem;
}}
.small-label {{
    font-size: 0.8rem;
    color: var(--text-soft);
    text-transform: uppercase;
    letter-spacing: 0.04em;
}}
.panel {{
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 12px;
    padding: 0.8rem 1rem;
}}
.tag-chip {{
    display: inline-block;
    padding: 0.1rem 0.55rem;
    margin: 0 0.25rem 0.25rem 0;
    border-radius: 999px;
    font-size: 0.75rem;
    color: #ffffff;
}}
.today-cell {{
    outline: 2px solid var(--today-border);
}}
</style>
""",
        unsafe_allow_html=True,
    )
