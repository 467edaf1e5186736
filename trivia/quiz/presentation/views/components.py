import streamlit as st

from trivia.config import Category


def apply_styles():
    st.markdown("""
        <style>
            .block-container { padding-top: 2rem !important; }
            .stat-box { padding: 10px; background-color: #f0f2f6; border-radius: 5px; text-align: center; font-weight: bold; }
            .question-text { font-size: 1.2rem; font-weight: 600; margin-bottom: 1rem; }
        </style>
    """, unsafe_allow_html=True)


def render_prompt(message: str | None):
    if message:
        st.warning(message, icon="⚠️")


def render_progress(current: int, total: int, category: str, score: int):
    col1, col2 = st.columns(2)
    col1.markdown(
        f'<div class="stat-box">{Category.get_icon(category)} {category}</div>',
        unsafe_allow_html=True,
    )
    col2.markdown(f'<div class="stat-box">🎯 {score} pts</div>', unsafe_allow_html=True)
    st.progress(current / total if total else 0.0)
