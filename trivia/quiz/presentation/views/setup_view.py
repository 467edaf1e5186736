import streamlit as st

from trivia.config import GameConfig
from trivia.quiz.domain.models import Difficulty
from trivia.quiz.presentation.viewmodel import GameController


def render(vm: GameController) -> None:
    snap = vm.snapshot()
    st.title(f"🧠 {GameConfig.APP_TITLE}")

    if snap.error:
        st.error(snap.error)

    st.markdown("**Select Categories:**")
    cols = st.columns(len(GameConfig.CATEGORIES))
    for col, category in zip(cols, GameConfig.CATEGORIES):
        selected = category in snap.selected_categories
        if col.button(
            category,
            key=f"cat_{category}",
            type="primary" if selected else "secondary",
            use_container_width=True,
        ):
            vm.toggle_category(category)
            st.rerun()

    st.markdown("**Difficulty:**")
    levels = [d.value for d in Difficulty]
    difficulty = st.radio(
        "Difficulty",
        levels,
        index=levels.index(snap.difficulty.value),
        horizontal=True,
        label_visibility="collapsed",
    )
    if difficulty != snap.difficulty.value:
        vm.set_difficulty(difficulty)

    count = st.number_input(
        "Number of Questions",
        min_value=GameConfig.MIN_QUESTIONS,
        max_value=GameConfig.MAX_QUESTIONS,
        value=snap.question_count,
        step=1,
    )
    if count != snap.question_count:
        vm.set_question_count(count)

    if st.button("🚀 Start Game", type="primary"):
        with st.spinner("Loading questions..."):
            vm.start()
        st.rerun()
