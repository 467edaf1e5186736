import streamlit as st

from trivia.quiz.presentation.views import components
from trivia.quiz.presentation.viewmodel import GameController


def render_active(vm: GameController) -> None:
    snap = vm.snapshot()
    q = snap.current_question
    if q is None:
        st.error("No active question.")
        return

    components.render_progress(snap.current_index, snap.total, q.category, snap.score)
    st.subheader(f"Question {snap.current_index + 1} of {snap.total}")
    st.markdown(f'<div class="question-text">{q.text}</div>', unsafe_allow_html=True)

    for idx, text in enumerate(q.options):
        marker = "🔘" if snap.selected_option == idx else "⚪"
        if st.button(
            f"{marker} {text}",
            key=f"opt_{snap.current_index}_{idx}",
            use_container_width=True,
        ):
            vm.select_option(idx)
            st.rerun()

    if st.button("Check ✅", type="primary", use_container_width=True):
        vm.check_answer()
        st.rerun()


def render_feedback(vm: GameController) -> None:
    snap = vm.snapshot()
    q = snap.current_question
    if q is None:
        st.error("No active question.")
        return

    components.render_progress(snap.current_index + 1, snap.total, q.category, snap.score)
    st.subheader(f"Question {snap.current_index + 1} of {snap.total}")
    st.markdown(f'<div class="question-text">{q.text}</div>', unsafe_allow_html=True)

    # Options are inert once revealed
    for idx, text in enumerate(q.options):
        if idx == q.correct_option_index:
            st.success(f"✅ {text}")
        elif idx == snap.selected_option:
            st.error(f"❌ {text}")
        else:
            st.info(text)

    is_last = snap.current_index + 1 >= snap.total
    label = "Finish 🏁" if is_last else "Next ➡️"
    if st.button(label, type="primary", use_container_width=True):
        vm.advance()
        st.rerun()
