import streamlit as st

from trivia.quiz.presentation.viewmodel import GameController


def render(vm: GameController) -> None:
    snap = vm.snapshot()

    st.title("🏁 Game Over!")

    col1, col2 = st.columns(2)
    col1.metric("Your score", f"{snap.score} / {snap.total}")
    col2.metric("Accuracy", f"{snap.score_percentage}%")

    with st.expander("📋 Answers", expanded=False):
        for record in snap.answers:
            q = snap.questions[record.question_index]
            icon = "✅" if record.was_correct else "❌"
            st.markdown(
                f"{icon} **{q.text}**  \n"
                f"Your answer: {q.options[record.selected_option_index]}  \n"
                f"Correct: {q.correct_option}"
            )

    if st.button("🔄 Play Again", type="primary", use_container_width=True):
        vm.reset()
        st.rerun()
