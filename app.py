import atexit
import logging
import os

import streamlit as st

# --- OTel & Observability Imports ---
from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

# --- Prometheus Import ---
from prometheus_client import start_http_server

# --- Application Imports ---
from trivia.config import GameConfig
from trivia.fsm import QuizState
from trivia.quiz.adapters.registry import build_question_source
from trivia.quiz.application.service import QuizService
from trivia.quiz.presentation.state_provider import StreamlitStateProvider
from trivia.quiz.presentation.viewmodel import GameController
from trivia.quiz.presentation.views import (
    components,
    question_view,
    setup_view,
    summary_view,
)


def configure_observability():
    """
    Sends traces and logs over OTLP when the OTEL env vars are present.
    Starts a background Prometheus server for metrics.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if endpoint and headers:
        resource = Resource.create({"service.name": "trivia-game"})

        trace_provider = TracerProvider(resource=resource)
        trace_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, headers=headers))
        )
        trace.set_tracer_provider(trace_provider)

        logger_provider = LoggerProvider(resource=resource)
        logger_provider.add_log_record_processor(
            BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, headers=headers))
        )
        set_logger_provider(logger_provider)
        handler = LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
        logging.getLogger().addHandler(handler)
    else:
        logging.warning("OTEL env vars not set. Telemetry will not be sent to Cloud.")

    try:
        start_http_server(GameConfig.METRICS_PORT)
        logging.info(f"Prometheus metrics server started on port {GameConfig.METRICS_PORT}")
    except OSError:
        logging.warning("Prometheus port already in use (likely Streamlit reload). Skipping.")


if "observability_configured" not in st.session_state:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    configure_observability()
    st.session_state.observability_configured = True


# --- Dependency Injection (Composition Root) ---
@st.cache_resource
def get_service() -> QuizService:
    service = QuizService(build_question_source(GameConfig.QUESTION_SOURCE))
    atexit.register(service.close)
    return service


def main():
    st.set_page_config(page_title=GameConfig.APP_TITLE, layout="centered")
    components.apply_styles()

    vm = GameController(get_service(), StreamlitStateProvider())
    components.render_prompt(vm.consume_prompt())

    state = vm.current_state

    if state == QuizState.SETUP:
        setup_view.render(vm)

    elif state == QuizState.LOADING:
        # Only reachable if a previous run was interrupted mid-load.
        st.info("Loading questions...")
        if st.button("Back"):
            vm.reset()
            st.rerun()

    elif state == QuizState.QUESTION_ACTIVE:
        question_view.render_active(vm)

    elif state == QuizState.ANSWER_REVEALED:
        question_view.render_feedback(vm)

    elif state == QuizState.FINISHED:
        summary_view.render(vm)


if __name__ == "__main__":
    main()
