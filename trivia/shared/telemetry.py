import logging
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from prometheus_client import REGISTRY, Counter, Histogram

# --- Context for Correlation IDs ---
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="system")


def _get_or_create(factory: Callable[[], Any], name: str) -> Any:
    # Streamlit re-imports modules on rerun; the registry keeps the first instance.
    try:
        return factory()
    except ValueError:
        return REGISTRY._names_to_collectors[name]


METHOD_DURATION = cast(
    Histogram,
    _get_or_create(
        lambda: Histogram(
            "trivia_method_duration_seconds",
            "Time spent in method",
            ["component", "method"],
        ),
        "trivia_method_duration_seconds",
    ),
)

FALLBACK_ACTIVATIONS = cast(
    Counter,
    _get_or_create(
        lambda: Counter(
            "trivia_source_fallbacks",
            "Times the fallback catalog replaced a failed primary source",
            ["primary"],
        ),
        "trivia_source_fallbacks_total",
    ),
)

P = ParamSpec("P")
R = TypeVar("R")


def measure_time(metric_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for timing instance methods + logging.
    Logs through `self.telemetry` when the instance has one.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            self_obj: Any = args[0] if args else None
            component = self_obj.__class__.__name__ if self_obj else "Unknown"
            telemetry = getattr(self_obj, "telemetry", None)
            timer = METHOD_DURATION.labels(component=component, method=func.__name__)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                timer.observe(duration)
                if telemetry:
                    telemetry.log_error(
                        f"💥 Failed: {metric_name}",
                        e,
                        duration_ms=round(duration * 1000, 2),
                    )
                raise

            duration = time.perf_counter() - start
            timer.observe(duration)
            if telemetry:
                telemetry.log_info(
                    f"⏱️ {metric_name}", duration_ms=round(duration * 1000, 2)
                )
            return result

        return wrapper

    return decorator


class Telemetry:
    """
    Facade for Logs, Metrics, and Tracing.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Initializes the logger. Safe to call multiple times."""
        self.logger = logging.getLogger(f"trivia.{self.component}")

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def __getstate__(self) -> dict[str, Any]:
        """Pickling (Streamlit session state): save everything EXCEPT the logger."""
        state = self.__dict__.copy()
        state.pop("logger", None)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._setup_logger()

    @staticmethod
    def start_trace() -> str:
        c_id = str(uuid.uuid4())[:8]
        correlation_id_ctx.set(c_id)
        return c_id

    @staticmethod
    def get_trace_id() -> str:
        return correlation_id_ctx.get()

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(f"[{self.get_trace_id()}] {event} | {kwargs}")

    def log_warning(self, event: str, **kwargs: Any) -> None:
        self.logger.warning(f"[{self.get_trace_id()}] ⚠️ {event} | {kwargs}")

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        msg = f"[{self.get_trace_id()}] ❌ {event} | Error: {error} | {kwargs}"
        self.logger.error(msg, exc_info=error)

    def count_fallback(self, primary: str) -> None:
        FALLBACK_ACTIVATIONS.labels(primary=primary).inc()
