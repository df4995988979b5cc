"""Call instrumentation for the weather and stylist collaborators.

Every wrapped call logs one start event and one outcome event:

* ``tool_call_completed`` (INFO) on success,
* ``tool_call_degraded`` (WARNING) when the call raised one of its
  ``expected_errors``, i.e. a known collaborator failure such as a missing
  credential or an unknown location,
* ``tool_call_failed`` (ERROR, with traceback) for anything else.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from wearwise_app.logging_config import (
    ensure_correlation_id,
    get_logger,
    log_event,
    redact_for_log,
)

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

MAX_LOGGED_ARGUMENTS = 6


def _argument_summary(kwargs: dict) -> dict:
    names = list(kwargs)
    summary = {name: kwargs[name] for name in names[:MAX_LOGGED_ARGUMENTS]}
    if len(names) > MAX_LOGGED_ARGUMENTS:
        summary["omitted_arguments"] = len(names) - MAX_LOGGED_ARGUMENTS
    return redact_for_log(summary)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    expected_errors: Tuple[Type[BaseException], ...] = (),
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log a collaborator call and optionally validate its keyword arguments.

    ``input_model`` coerces keyword arguments through a pydantic model before
    the call; invalid input is logged and the ``ValidationError`` re-raised.
    Exceptions matching ``expected_errors`` are logged as a degraded outcome
    without a traceback. All exceptions propagate unchanged.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()

            if input_model is not None:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "tool_input_rejected",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        errors=redact_for_log(exc.errors(include_url=False)),
                    )
                    raise

            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_started",
                tool=tool_name,
                correlation_id=correlation_id,
                arguments=_argument_summary(kwargs),
            )
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except expected_errors as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "tool_call_degraded",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                raise
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "tool_call_failed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                raise

            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_completed",
                tool=tool_name,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(start),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool", "MAX_LOGGED_ARGUMENTS"]
