"""
Start/success/failure logging applied uniformly around an operation.

Every interaction in stablescout runs through with_observability(), so the
logging contract lives in one place:

    ACTION  ▸ <operation> → <label>  <detail>
             ◂ result = <value>                        (data-returning ops)
    FAILED  ▸ <operation> → <label> | Error: <message> (then re-raised)
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from .logger import RESULT_INDENT, logger, safe_log, tag
from .trace import ActionRecord, ActionTrace

T = TypeVar("T")


def format_start(operation: str, label: str, detail: str = "", kind: str = "ACTION") -> str:
    message = f"{tag(kind)}▸ {operation} → {label}"
    if detail:
        message += f"  {detail}"
    return message


def format_failure(operation: str, label: str, error: BaseException) -> str:
    return f"{tag('FAILED')}▸ {operation} → {label} | Error: {_error_message(error)}"


def format_result(result) -> str:
    if isinstance(result, list):
        rendered = "[" + ", ".join(str(item) for item in result) + "]"
    else:
        rendered = f'"{result}"'
    return f"{RESULT_INDENT}◂ result  = {rendered}"


def _error_message(error: BaseException) -> str:
    # Playwright errors carry the message attribute; others fall back to str()
    message = getattr(error, "message", None)
    return message if isinstance(message, str) and message else str(error)


def with_observability(
    operation: str,
    label: str,
    fn: Callable[[], T],
    detail: str = "",
    show_result: bool = False,
    kind: str = "ACTION",
    trace: Optional[ActionTrace] = None,
    log: logging.Logger = logger,
) -> T:
    """
    Run fn with start/result/failure logging.

    Args:
        operation: Operation name shown in the log ("click", "fill", ...)
        label: Human label for the target
        fn: Zero-argument callable performing the wait and the action
        detail: Extra text for the start line (e.g. 'value="abc"')
        show_result: Log the returned value on success
        kind: Tag for the start line ("ACTION", "NAV")
        trace: Optional ActionTrace that receives one record per call
        log: Logger to write to

    Returns:
        Whatever fn returns

    Raises:
        Whatever fn raises, unchanged, after one error-level log line
    """
    safe_log(log.info, format_start(operation, label, detail, kind))
    start = time.time()

    try:
        result = fn()
    except Exception as e:
        safe_log(log.error, format_failure(operation, label, e))
        if trace is not None:
            trace.add(ActionRecord(
                operation=operation,
                label=label,
                passed=False,
                error=_error_message(e),
                duration_ms=(time.time() - start) * 1000,
            ))
        raise

    if show_result:
        safe_log(log.info, format_result(result))
    if trace is not None:
        trace.add(ActionRecord(
            operation=operation,
            label=label,
            passed=True,
            duration_ms=(time.time() - start) * 1000,
        ))
    return result
