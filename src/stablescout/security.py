"""
Guards for AI-generated test input.

When a model produces search terms, form values or selectors, run them
through these checks before they reach the page:

    term = assert_no_injection(ai_term, "product search input")
    actions.fill(search_box, term)

    assert_safe_selector(ai_selector)
    actions.click(page.locator(ai_selector))

    user = validate_ai_output(GeneratedUser, ai_json, "signup user")
"""

import re
from typing import Any, List, Pattern, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .logger import logger, safe_log, tag
from .schema import format_issues

M = TypeVar("M", bound=BaseModel)


class SecurityViolation(ValueError):
    """Base class for rejected AI-generated input."""


class InjectionDetected(SecurityViolation):
    pass


class UnsafeSelector(SecurityViolation):
    pass


class AIOutputInvalid(SecurityViolation):
    """AI output did not match the expected schema."""

    def __init__(self, message: str, issues: List[str]):
        super().__init__(message)
        self.issues = issues


INJECTION_PATTERNS: List[Pattern[str]] = [
    # Instruction override
    re.compile(r"ignore\s+previous\s+instructions", re.I),
    re.compile(r"disregard\s+(all\s+)?(previous|prior|above)", re.I),
    re.compile(r"forget\s+your\s+rules", re.I),
    re.compile(r"you\s+are\s+now\s+a", re.I),
    re.compile(r"act\s+as\s+if\s+you\s+are", re.I),
    re.compile(r"new\s+persona", re.I),
    # Shell / OS commands
    re.compile(r"rm\s+-rf", re.I),
    re.compile(r"del\s+/[sqf]", re.I),
    re.compile(r"format\s+[a-z]:", re.I),
    re.compile(r"shutdown\s+/[sr]", re.I),
    # SQL
    re.compile(r"DROP\s+TABLE", re.I),
    re.compile(r"DELETE\s+FROM", re.I),
    re.compile(r"INSERT\s+INTO", re.I),
    re.compile(r"UNION\s+SELECT", re.I),
    re.compile(r";\s*--"),
    # Script runtimes
    re.compile(r"process\.exit", re.I),
    re.compile(r"process\.env", re.I),
    re.compile(r"require\s*\(", re.I),
    re.compile(r"eval\s*\(", re.I),
    re.compile(r"__import__", re.I),
    re.compile(r"__dirname", re.I),
    re.compile(r"__filename", re.I),
    # HTML / XSS
    re.compile(r"<script[\s>]", re.I),
    re.compile(r"javascript\s*:", re.I),
    re.compile(r"on\w+\s*=", re.I),
]

UNSAFE_SELECTOR_PATTERNS: List[Pattern[str]] = [
    re.compile(r"eval\s*\(", re.I),
    re.compile(r"Function\s*\(", re.I),
    re.compile(r"setTimeout\s*\(", re.I),
    re.compile(r"setInterval\s*\(", re.I),
    re.compile(r"process\.", re.I),
    re.compile(r"require\s*\(", re.I),
    re.compile(r"import\s*\(", re.I),
    re.compile(r"document\.write", re.I),
    re.compile(r"window\.location", re.I),
]


def _log_start(operation: str, subject: str) -> None:
    safe_log(logger.info, f"{tag('SECURITY')}▸ {operation} → {subject}")


def _reject(exc_type: Type[SecurityViolation], message: str) -> SecurityViolation:
    safe_log(logger.error, f"{tag('SECURITY')}✗ {message}")
    return exc_type(message)


def assert_no_injection(value: str, context: str = "value") -> str:
    """
    Scan free text for prompt, shell, SQL, script and XSS injection.

    Returns:
        The value, unchanged, when clean

    Raises:
        InjectionDetected: On the first matching pattern
    """
    _log_start("assert_no_injection", f"scanning {context}")
    for pattern in INJECTION_PATTERNS:
        if pattern.search(value):
            raise _reject(
                InjectionDetected,
                f'Prompt injection detected in "{context}": matched pattern /{pattern.pattern}/',
            )
    safe_log(logger.info, f"{tag('SECURITY')}◂ assert_no_injection → {context} is clean")
    return value


def assert_safe_selector(selector: str) -> str:
    """
    Reject selectors that embed JavaScript execution.

    Raises:
        UnsafeSelector: On the first matching pattern
    """
    _log_start("assert_safe_selector", "scanning selector")
    for pattern in UNSAFE_SELECTOR_PATTERNS:
        if pattern.search(selector):
            raise _reject(
                UnsafeSelector,
                f'Unsafe selector detected: matched pattern /{pattern.pattern}/ in "{selector}"',
            )
    safe_log(logger.info, f"{tag('SECURITY')}◂ assert_safe_selector → selector is safe")
    return selector


def validate_ai_output(model: Type[M], raw_output: Any, context: str = "AI output") -> M:
    """
    Validate AI-produced data against a pydantic model.

    Args:
        model: pydantic model class describing the expected shape
        raw_output: Parsed JSON (dict/list) or a JSON string
        context: Name used in log lines and the error message

    Raises:
        AIOutputInvalid: Listing every validation issue as "[path] message"
    """
    _log_start("validate_ai_output", f"validating {context}")
    try:
        if isinstance(raw_output, (str, bytes)):
            result = model.model_validate_json(raw_output)
        else:
            result = model.model_validate(raw_output)
    except ValidationError as e:
        issues = format_issues(e)
        message = f'AI output schema validation failed for "{context}":\n' + "\n".join(
            f"  • {issue}" for issue in issues
        )
        safe_log(logger.error, f"{tag('SECURITY')}✗ {message}")
        raise AIOutputInvalid(message, issues) from e

    safe_log(logger.info, f"{tag('SECURITY')}◂ validate_ai_output → {context} passed schema validation")
    return result
