"""
HTTP client for API-first test setup and API tests.

Wraps Playwright's APIRequestContext with the same logging contract as
element actions:

    API     ▸ POST → /api/createAccount
             ◂ POST ← 200
    FAILED  ▸ POST → /api/createAccount | Error: connect ECONNREFUSED

Bodies are parsed as JSON; an empty body returns None. Non-2xx responses
are returned, not raised: status checks belong to the test. The status of
the most recent call is kept on `last_status`.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from playwright.sync_api import APIRequestContext, Playwright

from .config import EnvConfig, Timeouts
from .logger import RESULT_INDENT, logger, safe_log, tag
from .observability import with_observability
from .trace import ActionTrace


@dataclass(frozen=True)
class MultipartFile:
    """One file field of a multipart/form-data request."""
    field_name: str  # Form field, e.g. "avatar"
    file_path: Union[str, "os.PathLike[str]"]
    mime_type: str = "application/octet-stream"

    def payload(self) -> Dict[str, Any]:
        path = Path(self.file_path)
        return {"name": path.name, "mimeType": self.mime_type, "buffer": path.read_bytes()}


def api_headers(config: EnvConfig) -> Dict[str, str]:
    """Default headers: JSON accept, plus a bearer token when API_TOKEN is set."""
    headers = {"Accept": "application/json"}
    if config.api_token:
        headers["Authorization"] = f"Bearer {config.api_token}"
    return headers


def new_api_context(
    playwright: Playwright,
    config: EnvConfig,
    timeouts: Optional[Timeouts] = None,
) -> APIRequestContext:
    """
    Create an APIRequestContext bound to the configured base URL.

    The caller owns the context and must dispose() it.
    """
    timeouts = timeouts or Timeouts()
    context = playwright.request.new_context(
        base_url=config.base_url,
        extra_http_headers=api_headers(config),
        timeout=timeouts.api_ms,
    )
    safe_log(logger.info, f"{tag('API')}▸ initialized API client → {config.base_url}")
    return context


def parse_body(response) -> Any:
    text = response.text()
    if not text.strip():
        return None
    return json.loads(text)


class ApiClient:
    """
    Logged JSON requests over an APIRequestContext.

    Usage:
        context = new_api_context(playwright, load_env_config())
        api = ApiClient(context)

        products = api.get("/api/productsList")
        api.post("/api/verifyLogin", form={"email": "a@b.co", "password": "x"})

        context.dispose()
    """

    def __init__(
        self,
        context: APIRequestContext,
        timeouts: Optional[Timeouts] = None,
        trace: Optional[ActionTrace] = None,
    ):
        self.context = context
        self.timeouts = timeouts or Timeouts()
        self.trace = trace
        self.last_status: Optional[int] = None

    def request(self, method: str, endpoint: str, detail: str = "", **kwargs) -> Any:
        """
        Send a request and return the parsed JSON body.

        Keyword arguments (data, form, multipart, params, headers) go
        straight to APIRequestContext.fetch().
        """
        method = method.upper()

        def call():
            response = self.context.fetch(
                endpoint, method=method, timeout=self.timeouts.api_ms, **kwargs
            )
            self.last_status = response.status
            safe_log(logger.info, f"{RESULT_INDENT}◂ {method} ← {response.status}")
            return parse_body(response)

        return with_observability(
            method, endpoint, call, detail=detail, kind="API", trace=self.trace
        )

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any = None, form: Optional[Dict[str, Any]] = None) -> Any:
        """POST a JSON body (`data`) or url-encoded fields (`form`)."""
        return self.request("POST", endpoint, data=data, form=form)

    def put(self, endpoint: str, data: Any = None, form: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", endpoint, data=data, form=form)

    def patch(self, endpoint: str, data: Any = None) -> Any:
        return self.request("PATCH", endpoint, data=data)

    def delete(self, endpoint: str, form: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("DELETE", endpoint, form=form)

    def upload_file(self, endpoint: str, file: MultipartFile) -> Any:
        """POST a single file as multipart/form-data."""
        return self.post_multipart(endpoint, files=[file])

    def post_multipart(
        self,
        endpoint: str,
        fields: Optional[Dict[str, str]] = None,
        files: Optional[List[MultipartFile]] = None,
    ) -> Any:
        """
        POST text fields and files in one multipart/form-data request.

        Files are read when the request is sent, so a missing file is
        logged as a failure of this call.
        """
        files = list(files or [])
        names = [Path(f.file_path).name for f in files]

        def call():
            multipart: Dict[str, Any] = dict(fields or {})
            for f in files:
                multipart[f.field_name] = f.payload()
            response = self.context.fetch(
                endpoint, method="POST", multipart=multipart, timeout=self.timeouts.api_ms
            )
            self.last_status = response.status
            safe_log(logger.info, f"{RESULT_INDENT}◂ POST ← {response.status}")
            return parse_body(response)

        return with_observability(
            "POST multipart", endpoint, call,
            detail=f"files={json.dumps(names)}", kind="API", trace=self.trace,
        )
