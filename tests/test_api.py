"""Tests for ApiClient, request-context setup and API contract validation."""

import json
import logging
from typing import List

import pytest
from playwright.sync_api import Error as PlaywrightError
from pydantic import BaseModel

from stablescout.api import ApiClient, MultipartFile, api_headers, new_api_context
from stablescout.config import EnvConfig, Timeouts
from stablescout.schema import SchemaViolation, validate_schema
from stablescout.trace import ActionTrace


class FakeResponse:
    def __init__(self, status=200, body=""):
        self.status = status
        self.body = body

    def text(self):
        return self.body


class FakeRequestContext:
    """Records fetch() calls and replays canned responses."""

    def __init__(self, responses=None, fail_with=None, **kwargs):
        self.responses = list(responses or [])
        self.fail_with = fail_with
        self.kwargs = kwargs
        self.calls = []
        self.disposed = False

    def fetch(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.fail_with:
            raise self.fail_with
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse()

    def dispose(self):
        self.disposed = True


class FakeRequest:
    def __init__(self):
        self.contexts = []

    def new_context(self, **kwargs):
        context = FakeRequestContext(**kwargs)
        self.contexts.append(context)
        return context


class FakePlaywright:
    def __init__(self):
        self.request = FakeRequest()


@pytest.fixture
def playwright():
    """Fake driver; every request context it hands out must be disposed."""
    driver = FakePlaywright()
    yield driver
    assert all(context.disposed for context in driver.request.contexts)


class Product(BaseModel):
    id: int
    name: str
    price: str


class ProductList(BaseModel):
    responseCode: int
    products: List[Product]


class TestContextSetup:
    def test_headers_without_token(self):
        assert api_headers(EnvConfig()) == {"Accept": "application/json"}

    def test_bearer_token_header(self):
        headers = api_headers(EnvConfig(api_token="s3cret"))
        assert headers["Authorization"] == "Bearer s3cret"

    def test_new_api_context(self, caplog):
        caplog.set_level(logging.INFO, logger="stablescout")
        driver = FakePlaywright()
        config = EnvConfig(base_url="https://shop.test", api_token="t0k")

        new_api_context(driver, config, Timeouts(api=5.0))

        kwargs = driver.request.contexts[0].kwargs
        assert kwargs["base_url"] == "https://shop.test"
        assert kwargs["extra_http_headers"]["Authorization"] == "Bearer t0k"
        assert kwargs["timeout"] == 5000.0
        assert caplog.records[0].getMessage() == "API     ▸ initialized API client → https://shop.test"


class TestRequests:
    def test_get_returns_parsed_json(self):
        body = json.dumps({"responseCode": 200, "products": []})
        context = FakeRequestContext([FakeResponse(200, body)])
        api = ApiClient(context)

        result = api.get("/api/productsList", params={"page": 2})

        assert result == {"responseCode": 200, "products": []}
        url, kwargs = context.calls[0]
        assert url == "/api/productsList"
        assert kwargs["method"] == "GET"
        assert kwargs["params"] == {"page": 2}
        assert kwargs["timeout"] == 15000.0

    def test_uses_api_timeout(self):
        context = FakeRequestContext()
        ApiClient(context, timeouts=Timeouts(api=2.5)).delete("/api/deleteAccount")
        assert context.calls[0][1]["timeout"] == 2500.0

    @pytest.mark.parametrize("method", ["post", "put"])
    def test_form_body(self, method):
        context = FakeRequestContext()
        getattr(ApiClient(context), method)("/api/verifyLogin", form={"email": "a@b.co"})

        kwargs = context.calls[0][1]
        assert kwargs["method"] == method.upper()
        assert kwargs["form"] == {"email": "a@b.co"}

    def test_patch_json_body(self):
        context = FakeRequestContext()
        ApiClient(context).patch("/api/user", data={"name": "x"})
        assert context.calls[0][1]["data"] == {"name": "x"}

    def test_empty_body_returns_none(self):
        context = FakeRequestContext([FakeResponse(204, "  ")])
        api = ApiClient(context)

        assert api.delete("/api/deleteAccount") is None
        assert api.last_status == 204

    def test_error_status_is_returned(self):
        context = FakeRequestContext([FakeResponse(404, '{"message": "not found"}')])
        api = ApiClient(context)

        assert api.get("/api/missing") == {"message": "not found"}
        assert api.last_status == 404


class TestMultipart:
    def test_upload_file(self, tmp_path):
        path = tmp_path / "avatar.png"
        path.write_bytes(b"\x89PNG")
        context = FakeRequestContext()

        ApiClient(context).upload_file("/api/avatar", MultipartFile("avatar", path, "image/png"))

        kwargs = context.calls[0][1]
        assert kwargs["method"] == "POST"
        assert kwargs["multipart"] == {
            "avatar": {"name": "avatar.png", "mimeType": "image/png", "buffer": b"\x89PNG"},
        }

    def test_fields_and_files(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hi")
        context = FakeRequestContext()

        ApiClient(context).post_multipart(
            "/api/contact", fields={"subject": "Hello"}, files=[MultipartFile("doc", path)]
        )

        multipart = context.calls[0][1]["multipart"]
        assert multipart["subject"] == "Hello"
        assert multipart["doc"]["mimeType"] == "application/octet-stream"

    def test_missing_file_is_logged_failure(self, tmp_path, caplog):
        caplog.set_level(logging.INFO, logger="stablescout")
        context = FakeRequestContext()

        with pytest.raises(FileNotFoundError):
            ApiClient(context).upload_file("/api/avatar", MultipartFile("avatar", tmp_path / "nope.png"))

        assert context.calls == []
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage().startswith("FAILED  ▸ POST multipart → /api/avatar")


class TestApiLogging:
    def test_start_and_status_lines(self, caplog):
        caplog.set_level(logging.INFO, logger="stablescout")
        context = FakeRequestContext([FakeResponse(201, "{}")])

        ApiClient(context).post("/api/createAccount", form={"name": "x"})

        messages = [r.getMessage() for r in caplog.records]
        assert messages == [
            "API     ▸ POST → /api/createAccount",
            "         ◂ POST ← 201",
        ]

    def test_failure_logged_and_reraised(self, caplog):
        caplog.set_level(logging.INFO, logger="stablescout")
        error = PlaywrightError("connect ECONNREFUSED")
        trace = ActionTrace()
        api = ApiClient(FakeRequestContext(fail_with=error), trace=trace)

        with pytest.raises(PlaywrightError) as exc_info:
            api.get("/api/productsList")

        assert exc_info.value is error
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert [r.getMessage() for r in errors] == [
            "FAILED  ▸ GET → /api/productsList | Error: connect ECONNREFUSED",
        ]
        assert trace.records[0].passed is False
        assert trace.records[0].operation == "GET"


class TestValidateSchema:
    def test_valid_data(self):
        data = {"responseCode": 200, "products": [{"id": 1, "name": "Blue Top", "price": "Rs. 500"}]}

        result = validate_schema(ProductList, data, "products list")

        assert result.products[0].name == "Blue Top"

    def test_violation_lists_issues_and_raw_data(self):
        data = {"responseCode": "ok", "products": [{"id": 1, "name": "Blue Top"}]}

        with pytest.raises(SchemaViolation) as exc_info:
            validate_schema(ProductList, data, "products list")

        message = str(exc_info.value)
        assert message.startswith(
            '[API Contract Violation] Schema validation failed for "products list":'
        )
        assert "[responseCode]" in message
        assert "[products.0.price] Field required" in exc_info.value.issues
        assert '"name": "Blue Top"' in message

    def test_violation_is_assertion_error(self):
        with pytest.raises(AssertionError):
            validate_schema(ProductList, [], "products list")


class TestFixtures:
    def test_api_client_fixture(self, api_client, playwright, env_config, timeouts):
        context = playwright.request.contexts[0]

        assert api_client.context is context
        assert context.kwargs["base_url"] == env_config.base_url
        assert context.kwargs["timeout"] == timeouts.api_ms
        assert not context.disposed
