# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging

import httpx
import pytest

from vtlookup.config import HttpSettings
from vtlookup.errors import ErrorCategory
from vtlookup.http.adapters import StubHttpClient
from vtlookup.http.httpx_client import HttpxClient, format_header_block
from vtlookup.http.models import HttpRequest, HttpResponse, ResponseAccumulator
from vtlookup.http.url import build_report_url, redact_text, redact_url

REPORT_URL = "https://vt.example/vtapi/v2/file/report?apikey=SECRETKEY&resource=abc"


def make_client(handler, **settings_kwargs) -> HttpxClient:
    settings = HttpSettings(user_agent="UA/1.0", **settings_kwargs)
    return HttpxClient(settings, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_accumulator_preserves_chunk_order():
    acc = ResponseAccumulator()
    for chunk in (b"ab", b"", b"cd", b"e"):
        acc.feed(chunk)
    assert len(acc) == 5
    assert acc.chunks == 3
    assert acc.finish() == b"abcde"
    assert acc.truncated is False


def test_accumulator_truncates_at_limit():
    acc = ResponseAccumulator(max_bytes=4)
    assert acc.feed(b"abc") == 3
    assert acc.feed(b"def") == 1
    assert acc.feed(b"ghi") == 0
    assert acc.finish() == b"abcd"
    assert acc.truncated is True


def test_accumulator_rejects_feed_after_finish():
    acc = ResponseAccumulator()
    acc.finish()
    with pytest.raises(RuntimeError):
        acc.feed(b"late")


def test_format_header_block():
    block = format_header_block("HTTP/1.1", 200, "OK", [("content-type", "application/json"), ("x-a", "1")])
    assert block == "HTTP/1.1 200 OK\r\ncontent-type: application/json\r\nx-a: 1\r\n"


def test_build_report_url_and_redaction():
    url = build_report_url("https://vt.example/vtapi/v2/file/report", "SECRET KEY", "abc/def")
    assert url == "https://vt.example/vtapi/v2/file/report?apikey=SECRET+KEY&resource=abc%2Fdef"
    redacted = redact_url(url)
    assert "SECRET" not in redacted
    assert "apikey=***" in redacted
    assert "resource=abc%2Fdef" in redacted
    assert redact_url("https://vt.example/path") == "https://vt.example/path"


def test_build_report_url_keeps_existing_query_and_replaces_credentials():
    url = build_report_url("https://vt.example/report?allinfo=1&apikey=old", "new", "r1")
    assert url == "https://vt.example/report?allinfo=1&apikey=new&resource=r1"


def test_httpx_client_captures_status_headers_and_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, headers={"X-Test": "1"}, json={"response_code": 1})

    client = make_client(handler)
    resp = client.request(HttpRequest(url=REPORT_URL))

    assert resp.ok is True
    assert resp.status_code == 200
    assert json.loads(resp.text) == {"response_code": 1}
    assert resp.content == resp.text.encode()
    assert resp.header_text.startswith("HTTP/1.1 200 OK\r\n")
    assert "x-test: 1" in resp.header_text.lower()
    assert resp.headers["x-test"] == "1"
    assert seen["ua"] == "UA/1.0"
    assert "apikey=SECRETKEY" in seen["url"]
    assert "SECRETKEY" not in (resp.url or "")


def test_httpx_client_assembles_chunked_body_in_order():
    chunks = [b'{"scans": {', b'"A": {"detected": true}', b"}}"]

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=iter(chunks))

    resp = make_client(handler).request(HttpRequest(url=REPORT_URL))
    assert resp.ok is True
    assert resp.content == b"".join(chunks)
    assert resp.meta["body_chunks"] == len(chunks)
    assert resp.meta["body_truncated"] is False


def test_httpx_client_truncates_oversized_body():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=b"x" * 100)

    resp = make_client(handler, max_body_bytes=10).request(HttpRequest(url=REPORT_URL))
    assert resp.content == b"x" * 10
    assert resp.meta["body_truncated"] is True


def test_non_2xx_status_is_not_a_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(403, text="Forbidden")

    resp = make_client(handler).request(HttpRequest(url=REPORT_URL))
    assert resp.ok is True
    assert resp.status_code == 403
    assert resp.text == "Forbidden"
    assert resp.is_success_status is False


@pytest.mark.parametrize(
    ("exc", "category"),
    [
        (httpx.ConnectError("connection refused"), ErrorCategory.CONNECTION_ERROR),
        (httpx.ReadTimeout("timed out"), ErrorCategory.TIMEOUT),
    ],
)
def test_transport_errors_become_failed_responses(exc, category):
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        raise exc

    resp = make_client(handler).request(HttpRequest(url=REPORT_URL))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_type == type(exc).__name__
    assert resp.error_category == category
    assert resp.error_message


def test_error_message_never_contains_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(f"could not reach {request.url}")

    resp = make_client(handler).request(HttpRequest(url=REPORT_URL))
    assert resp.ok is False
    assert "SECRETKEY" not in resp.error_message


def test_verbose_traces_without_leaking_key_or_changing_result(caplog):
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, json={"positives": 0})

    client = make_client(handler)
    quiet = client.request(HttpRequest(url=REPORT_URL))

    caplog.set_level(logging.INFO, logger="vtlookup.http.trace")
    loud = client.request(HttpRequest(url=REPORT_URL, verbose=True))

    assert "> GET" in caplog.text
    assert "< HTTP/1.1 200 OK" in caplog.text
    assert "apikey=***" in caplog.text
    assert "SECRETKEY" not in caplog.text
    assert (quiet.status_code, quiet.content, quiet.header_text) == (loud.status_code, loud.content, loud.header_text)


def test_httpx_client_passes_timeout_and_redirects(monkeypatch):
    calls = []

    class FakeHttpxClient:
        def __init__(self, follow_redirects, timeout, verify):
            calls.append({"init": (follow_redirects, timeout, verify)})

        def stream(self, method, url, headers=None, timeout=None, follow_redirects=None):
            calls.append({"method": method, "url": url, "timeout": timeout, "follow_redirects": follow_redirects})
            raise httpx.ConnectTimeout("boom")

        def close(self):
            calls.append({"closed": True})

    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    client = HttpxClient(HttpSettings(timeout=3.0, verify_ssl=False))
    resp = client.request(HttpRequest(url="http://example", timeout=1.2, allow_redirects=False))
    client.close()

    assert calls[0]["init"] == (True, 3.0, False)
    assert calls[1]["timeout"] == 1.2
    assert calls[1]["follow_redirects"] is False
    assert resp.ok is False
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert calls[-1] == {"closed": True}


def test_stub_client_records_requests_and_misses():
    ok = HttpResponse(ok=True, status_code=200, text="{}")
    stub = StubHttpClient({"http://a": ok})
    assert stub.request(HttpRequest(url="http://a")) is ok
    miss = stub.request(HttpRequest(url="http://b"))
    assert miss.ok is False
    assert [r.url for r in stub.requests] == ["http://a", "http://b"]
    stub.close()
    assert stub.closed is True


def test_redact_text_masks_key_in_free_text():
    text = "Failed GET https://vt.example/r?APIKEY=abc123&resource=x: refused"
    assert redact_text(text) == "Failed GET https://vt.example/r?APIKEY=***&resource=x: refused"


def test_verbose_trace_redacts_key_in_response_headers(caplog):
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(302, headers={"Location": "https://vt.example/next?apikey=SECRETKEY&resource=abc"})

    caplog.set_level(logging.INFO, logger="vtlookup.http.trace")
    resp = make_client(handler).request(HttpRequest(url=REPORT_URL, allow_redirects=False, verbose=True))

    assert resp.status_code == 302
    assert "< location: https://vt.example/next?apikey=***&resource=abc" in caplog.text.lower()
    assert "SECRETKEY" not in caplog.text
