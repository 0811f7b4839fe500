import httpx
import pytest

from snowboard_next.http_client import HttpFetcher, UnexpectedContentType


def test_fetch_text_rejects_binary_payload() -> None:
    client = httpx.Client(
        transport=httpx.MockTransport(
            lambda _: httpx.Response(200, content=b"%PDF-1.7", headers={"content-type": "application/pdf"})
        )
    )

    with pytest.raises(UnexpectedContentType):
        HttpFetcher(client=client).fetch_text("https://example.com/bulletin.pdf")


def test_fetch_retries_connection_errors() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        if len(calls) < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, text="<p>ok</p>", headers={"content-type": "text/html"})

    fetcher = HttpFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)), backoff_factor=0)

    assert fetcher.fetch_text("https://example.com/") == "<p>ok</p>"
    assert len(calls) == 3


def test_fetch_gives_up_after_max_attempts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = HttpFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)), max_attempts=2, backoff_factor=0)

    with pytest.raises(httpx.ConnectError):
        fetcher.fetch_json("https://example.com/api")
