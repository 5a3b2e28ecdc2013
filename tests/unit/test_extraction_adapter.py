"""
Tests for the extraction service client.

The HTTP layer is replaced with httpx.MockTransport.
"""

import httpx
import pytest

from slyp.shared.adapters.extraction_adapter import ExtractionAdapter
from slyp.shared.core.exceptions import FetchError
from slyp.shared.models.enums import SlypType

PAGE = "https://example.com/post"


def make_adapter(handler) -> ExtractionAdapter:
    return ExtractionAdapter(
        api_url="https://extractor.test/v3/analyze",
        api_token="secret",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


async def test_maps_payload_onto_descriptor():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={
                "objects": [
                    {
                        "type": "video",
                        "title": "  Talk  ",
                        "author": "Grace",
                        "siteName": "Tube",
                        "html": "<iframe></iframe>",
                        "duration": 312.7,
                        "images": [
                            {"url": "https://img.test/1.jpg"},
                            {"url": "https://img.test/2.jpg", "primary": True},
                        ],
                    }
                ]
            },
        )

    adapter = make_adapter(handler)
    descriptor = await adapter.extract(PAGE)
    await adapter.close()

    assert seen["params"] == {"token": "secret", "url": PAGE}
    assert descriptor.title == "Talk"
    assert descriptor.author == "Grace"
    assert descriptor.site_name == "Tube"
    assert descriptor.slyp_type == SlypType.VIDEO
    assert descriptor.duration_seconds == 312
    assert descriptor.html == "<iframe></iframe>"
    assert descriptor.display_url == "https://img.test/2.jpg"


async def test_unknown_type_becomes_other():
    def handler(request):
        return httpx.Response(200, json={"objects": [{"type": "discussion", "title": "Thread"}]})

    descriptor = await make_adapter(handler).extract(PAGE)

    assert descriptor.slyp_type == SlypType.OTHER
    assert descriptor.display_url is None
    assert descriptor.duration_seconds is None


async def test_odd_field_values_are_dropped():
    def handler(request):
        return httpx.Response(
            200,
            content=b'{"objects": [{"title": "Long", "type": 7, "author": ["a"], "duration": 1e400}]}',
            headers={"Content-Type": "application/json"},
        )

    descriptor = await make_adapter(handler).extract(PAGE)

    assert descriptor.title == "Long"
    assert descriptor.duration_seconds is None
    assert descriptor.author is None
    assert descriptor.slyp_type == SlypType.OTHER


async def test_first_image_used_without_primary():
    def handler(request):
        return httpx.Response(
            200,
            json={"objects": [{"title": "Pic", "images": [{"url": "https://img.test/a.png"}]}]},
        )

    descriptor = await make_adapter(handler).extract(PAGE)

    assert descriptor.display_url == "https://img.test/a.png"


async def test_timeout_maps_to_timeout_reason():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(FetchError) as exc_info:
        await make_adapter(handler).extract(PAGE)

    assert exc_info.value.reason == FetchError.TIMEOUT
    assert exc_info.value.status_code == 422
    assert exc_info.value.details["url"] == PAGE


async def test_connection_error_maps_to_unreachable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(FetchError) as exc_info:
        await make_adapter(handler).extract(PAGE)

    assert exc_info.value.reason == FetchError.UNREACHABLE


async def test_server_error_maps_to_unreachable():
    def handler(request):
        return httpx.Response(503)

    with pytest.raises(FetchError) as exc_info:
        await make_adapter(handler).extract(PAGE)

    assert exc_info.value.reason == FetchError.UNREACHABLE


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"error": "Could not download page", "errorCode": 500}),
        httpx.Response(200, json={"objects": []}),
        httpx.Response(200, json={"objects": [{"type": "article", "title": "   "}]}),
        httpx.Response(200, json={"objects": [{"type": "article", "title": {"text": "Essay"}}]}),
        httpx.Response(200, json={"objects": {"title": "Essay"}}),
    ],
    ids=[
        "client-error",
        "not-json",
        "error-payload",
        "no-objects",
        "blank-title",
        "title-not-text",
        "objects-not-list",
    ],
)
async def test_unusable_responses_map_to_unsupported(response):
    adapter = make_adapter(lambda request: response)

    with pytest.raises(FetchError) as exc_info:
        await adapter.extract(PAGE)

    assert exc_info.value.reason == FetchError.UNSUPPORTED
    assert exc_info.value.error_code == "FETCH_FAILED"
