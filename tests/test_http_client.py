import httpx
import pytest

from ayusetu.integrations.errors import ServiceError, build_model, build_model_list
from ayusetu.integrations.contracts.base import SuccessResponse
from ayusetu.integrations.http_client import ApiClient


def _client(handler):
    return ApiClient("https://gateway.test/api", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_json_request_sends_json_content_type_and_drops_empty_params():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as api:
        body = await api.request(
            "GET", "/v1/things", error_message="Failed", params={"a": "1", "b": None, "flag": True}
        )

    request = seen["request"]
    assert body == {"ok": True}
    assert request.url.path == "/api/v1/things"
    assert request.headers["content-type"] == "application/json"
    assert dict(request.url.params) == {"a": "1", "flag": "true"}


@pytest.mark.asyncio
async def test_non_2xx_becomes_service_error_with_status_and_payload():
    def handler(request):
        return httpx.Response(422, json={"code": "HIS-422", "message": "Invalid txnId"})

    async with _client(handler) as api:
        with pytest.raises(ServiceError) as exc_info:
            await api.request("POST", "/v1/x", error_message="Failed to verify OTP", json={})

    err = exc_info.value
    assert str(err) == "Failed to verify OTP"
    assert err.status_code == 422
    assert err.payload == {"code": "HIS-422", "message": "Invalid txnId"}


@pytest.mark.asyncio
async def test_transport_failure_becomes_service_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as api:
        with pytest.raises(ServiceError) as exc_info:
            await api.request("GET", "/v1/x", error_message="Failed to reach gateway")

    assert exc_info.value.status_code is None
    assert exc_info.value.message == "Failed to reach gateway"


@pytest.mark.asyncio
async def test_empty_body_returns_none():
    async with _client(lambda request: httpx.Response(204)) as api:
        assert await api.request("DELETE", "/v1/x", error_message="Failed") is None


@pytest.mark.asyncio
async def test_non_json_success_body_is_an_error():
    async with _client(lambda request: httpx.Response(200, text="<html>oops</html>")) as api:
        with pytest.raises(ServiceError):
            await api.request("GET", "/v1/x", error_message="Failed")


@pytest.mark.asyncio
async def test_multipart_upload_uses_boundary_header():
    seen = {}

    def handler(request):
        seen["request"] = request
        seen["body"] = request.read()
        return httpx.Response(200, json={})

    async with _client(handler) as api:
        await api.request(
            "POST",
            "/v1/upload",
            error_message="Failed",
            data={"folder": "folder-001"},
            files={"file": ("scan.pdf", b"%PDF-1.4", "application/pdf")},
        )

    content_type = seen["request"].headers["content-type"]
    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1]
    assert boundary.encode() in seen["body"]
    assert b"scan.pdf" in seen["body"]
    assert b"folder-001" in seen["body"]


@pytest.mark.asyncio
async def test_form_data_without_files_is_urlencoded():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json={})

    async with _client(handler) as api:
        await api.request("POST", "/v1/form", error_message="Failed", data={"a": "b"})

    assert seen["request"].headers["content-type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_get_bytes_returns_raw_content():
    async with _client(lambda request: httpx.Response(200, content=b"%PDF-bytes")) as api:
        assert await api.get_bytes("/v1/report", error_message="Failed") == b"%PDF-bytes"


def test_build_model_wraps_validation_errors():
    assert build_model(SuccessResponse, {"success": True}, "Failed").success is True
    with pytest.raises(ServiceError) as exc_info:
        build_model(SuccessResponse, {"message": "no flag"}, "Failed to parse")
    assert exc_info.value.payload == {"message": "no flag"}


def test_build_model_list_requires_a_list():
    with pytest.raises(ServiceError):
        build_model_list(SuccessResponse, {"success": True}, "Failed")
