from collections.abc import AsyncGenerator
from dataclasses import dataclass
from functools import partial
from typing import Any, Self
import json

from httpx import AsyncClient
import httpx
import pytest
import pytest_asyncio

from foreman_aio_client._types import RetryPolicy
from foreman_aio_client.errors import (
    NotFoundError,
    ResponseDataConversionError,
    ResponseError,
    RetryRequestError,
    ServerError,
    UnprocessableEntityError,
)
from foreman_aio_client.requesters import DefaultRequester, HTTPXRequesterResponse

pytestmark = [pytest.mark.asyncio]


@dataclass()
class HTTPXLikeResponse:
    status_code: int = 200
    data: str = "{}"
    content: bytes = b""

    def json(self: Self) -> Any:  # noqa: ANN401
        return json.loads(self.data)


def build_mock_response(response: HTTPXLikeResponse):  # noqa: ANN201
    async def return_response(*a, **kw) -> HTTPXLikeResponse:  # noqa: ANN002, ANN003
        _ = a, kw
        return response

    return return_response


@pytest_asyncio.fixture()
async def httpx_requester() -> AsyncGenerator[DefaultRequester, None]:
    retry_policy = RetryPolicy(attempts=2, interval=0)
    async with AsyncClient() as dummy_client:
        yield DefaultRequester(http_client=dummy_client, retries=retry_policy)


@pytest.mark.parametrize(
    ("method", "status_code", "call_kwargs"),
    [("get", 200, {}), ("post", 201, {"data": {}}), ("put", 200, {"data": {}}), ("delete", 200, {})],
    ids=lambda value: value if not isinstance(value, dict) else "kw",
)
async def test_successful_request(
    method: str, status_code: int, call_kwargs: dict, httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch
) -> None:
    requester = httpx_requester

    response = HTTPXLikeResponse(status_code=status_code, data="{}")
    return_response = build_mock_response(response)
    monkeypatch.setattr(requester.client, "request", return_response)

    result = await getattr(requester, method)(**call_kwargs)

    assert isinstance(result, HTTPXRequesterResponse)
    assert result.response is response
    assert result.as_dict() == {}


async def test_url_is_built_from_path_parts(httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch) -> None:
    requester = httpx_requester
    requested = []

    async def record_request(method: str, url: str, **kwargs: Any) -> HTTPXLikeResponse:  # noqa: ANN401
        requested.append((method, url, kwargs))
        return HTTPXLikeResponse()

    monkeypatch.setattr(requester.client, "request", record_request)

    await requester.put("hostgroups", 4, data={"hostgroup": {"name": "web"}})
    await requester.get("hostgroups", query={"search": 'name = "web"'})

    assert requested == [
        ("PUT", "/api/hostgroups/4/", {"json": {"hostgroup": {"name": "web"}}}),
        ("GET", "/api/hostgroups/", {"params": {"search": 'name = "web"'}}),
    ]


@pytest.mark.parametrize(
    ("status_code", "error_class"),
    [(300, ResponseError), (404, NotFoundError), (422, UnprocessableEntityError), (500, ServerError), (503, ServerError)],
)
async def test_raising_client_error_for_status(
    status_code: int,
    error_class: type[ResponseError],
    httpx_requester: DefaultRequester,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    requester = httpx_requester

    return_response = build_mock_response(HTTPXLikeResponse(status_code=status_code, data=""))
    monkeypatch.setattr(requester.client, "request", return_response)

    for method in (
        partial(requester.get, query={}),
        partial(requester.post, data={}),
        partial(requester.put, data={}),
        requester.delete,
    ):
        with pytest.raises(error_class):
            await method()


async def test_foreman_error_message_is_extracted(
    httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch
) -> None:
    requester = httpx_requester

    body = json.dumps({"error": {"id": None, "errors": {}, "full_messages": ["Name has already been taken"]}})
    return_response = build_mock_response(HTTPXLikeResponse(status_code=422, data=body))
    monkeypatch.setattr(requester.client, "request", return_response)

    with pytest.raises(UnprocessableEntityError, match="Name has already been taken"):
        await requester.post("hostgroups", data={})

    body = json.dumps({"error": {"message": "Resource hostgroup not found by id '4'"}})
    return_response = build_mock_response(HTTPXLikeResponse(status_code=404, data=body))
    monkeypatch.setattr(requester.client, "request", return_response)

    with pytest.raises(NotFoundError, match="not found by id"):
        await requester.get("hostgroups", 4)


async def test_transport_errors_are_retried(httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch) -> None:
    requester = httpx_requester
    attempts = []

    async def fail_once(*a, **kw) -> HTTPXLikeResponse:  # noqa: ANN002, ANN003
        _ = a, kw
        attempts.append(1)
        if len(attempts) == 1:
            raise httpx.ConnectError("connection refused")

        return HTTPXLikeResponse(data='{"id": 4}')

    monkeypatch.setattr(requester.client, "request", fail_once)

    response = await requester.get("hostgroups", 4)

    assert response.as_dict() == {"id": 4}
    assert len(attempts) == 2


async def test_retry_gives_up_after_all_attempts(
    httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch
) -> None:
    requester = httpx_requester

    async def always_fail(*a, **kw) -> HTTPXLikeResponse:  # noqa: ANN002, ANN003
        _ = a, kw
        raise httpx.ReadTimeout("timed out")

    monkeypatch.setattr(requester.client, "request", always_fail)

    with pytest.raises(RetryRequestError):
        await requester.get("hostgroups")


async def test_response_as_dict_error_on_wrong_type(
    httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch
) -> None:
    requester = httpx_requester

    for incorrect_data in ("[]", "{,"):
        return_response = build_mock_response(HTTPXLikeResponse(data=incorrect_data))
        monkeypatch.setattr(requester.client, "request", return_response)

        response = await requester.get()

        with pytest.raises(ResponseDataConversionError):
            response.as_dict()


async def test_response_as_list_error_on_wrong_type(
    httpx_requester: DefaultRequester, monkeypatch: pytest.MonkeyPatch
) -> None:
    requester = httpx_requester

    for incorrect_data in ("{}", "[,"):
        return_response = build_mock_response(HTTPXLikeResponse(data=incorrect_data))
        monkeypatch.setattr(requester.client, "request", return_response)

        response = await requester.get()

        with pytest.raises(ResponseDataConversionError):
            response.as_list()
