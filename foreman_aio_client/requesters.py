# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from asyncio import sleep
from dataclasses import dataclass
from functools import wraps
from json.decoder import JSONDecodeError
from typing import Any, Awaitable, Callable, ParamSpec, Self, TypeAlias
from urllib.parse import urljoin
import logging

import httpx

from foreman_aio_client._types import PathPart, QueryParameters, Requester, RetryPolicy
from foreman_aio_client.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ResponseDataConversionError,
    ResponseError,
    RetryRequestError,
    ServerError,
    UnauthorizedError,
    UnprocessableEntityError,
)

Json: TypeAlias = Any
Params = ParamSpec("Params")
RequestFunc: TypeAlias = Callable[Params, Awaitable["HTTPXRequesterResponse"]]
DoRequestFunc: TypeAlias = Callable[Params, Awaitable[httpx.Response]]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HTTPXRequesterResponse:
    response: httpx.Response
    _json_data: Json | None = None

    def as_list(self: Self) -> list:
        if not isinstance(data := self._get_json_data(), list):
            message = f"Expected a list, got {type(data)}"
            raise ResponseDataConversionError(message)

        return data

    def as_dict(self: Self) -> dict:
        if not isinstance(data := self._get_json_data(), dict):
            message = f"Expected a dict, got {type(data)}"
            raise ResponseDataConversionError(message)

        return data

    def _get_json_data(self: Self) -> Json:
        if self._json_data is not None:
            return self._json_data

        try:
            data = self.response.json()
        except JSONDecodeError as e:
            message = "Response can't be parsed to json"
            raise ResponseDataConversionError(message) from e

        self._json_data = data

        return self._json_data


STATUS_ERRORS_MAP = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
}


def _get_error_class(status_code: int) -> type[ResponseError]:
    if status_code >= 500:
        return ServerError

    return STATUS_ERRORS_MAP.get(status_code, ResponseError)


def _extract_error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except JSONDecodeError:
        return f"Request failed with {response.status_code} response code: {response.content.decode('utf-8')}"

    # Foreman wraps details in {"error": {"message": ..., "full_messages": [...]}}
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return f"Request failed with {response.status_code} response code: {data}"

    if full_messages := error.get("full_messages"):
        return "; ".join(map(str, full_messages))

    return str(error.get("message", error))


def convert_exceptions(func: DoRequestFunc) -> DoRequestFunc:
    @wraps(func)
    async def wrapper(*arg: Params.args, **kwargs: Params.kwargs) -> httpx.Response:
        response = await func(*arg, **kwargs)
        if response.status_code >= 300:
            error_cls = _get_error_class(response.status_code)
            raise error_cls(_extract_error_message(response))

        return response

    return wrapper


def retry_request(request_func: RequestFunc) -> RequestFunc:
    @wraps(request_func)
    async def wrapper(self: "DefaultRequester", *args: Params.args, **kwargs: Params.kwargs) -> HTTPXRequesterResponse:
        retries = self._retries
        for attempt in range(1, retries.attempts + 1):
            try:
                return await request_func(self, *args, **kwargs)
            except httpx.TransportError as e:
                logger.warning("Request attempt %s of %s failed: %s", attempt, retries.attempts, e)
                if attempt < retries.attempts:
                    await sleep(retries.interval)

        message = f"Request failed in {retries.attempts} attempts"
        raise RetryRequestError(message)

    return wrapper


class DefaultRequester(Requester):
    __slots__ = ("_client", "_retries", "_prefix")

    def __init__(self: Self, http_client: httpx.AsyncClient, retries: RetryPolicy) -> None:
        self._retries = retries
        self._client = http_client
        self._prefix = "/api/"

    @property
    def client(self: Self) -> httpx.AsyncClient:
        return self._client

    async def get(self: Self, *path: PathPart, query: QueryParameters | None = None) -> HTTPXRequesterResponse:
        return await self.request(*path, method="GET", params=query or {})

    async def post(self: Self, *path: PathPart, data: dict | list) -> HTTPXRequesterResponse:
        return await self.request(*path, method="POST", json=data)

    async def put(self: Self, *path: PathPart, data: dict | list) -> HTTPXRequesterResponse:
        return await self.request(*path, method="PUT", json=data)

    async def delete(self: Self, *path: PathPart) -> HTTPXRequesterResponse:
        return await self.request(*path, method="DELETE")

    @retry_request
    async def request(self: Self, *path: PathPart, method: str, **kwargs: Any) -> HTTPXRequesterResponse:  # noqa: ANN401
        url = self._make_url(*path)
        response = await self._do_request(method, url, **kwargs)

        return HTTPXRequesterResponse(response=response)

    def _make_url(self: Self, *path: PathPart) -> str:
        return urljoin(self._prefix, "/".join(map(str, (*path, ""))))

    @convert_exceptions
    async def _do_request(self: Self, method: str, url: str, **kwargs: Any) -> httpx.Response:  # noqa: ANN401
        return await self.client.request(method, url, **kwargs)
