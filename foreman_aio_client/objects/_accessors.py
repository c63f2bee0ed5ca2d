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

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Iterable
from contextlib import suppress
from typing import Any, Protocol, Self

from foreman_aio_client._filters import Filter, Filtering, FilterValue, filters_to_query
from foreman_aio_client._types import Endpoint, QueryParameters, Requester, RequesterResponse
from foreman_aio_client.errors import MultipleObjectsReturnedError, ObjectDoesNotExistError

# filter for narrowing response objects
type DefaultQueryParams = QueryParameters | None


class FromAPI(Protocol):
    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self: ...  # noqa: ANN102


class Accessor[ReturnObject: FromAPI](ABC):
    class_type: type[ReturnObject]
    filtering: Filtering

    def __init__(self: Self, path: Endpoint, requester: Requester, default_query: DefaultQueryParams = None) -> None:
        self._path = path
        self._requester = requester
        self._default_query = default_query or {}

    @abstractmethod
    async def iter(self: Self, **filters: FilterValue) -> AsyncGenerator[ReturnObject, None]: ...

    @abstractmethod
    def _extract_results_from_response(self: Self, response: RequesterResponse) -> list[dict]: ...

    async def get(self: Self, **filters: FilterValue) -> ReturnObject:
        response = await self._request_endpoint(query={"page": 1, "per_page": 2}, filters=filters)
        results = self._extract_results_from_response(response=response)

        if not results:
            raise ObjectDoesNotExistError("No objects found with the given filter.")

        if len(results) > 1:
            raise MultipleObjectsReturnedError("More than one object found.")

        return self._create_object(results[0])

    async def get_or_none(self: Self, **filters: FilterValue) -> ReturnObject | None:
        with suppress(ObjectDoesNotExistError):
            return await self.get(**filters)

        return None

    async def all(self: Self) -> list[ReturnObject]:
        return await self.filter()

    async def filter(self: Self, **filters: FilterValue) -> list[ReturnObject]:
        return [i async for i in self.iter(**filters)]

    async def _request_endpoint(
        self: Self, query: QueryParameters, filters: dict[str, Any] | None = None
    ) -> RequesterResponse:
        parsed_filters = self._parse_inline_filters(**(filters or {}))
        filters_query = filters_to_query(filters=parsed_filters, validate=self.filtering)

        final_query = filters_query | query | self._default_query

        return await self._requester.get(*self._path, query=final_query)

    def _create_object(self: Self, data: dict[str, Any]) -> ReturnObject:
        return self.class_type.from_api(data)

    def _parse_inline_filters(self: Self, **filters: FilterValue) -> Iterable[Filter]:
        for inline_filter, value in filters.items():
            attr, op = inline_filter.split("__", maxsplit=1)
            yield Filter(attr=attr, op=op, value=value)


class PaginatedAccessor[ReturnObject: FromAPI](Accessor[ReturnObject]):
    page_size: int = 20

    async def iter(self: Self, **filters: FilterValue) -> AsyncGenerator[ReturnObject, None]:
        page, seen = 1, 0
        while True:
            response = await self._request_endpoint(query={"page": page, "per_page": self.page_size}, filters=filters)
            results = self._extract_results_from_response(response=response)

            if not results:
                return

            for record in results:
                yield self._create_object(record)

            seen += len(results)
            subtotal = response.as_dict().get("subtotal")
            if subtotal is not None and seen >= subtotal:
                return

            page += 1

    def _extract_results_from_response(self: Self, response: RequesterResponse) -> list[dict]:
        return response.as_dict()["results"]
