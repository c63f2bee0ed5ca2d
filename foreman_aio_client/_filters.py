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

"""
Filters are translated to Foreman's scoped search syntax and sent as `search` query parameter.

`name__eq="web"` becomes `name = "web"`, `parent_id__in=(1, 2)` becomes `parent_id ^ (1, 2)`,
multiple filters are joined with `and`.
"""

from collections.abc import Generator, Iterable
from dataclasses import dataclass
from typing import Protocol, Self

from foreman_aio_client._types import QueryParameters
from foreman_aio_client.errors import InvalidFilterError

SEARCH_OPERATORS = {"eq": "=", "ne": "!=", "contains": "~", "in": "^"}

MULTI_OPERATIONS = frozenset(("in",))
COMMON_OPERATIONS = frozenset(("eq", "ne", "in"))
ALL_OPERATIONS = frozenset(("contains", *COMMON_OPERATIONS))

type FilterSingleValue = str | int
type FilterValue = FilterSingleValue | Iterable[FilterSingleValue]


@dataclass(slots=True, kw_only=True)
class Filter:
    attr: str
    op: str
    value: FilterValue


class FilterValidator(Protocol):
    def __call__(self, filter_: Filter) -> None: ...  # noqa: ANN101


@dataclass(slots=True, frozen=True)
class FilterBy:
    attr: str
    operations: set[str] | frozenset[str] | tuple[str, ...]
    single_input: type


class Filtering(FilterValidator):
    def __init__(self: Self, *allowed: FilterBy) -> None:
        self._allowed = {entry.attr: entry for entry in allowed}

    def __call__(self: Self, filter_: Filter) -> None:
        allowed_filter = self._allowed.get(filter_.attr)
        if not allowed_filter:
            message = f"Filter by {filter_.attr} is not allowed. Allowed: {', '.join(self._allowed)}"
            raise InvalidFilterError(message)

        if filter_.op not in allowed_filter.operations:
            message = f"Operation {filter_.op} is not allowed. Allowed: {', '.join(sorted(allowed_filter.operations))}"
            raise InvalidFilterError(message)

        # we don't want to empty generator here
        if isinstance(filter_.value, Generator):
            filter_.value = tuple(filter_.value)

        expected_type = allowed_filter.single_input
        if filter_.op in MULTI_OPERATIONS:
            if isinstance(filter_.value, str) or not isinstance(filter_.value, Iterable):
                message = f"Operation {filter_.op} requires collection of values, got {filter_.value!r}"
                raise InvalidFilterError(message)

            if not all(isinstance(entry, expected_type) for entry in filter_.value):
                message = f"At least one entry is not {expected_type}: {filter_.value}"
                raise InvalidFilterError(message)
        elif not isinstance(filter_.value, expected_type):
            message = f"Value {filter_.value} is not {expected_type}"
            raise InvalidFilterError(message)


FilterByName = FilterBy("name", ALL_OPERATIONS, str)
FilterByTitle = FilterBy("title", ALL_OPERATIONS, str)


def filters_to_query(filters: Iterable[Filter], validate: FilterValidator) -> QueryParameters:
    conditions = []
    for filter_ in filters:
        validate(filter_)
        conditions.append(_filter_to_condition(filter_))

    if not conditions:
        return {}

    return {"search": " and ".join(conditions)}


def _filter_to_condition(filter_: Filter) -> str:
    operator = SEARCH_OPERATORS[filter_.op]

    if filter_.op in MULTI_OPERATIONS:
        values = ", ".join(_prepare_value(entry) for entry in filter_.value)  # pyright: ignore[reportGeneralTypeIssues]
        return f"{filter_.attr} {operator} ({values})"

    return f"{filter_.attr} {operator} {_prepare_value(filter_.value)}"  # pyright: ignore[reportArgumentType]


def _prepare_value(value: FilterSingleValue) -> str:
    if isinstance(value, int):
        return str(value)

    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
