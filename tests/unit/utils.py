# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import AsyncGenerator
from typing import Any


async def n_entries_as_list[T](gen: AsyncGenerator[T, None], n: int) -> list[T]:
    result = []
    i = 1

    async for entry in gen:
        result.append(entry)
        if i == n:
            break
        i += 1

    return result


def hostgroup_response(**overrides: Any) -> dict:  # noqa: ANN401
    response = {
        "id": 42,
        "name": "compute",
        "title": "base/compute",
        "architecture_id": 1,
        "compute_profile_id": None,
        "domain_id": 3,
        "environment_id": None,
        "medium_id": 5,
        "operatingsystem_id": 6,
        "parent_id": 7,
        "ptable_id": None,
        "puppet_ca_proxy_id": 9,
        "puppet_proxy_id": 9,
        "realm_id": None,
        "subnet_id": 11,
        "parameters": [
            {
                "id": 100,
                "name": "a",
                "value": "1",
                "priority": 60,
                "created_at": "2024-01-01 10:00:00 UTC",
                "updated_at": "2024-01-02 10:00:00 UTC",
            },
            {
                "id": 101,
                "name": "b",
                "value": "2",
                "priority": 60,
                "created_at": "2024-01-01 11:00:00 UTC",
                "updated_at": "2024-01-02 11:00:00 UTC",
            },
        ],
    }
    return response | overrides


def paginated_response(results: list[dict], subtotal: int | None = None) -> dict:
    response: dict[str, Any] = {"page": 1, "per_page": 20, "results": results}
    if subtotal is not None:
        response |= {"total": subtotal, "subtotal": subtotal}

    return response
