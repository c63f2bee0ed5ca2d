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

from dataclasses import dataclass, field
from typing import Any, Self
import json

from foreman_aio_client._filters import COMMON_OPERATIONS, FilterBy, FilterByName, FilterByTitle, Filtering
from foreman_aio_client._types import HostgroupID
from foreman_aio_client.objects._accessors import PaginatedAccessor

# Foreign keys in the order Foreman documents them, all optional
HOSTGROUP_FOREIGN_KEYS = (
    "architecture_id",
    "compute_profile_id",
    "domain_id",
    "environment_id",
    "medium_id",
    "operatingsystem_id",
    "parent_id",
    "ptable_id",
    "puppet_ca_proxy_id",
    "puppet_proxy_id",
    "realm_id",
    "subnet_id",
)


def _parameter_value(value: Any) -> str:  # noqa: ANN401
    # typed parameters (boolean, integer, array, ...) come as JSON values, keep them in wire form
    if value is None:
        return ""

    if isinstance(value, str):
        return value

    return json.dumps(value)


@dataclass(slots=True)
class HostgroupParameter:
    id: int = 0
    name: str = ""
    value: str = ""
    priority: int = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_api(cls: type[Self], data: dict[str, Any]) -> Self:
        return cls(
            id=int(data.get("id") or 0),
            name=str(data["name"]),
            value=_parameter_value(data.get("value")),
            priority=int(data.get("priority") or 0),
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )

    def to_api(self: Self) -> dict[str, Any]:
        # the rest is computed by Foreman
        data: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.id:
            data["id"] = self.id

        return data


@dataclass(slots=True)
class Hostgroup:
    """
    Named, hierarchical unit of configuration inheritance.

    `title` is computed by Foreman as path from the root of hostgroups tree: `<parent 1>/.../<name>`.
    `None` in any foreign key means "no relationship" and such key is not sent to Foreman.
    """

    id: HostgroupID = 0
    name: str = ""
    title: str = ""
    architecture_id: int | None = None
    compute_profile_id: int | None = None
    domain_id: int | None = None
    environment_id: int | None = None
    medium_id: int | None = None
    operatingsystem_id: int | None = None
    parent_id: int | None = None
    ptable_id: int | None = None
    puppet_ca_proxy_id: int | None = None
    puppet_proxy_id: int | None = None
    realm_id: int | None = None
    subnet_id: int | None = None
    parameters: list[HostgroupParameter] = field(default_factory=list)

    @classmethod
    def from_api(cls: type[Self], data: dict[str, Any]) -> Self:
        foreign_keys = {key: None if data.get(key) is None else int(data[key]) for key in HOSTGROUP_FOREIGN_KEYS}
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            title=str(data.get("title") or ""),
            parameters=[HostgroupParameter.from_api(entry) for entry in data.get("parameters") or ()],
            **foreign_keys,
        )

    def to_api(self: Self) -> dict[str, Any]:
        hostgroup: dict[str, Any] = {"name": self.name}
        hostgroup |= {key: value for key in HOSTGROUP_FOREIGN_KEYS if (value := getattr(self, key)) is not None}

        if self.parameters:
            hostgroup["group_parameters_attributes"] = [parameter.to_api() for parameter in self.parameters]

        return {"hostgroup": hostgroup}


class HostgroupsNode(PaginatedAccessor[Hostgroup]):
    class_type = Hostgroup
    filtering = Filtering(FilterByName, FilterByTitle, FilterBy("parent_id", COMMON_OPERATIONS, int))

    async def create(self: Self, hostgroup: Hostgroup) -> Hostgroup:
        response = await self._requester.post(*self._path, data=hostgroup.to_api())
        return self._create_object(response.as_dict())

    async def read(self: Self, hostgroup_id: HostgroupID) -> Hostgroup:
        response = await self._requester.get(*self._path, hostgroup_id)
        return self._create_object(response.as_dict())

    async def update(self: Self, hostgroup: Hostgroup) -> Hostgroup:
        response = await self._requester.put(*self._path, hostgroup.id, data=hostgroup.to_api())
        return self._create_object(response.as_dict())

    async def delete(self: Self, hostgroup_id: HostgroupID) -> None:
        await self._requester.delete(*self._path, hostgroup_id)
