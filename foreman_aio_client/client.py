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

from functools import cached_property
from typing import Self

from asyncstdlib.functools import cached_property as async_cached_property  # noqa: N813

from foreman_aio_client._types import Requester
from foreman_aio_client.objects.hostgroups import HostgroupsNode


class ForemanClient:
    def __init__(self: Self, requester: Requester) -> None:
        self._requester = requester

    @cached_property
    def hostgroups(self: Self) -> HostgroupsNode:
        return HostgroupsNode(path=("hostgroups",), requester=self._requester)

    @async_cached_property
    async def status(self: Self) -> dict:
        response = await self._requester.get("status")
        return response.as_dict()

    @property
    async def version(self: Self) -> str:
        return str((await self.status)["version"])
