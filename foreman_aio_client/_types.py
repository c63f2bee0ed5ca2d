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

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Self

if TYPE_CHECKING:
    from foreman_aio_client.objects.hostgroups import Hostgroup

# Init / Authorization

type Cert = str | tuple[str, Optional[str], Optional[str]] | None
type Verify = str | bool


@dataclass(slots=True, frozen=True)
class Credentials:
    username: str
    password: str

    def as_basic_auth(self: Self) -> tuple[str, str]:
        return self.username, self.password

    def __repr__(self: Self) -> str:
        return f"{self.username}'s credentials"


@dataclass(slots=True, frozen=True)
class ConnectionSecurity:
    verify: Verify
    certificate: Cert


@dataclass(slots=True, frozen=True)
class SessionInfo:
    url: str
    credentials: Credentials
    security: ConnectionSecurity


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    attempts: int
    interval: float


@dataclass(slots=True, frozen=True)
class RequestPolicy:
    timeout: float
    retry: RetryPolicy


# Requests

type PathPart = str | int
type Endpoint = tuple[PathPart, ...]

type QueryParameters = dict


class RequesterResponse(Protocol):
    def as_list(self: Self) -> list: ...

    def as_dict(self: Self) -> dict: ...


class Requester(Protocol):
    async def get(self: Self, *path: PathPart, query: QueryParameters | None = None) -> RequesterResponse: ...

    async def post(self: Self, *path: PathPart, data: dict | list) -> RequesterResponse: ...

    async def put(self: Self, *path: PathPart, data: dict | list) -> RequesterResponse: ...

    async def delete(self: Self, *path: PathPart) -> RequesterResponse: ...


# Objects

type HostgroupID = int


class HostgroupStore(Protocol):
    """Remote side of the hostgroup resource: one round trip per call"""

    async def create(self: Self, hostgroup: "Hostgroup") -> "Hostgroup": ...

    async def read(self: Self, hostgroup_id: HostgroupID) -> "Hostgroup": ...

    async def update(self: Self, hostgroup: "Hostgroup") -> "Hostgroup": ...

    async def delete(self: Self, hostgroup_id: HostgroupID) -> None: ...


class WithHostgroups(Protocol):
    # ignored linter check, because with `: Self` type checking breaks
    @property
    def hostgroups(self) -> HostgroupStore: ...  # noqa: ANN101
