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
`foreman_hostgroup` resource.

Hostgroups are organized in a tree-like structure and inherit values from their parent hostgroup(s).
When hosts get associated with a hostgroup, it will inherit attributes from the hostgroup.
This allows for easy, shared configuration of various hosts based on common attributes.

Foreign keys that are unset or set to 0 both mean "no relationship":
attribute bag doesn't distinguish zero from absent value.
"""

from foreman_aio_client._types import WithHostgroups
from foreman_aio_client.objects.hostgroups import Hostgroup, HostgroupParameter
from foreman_aio_client.resources._binding import RecordStore, Resource, ResourceBinding
from foreman_aio_client.resources._data import AttributeBag
from foreman_aio_client.resources._diagnostics import Diagnostics
from foreman_aio_client.resources._schema import Attribute, Schema, ValueType, int_at_least


def _foreign_key(key: str, description: str) -> Attribute:
    return Attribute(
        key=key, type=ValueType.INT, optional=True, validators=(int_at_least(0),), description=description
    )


HOSTGROUP_PARAMETER_SCHEMA = Schema(
    Attribute(key="name", type=ValueType.STRING, required=True),
    Attribute(key="value", type=ValueType.STRING, required=True),
    Attribute(key="created_at", type=ValueType.STRING, computed=True),
    Attribute(key="id", type=ValueType.INT, computed=True),
    Attribute(key="priority", type=ValueType.INT, computed=True),
    Attribute(key="updated_at", type=ValueType.STRING, computed=True),
)

HOSTGROUP_SCHEMA = Schema(
    Attribute(
        key="title",
        type=ValueType.STRING,
        computed=True,
        description=(
            "The title is the fullname of the hostgroup. A hostgroup's title is a path-like string "
            "from the head of the hostgroup tree down to this hostgroup. "
            'The title will be in the form of: "<parent 1>/<parent 2>/.../<name>".'
        ),
    ),
    Attribute(key="name", type=ValueType.STRING, required=True, description='Hostgroup name. Example: "compute"'),
    # foreign key relationships
    _foreign_key("architecture_id", "ID of the architecture associated with this hostgroup."),
    _foreign_key("compute_profile_id", "ID of the compute profile associated with this hostgroup."),
    _foreign_key("domain_id", "ID of the domain associated with this hostgroup."),
    _foreign_key("environment_id", "ID of the environment associated with this hostgroup."),
    _foreign_key("medium_id", "ID of the media associated with this hostgroup."),
    _foreign_key("operatingsystem_id", "ID of the operating system associated with this hostgroup."),
    Attribute(
        key="parameters",
        type=ValueType.LIST,
        optional=True,
        elem=HOSTGROUP_PARAMETER_SCHEMA,
        elem_type=HostgroupParameter,
        description="Parameters inherited by hosts of this hostgroup.",
    ),
    _foreign_key("parent_id", "ID of the parent hostgroup."),
    _foreign_key("ptable_id", "ID of the partition table associated with this hostgroup."),
    _foreign_key(
        "puppet_ca_proxy_id",
        "ID of the smart proxy acting as the puppet certificate authority server for this hostgroup.",
    ),
    _foreign_key("puppet_proxy_id", "ID of the smart proxy acting as the puppet proxy server for this hostgroup."),
    _foreign_key("realm_id", "ID of the realm associated with this hostgroup."),
    _foreign_key("subnet_id", "ID of the subnet associated with the hostgroup."),
)

HOSTGROUP_BINDING = ResourceBinding(name="hostgroup", schema=HOSTGROUP_SCHEMA, record_type=Hostgroup)


def _hostgroups(client: WithHostgroups) -> RecordStore[Hostgroup]:
    return client.hostgroups


HOSTGROUP_RESOURCE = Resource(binding=HOSTGROUP_BINDING, store=_hostgroups, description=__doc__ or "")


def build_hostgroup(data: AttributeBag) -> Hostgroup:
    """Missing members are left with default values of `Hostgroup`"""
    return HOSTGROUP_BINDING.decode(data)


def set_data_from_hostgroup(data: AttributeBag, hostgroup: Hostgroup) -> Diagnostics:
    return HOSTGROUP_BINDING.encode(hostgroup, data)


async def create_hostgroup(data: AttributeBag, client: WithHostgroups) -> Diagnostics:
    return await HOSTGROUP_RESOURCE.create(data, client)


async def read_hostgroup(data: AttributeBag, client: WithHostgroups) -> Diagnostics:
    return await HOSTGROUP_RESOURCE.read(data, client)


async def update_hostgroup(data: AttributeBag, client: WithHostgroups) -> Diagnostics:
    return await HOSTGROUP_RESOURCE.update(data, client)


async def delete_hostgroup(data: AttributeBag, client: WithHostgroups) -> Diagnostics:
    return await HOSTGROUP_RESOURCE.delete(data, client)


async def import_hostgroup(data: AttributeBag, identifier: str, client: WithHostgroups) -> Diagnostics:
    return await HOSTGROUP_RESOURCE.import_state(data, identifier, client)
