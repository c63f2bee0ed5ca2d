from foreman_aio_client.objects.hostgroups import (
    HOSTGROUP_FOREIGN_KEYS,
    Hostgroup,
    HostgroupParameter,
    HostgroupsNode,
)

__all__ = [
    "HOSTGROUP_FOREIGN_KEYS",
    "Hostgroup",
    "HostgroupParameter",
    "HostgroupsNode",
]
