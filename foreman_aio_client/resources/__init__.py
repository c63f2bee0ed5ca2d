"""
Resources map attribute bags of configuration-management host to Foreman objects and back.

Each resource exposes `create`, `read`, `update`, `delete` and `import_state` entry points
that accept attribute bag and the client returned by `ForemanSession`.

```python
data = ResourceData.from_config(HOSTGROUP_RESOURCE.schema, {"name": "compute", "parent_id": 3})
async with ForemanSession(url, credentials) as client:
    diagnostics = await HOSTGROUP_RESOURCE.create(data, client)
```
"""

from foreman_aio_client.resources._binding import RecordStore, Resource, ResourceBinding
from foreman_aio_client.resources._data import AttributeBag, ResourceData
from foreman_aio_client.resources._diagnostics import Diagnostic, Diagnostics, Severity
from foreman_aio_client.resources._schema import Attribute, Schema, ValueType, int_at_least
from foreman_aio_client.resources.hostgroup import HOSTGROUP_RESOURCE

RESOURCES: dict[str, Resource] = {
    "foreman_hostgroup": HOSTGROUP_RESOURCE,
}

__all__ = [
    "RESOURCES",
    "HOSTGROUP_RESOURCE",
    "Attribute",
    "AttributeBag",
    "Diagnostic",
    "Diagnostics",
    "RecordStore",
    "Resource",
    "ResourceBinding",
    "ResourceData",
    "Schema",
    "Severity",
    "ValueType",
    "int_at_least",
]
