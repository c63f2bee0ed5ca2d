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

"""
To start using Foreman AIO Client initialize `ForemanSession` with `Credentials`.

By entering it as a contextmanager you'll get `foreman_aio_client.client.ForemanClient` instance.

```python
creds = Credentials("admin", "changeme")
async with ForemanSession("https://foreman.example.com", creds) as client:
    web_groups = await client.hostgroups.filter(name__contains="web")
    compute = await client.hostgroups.get(title__eq="base/compute")
```
"""

from foreman_aio_client._filters import Filter
from foreman_aio_client._session import ForemanSession
from foreman_aio_client._types import Credentials

__all__ = [
    "Credentials",
    "ForemanSession",
    "Filter",
]
