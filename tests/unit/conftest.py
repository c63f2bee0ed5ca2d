import pytest

from foreman_aio_client.client import ForemanClient
from foreman_aio_client.resources import ResourceData
from foreman_aio_client.resources.hostgroup import HOSTGROUP_SCHEMA
from tests.unit.mocks.requesters import QueueRequester


@pytest.fixture()
def queue_requester() -> QueueRequester:
    return QueueRequester()


@pytest.fixture()
def foreman_client(queue_requester: QueueRequester) -> ForemanClient:
    return ForemanClient(requester=queue_requester)


@pytest.fixture()
def hostgroup_data() -> ResourceData:
    return ResourceData(schema=HOSTGROUP_SCHEMA)
