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

from types import TracebackType
from typing import Self
import logging

import httpx

from foreman_aio_client._types import (
    Cert,
    ConnectionSecurity,
    Credentials,
    RequestPolicy,
    RetryPolicy,
    SessionInfo,
    Verify,
)
from foreman_aio_client.client import ForemanClient
from foreman_aio_client.errors import ClientInitError, RetryRequestError, UnauthorizedError, WrongCredentialsError
from foreman_aio_client.requesters import DefaultRequester

logger = logging.getLogger(__name__)


class ForemanSession:
    def __init__(
        self: Self,
        # basics
        url: str,
        credentials: Credentials,
        *,
        # security
        verify: Verify = True,
        cert: Cert = None,
        # requesting behavior
        timeout: float = 600,
        retry_attempts: int = 3,
        retry_interval: float = 1,
    ) -> None:
        self._session_info = SessionInfo(
            url=url, credentials=credentials, security=ConnectionSecurity(verify=verify, certificate=cert)
        )
        self._request_policy = RequestPolicy(
            timeout=timeout, retry=RetryPolicy(attempts=retry_attempts, interval=retry_interval)
        )

        self._http_client: httpx.AsyncClient | None = None
        self._foreman_client: ForemanClient | None = None

    # Context Manager

    async def __aenter__(self: Self) -> ForemanClient:
        self._http_client = await self._prepare_http_client_for_running_foreman()

        try:
            self._foreman_client = self._prepare_foreman_client()
            await self._ensure_credentials_are_accepted(self._foreman_client)
        except BaseException:
            await self._http_client.aclose()
            raise

        return self._foreman_client

    async def __aexit__(
        self: Self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        if self._http_client:
            await self._http_client.aclose()

    # Steps

    async def _prepare_http_client_for_running_foreman(self: Self) -> httpx.AsyncClient:
        client = httpx.AsyncClient(
            base_url=self._session_info.url,
            auth=self._session_info.credentials.as_basic_auth(),
            headers={"Accept": "application/json"},
            timeout=self._request_policy.timeout,
            verify=self._session_info.security.verify,
            cert=self._session_info.security.certificate,
        )

        try:
            await client.head("/")
        except httpx.NetworkError as e:
            await client.aclose()
            message = f"Failed to connect to Foreman at URL {self._session_info.url}"
            raise ClientInitError(message) from e

        return client

    def _prepare_foreman_client(self: Self) -> ForemanClient:
        if self._http_client is None:
            message = "Failed to prepare Foreman client: HTTP client is not initialized"
            raise RuntimeError(message)

        requester = DefaultRequester(http_client=self._http_client, retries=self._request_policy.retry)
        return ForemanClient(requester=requester)

    async def _ensure_credentials_are_accepted(self: Self, client: ForemanClient) -> None:
        credentials = self._session_info.credentials
        try:
            version = await client.version
        except UnauthorizedError as e:
            message = (
                f"Authentication at Foreman at {self._session_info.url} has failed for user {credentials.username} "
                "most likely due to incorrect credentials"
            )
            raise WrongCredentialsError(message) from e
        except RetryRequestError as e:
            message = f"Failed to read status of Foreman at URL {self._session_info.url}"
            raise ClientInitError(message) from e

        logger.debug("Connected to Foreman %s at %s as %s", version, self._session_info.url, credentials.username)
