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

from collections.abc import Iterable
from typing import Self


class ForemanClientError(Exception):
    pass


# Session


class ClientInitError(ForemanClientError):
    pass


# Requester


class RequesterError(ForemanClientError):
    pass


class WrongCredentialsError(RequesterError):
    pass


class RetryRequestError(RequesterError):
    pass


class ResponseDataConversionError(RequesterError):
    pass


class ResponseError(RequesterError):
    pass


class BadRequestError(ResponseError):
    pass


class UnauthorizedError(ResponseError):
    pass


class ForbiddenError(ResponseError):
    pass


class NotFoundError(ResponseError):
    pass


class ConflictError(ResponseError):
    pass


class UnprocessableEntityError(ResponseError):
    pass


class ServerError(ResponseError):
    pass


# Objects


class AccessorError(ForemanClientError):
    pass


class MultipleObjectsReturnedError(AccessorError):
    pass


class ObjectDoesNotExistError(AccessorError):
    pass


# Filtering


class FilterError(ForemanClientError): ...


class InvalidFilterError(FilterError): ...


# Resources


class ResourceError(ForemanClientError): ...


class AttributeWriteError(ResourceError): ...


class SchemaMismatchError(ResourceError, TypeError):
    """Value stored in attribute bag doesn't match declared schema type"""


class InvalidIdentifierError(ResourceError): ...


class ConfigValidationError(ResourceError):
    def __init__(self: Self, problems: Iterable[str]) -> None:
        self.problems = tuple(problems)
        super().__init__("; ".join(self.problems))
