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
Binding between typed records and attribute bags of the host.

Every operation builds record from the bag, makes exactly one call to the remote store
and writes the returned record back to the bag. Errors of remote calls are propagated as is
and leave the bag untouched, failed writes to the bag are reported as diagnostics.
"""

from collections.abc import Callable
from typing import Any, Protocol, Self
import logging

from foreman_aio_client.errors import AttributeWriteError, InvalidIdentifierError, SchemaMismatchError
from foreman_aio_client.resources._data import AttributeBag
from foreman_aio_client.resources._diagnostics import Diagnostics
from foreman_aio_client.resources._schema import Attribute, Schema, ValueType

logger = logging.getLogger(__name__)


class RecordStore[Record](Protocol):
    async def create(self: Self, record: Record, /) -> Record: ...

    async def read(self: Self, record_id: int, /) -> Record: ...

    async def update(self: Self, record: Record, /) -> Record: ...

    async def delete(self: Self, record_id: int, /) -> None: ...


class ResourceBinding[Record]:
    def __init__(self: Self, name: str, schema: Schema, record_type: type[Record], identity: str = "id") -> None:
        self.name = name
        self.schema = schema
        self._record_type = record_type
        self.identity = identity

    # Bag -> Record

    def decode(self: Self, bag: AttributeBag) -> Record:
        values = {}

        if bag.id:
            values[self.identity] = self._decode_identifier(bag.id)

        for attribute in self.schema:
            value, present = self._decode_value(bag, attribute.key, attribute)
            if present:
                values[attribute.key] = value

        return self._record_type(**values)

    def _decode_identifier(self: Self, identifier: str) -> int:
        try:
            return int(identifier)
        except ValueError as e:
            message = f"Identifier of {self.name} should be integer, got {identifier!r}"
            raise SchemaMismatchError(message) from e

    def _decode_value(self: Self, bag: AttributeBag, key: str, attribute: Attribute) -> tuple[Any, bool]:
        if attribute.type is ValueType.LIST and attribute.elem is not None:
            return self._decode_entries(bag, key, attribute)

        value, present = bag.get_if_set(key)
        if not present:
            return None, False

        if not attribute.type.accepts(value):
            message = f"{self.name} {key}: expected {attribute.type.value}, got {type(value).__name__}"
            raise SchemaMismatchError(message)

        return value, True

    def _decode_entries(self: Self, bag: AttributeBag, key: str, attribute: Attribute) -> tuple[Any, bool]:
        count, present = bag.get_if_set(f"{key}.#")
        if not present:
            return None, False

        if not ValueType.INT.accepts(count):
            message = f"{self.name} {key}.#: expected int, got {type(count).__name__}"
            raise SchemaMismatchError(message)

        if attribute.elem_type is None:
            message = f"{self.name} {key}: record type of nested entries is not declared"
            raise SchemaMismatchError(message)

        entries = []
        for i in range(count):
            values = {}
            for sub in attribute.elem:  # pyright: ignore[reportOptionalIterable]
                value, sub_present = self._decode_value(bag, f"{key}.{i}.{sub.key}", sub)
                if sub_present:
                    values[sub.key] = value

            entries.append(attribute.elem_type(**values))

        return entries, True

    # Record -> Bag

    def encode(self: Self, record: Record, bag: AttributeBag) -> Diagnostics:
        diagnostics = Diagnostics()

        bag.set_id(str(getattr(record, self.identity)))

        for attribute in self.schema:
            value = _encode_value(attribute, getattr(record, attribute.key))
            try:
                bag.set(attribute.key, value)
            except AttributeWriteError as e:
                logger.error("error setting %s %s: %s", self.name, attribute.key, e)
                diagnostics.add_error(
                    summary=f"Failed to set {self.name} {attribute.key}", detail=str(e), attribute=attribute.key
                )

        return diagnostics


def _encode_value(attribute: Attribute, value: Any) -> Any:  # noqa: ANN401
    if attribute.type is not ValueType.LIST or attribute.elem is None or value is None:
        return value

    return [{sub.key: getattr(entry, sub.key) for sub in attribute.elem} for entry in value]


class Resource[Record]:
    """
    Entry points of one resource type for the host.

    `store` picks remote store of records from the opaque client handle host passes in.
    """

    def __init__(
        self: Self, binding: ResourceBinding[Record], store: Callable[[Any], RecordStore[Record]], description: str = ""
    ) -> None:
        self.binding = binding
        self.description = description
        self._store = store

    @property
    def schema(self: Self) -> Schema:
        return self.binding.schema

    async def create(self: Self, bag: AttributeBag, client: Any) -> Diagnostics:  # noqa: ANN401
        record = self.binding.decode(bag)
        logger.debug("%s: [%r]", self.binding.name, record)

        created = await self._store(client).create(record)
        logger.debug("Created %s: [%r]", self.binding.name, created)

        return self.binding.encode(created, bag)

    async def read(self: Self, bag: AttributeBag, client: Any) -> Diagnostics:  # noqa: ANN401
        record = self.binding.decode(bag)
        logger.debug("%s: [%r]", self.binding.name, record)

        read = await self._store(client).read(getattr(record, self.binding.identity))
        logger.debug("Read %s: [%r]", self.binding.name, read)

        return self.binding.encode(read, bag)

    async def update(self: Self, bag: AttributeBag, client: Any) -> Diagnostics:  # noqa: ANN401
        record = self.binding.decode(bag)
        logger.debug("%s: [%r]", self.binding.name, record)

        updated = await self._store(client).update(record)
        logger.debug("Updated %s: [%r]", self.binding.name, updated)

        return self.binding.encode(updated, bag)

    async def delete(self: Self, bag: AttributeBag, client: Any) -> Diagnostics:  # noqa: ANN401
        record = self.binding.decode(bag)
        logger.debug("%s: [%r]", self.binding.name, record)

        # host clears identifier of the bag after successful deletion
        await self._store(client).delete(getattr(record, self.binding.identity))

        return Diagnostics()

    async def import_state(self: Self, bag: AttributeBag, identifier: str, client: Any) -> Diagnostics:  # noqa: ANN401
        if not (identifier.isascii() and identifier.isdigit()):
            message = f"Can't import {self.binding.name}: identifier should be non-negative integer, got {identifier!r}"
            raise InvalidIdentifierError(message)

        bag.set_id(identifier)

        return await self.read(bag, client)
