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

from copy import deepcopy
from typing import Any, Protocol, Self

from foreman_aio_client.errors import AttributeWriteError, ConfigValidationError, SchemaMismatchError
from foreman_aio_client.resources._schema import Attribute, Schema, ValueType


class AttributeBag(Protocol):
    """
    State of one managed resource instance as the host sees it.

    Nested lists are addressed by count-then-index keys:
    `parameters.#` is the amount of entries, `parameters.0.name` is a field of the first one.
    """

    @property
    def id(self) -> str: ...  # noqa: ANN101

    def set_id(self: Self, value: str) -> None: ...

    def get(self: Self, key: str) -> Any: ...  # noqa: ANN401

    def get_if_set(self: Self, key: str) -> tuple[Any, bool]: ...

    def set(self: Self, key: str, value: Any) -> None: ...  # noqa: ANN401


class ResourceData(AttributeBag):
    __slots__ = ("_schema", "_values", "_id")

    def __init__(self: Self, schema: Schema, state: dict[str, Any] | None = None, id_: str = "") -> None:
        self._schema = schema
        self._values: dict[str, Any] = {}
        self._id = id_

        for key, value in (state or {}).items():
            self.set(key, value)

    @classmethod
    def from_config(cls: type[Self], schema: Schema, config: dict[str, Any]) -> Self:
        problems = schema.validate_config(config)
        if problems:
            raise ConfigValidationError(problems)

        return cls(schema=schema, state=config)

    @property
    def id(self: Self) -> str:
        return self._id

    def set_id(self: Self, value: str) -> None:
        self._id = value

    def get(self: Self, key: str) -> Any:  # noqa: ANN401
        """Value of `key` or zero value of its type when it isn't set"""
        value, _ = self._resolve(key)
        return deepcopy(value)

    def get_if_set(self: Self, key: str) -> tuple[Any, bool]:
        value, zero_value = self._resolve(key)
        # zero value is indistinguishable from absent one
        return deepcopy(value), value is not None and value != zero_value

    def set(self: Self, key: str, value: Any) -> None:  # noqa: ANN401
        attribute = self._schema_attribute(key)

        if value is None:
            self._values.pop(key, None)
            return

        self._values[key] = _normalize(attribute, value, key)

    def as_dict(self: Self) -> dict[str, Any]:
        return {"id": self._id, **deepcopy(self._values)}

    def _schema_attribute(self: Self, key: str) -> Attribute:
        if key not in self._schema:
            message = f"{key}: attribute is not declared in schema"
            raise AttributeWriteError(message)

        return self._schema[key]

    def _resolve(self: Self, key: str) -> tuple[Any, Any]:
        top, *rest = key.split(".")
        if top not in self._schema:
            message = f"{key}: attribute is not declared in schema"
            raise SchemaMismatchError(message)

        attribute = self._schema[top]
        value = self._values.get(top, attribute.zero_value)
        if not rest:
            return value, attribute.zero_value

        if attribute.type is not ValueType.LIST or attribute.elem is None:
            message = f"{key}: {top} is not a nested list"
            raise SchemaMismatchError(message)

        index, *sub_keys = rest
        if index == "#" and not sub_keys:
            return len(value), 0

        if not index.isdigit() or len(sub_keys) != 1 or sub_keys[0] not in attribute.elem:
            message = f"{key}: can't address nested value"
            raise SchemaMismatchError(message)

        sub_attribute = attribute.elem[sub_keys[0]]
        position = int(index)
        if position >= len(value):
            return sub_attribute.zero_value, sub_attribute.zero_value

        return value[position][sub_attribute.key], sub_attribute.zero_value


def _normalize(attribute: Attribute, value: Any, key: str) -> Any:  # noqa: ANN401
    if not attribute.type.accepts(value):
        message = f"{key}: expected {attribute.type.value}, got {type(value).__name__}"
        raise AttributeWriteError(message)

    if attribute.type is not ValueType.LIST or attribute.elem is None:
        return value

    entries = []
    for i, entry in enumerate(value):
        if not isinstance(entry, dict):
            message = f"{key}.{i}: expected object, got {type(entry).__name__}"
            raise AttributeWriteError(message)

        unknown = set(entry) - {sub.key for sub in attribute.elem}
        if unknown:
            message = f"{key}.{i}: unsupported keys {', '.join(sorted(unknown))}"
            raise AttributeWriteError(message)

        normalized = {}
        for sub in attribute.elem:
            sub_value = entry.get(sub.key)
            normalized[sub.key] = (
                sub.zero_value if sub_value is None else _normalize(sub, sub_value, f"{key}.{i}.{sub.key}")
            )

        entries.append(normalized)

    return entries
