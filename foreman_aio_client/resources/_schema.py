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

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

type Validator = Callable[[str, Any], Iterable[str]]


class ValueType(str, Enum):
    STRING = "string"
    INT = "int"
    LIST = "list"

    @property
    def zero_value(self: Self) -> Any:  # noqa: ANN401
        match self:
            case ValueType.STRING:
                return ""
            case ValueType.INT:
                return 0
            case ValueType.LIST:
                return []

    def accepts(self: Self, value: Any) -> bool:  # noqa: ANN401
        match self:
            case ValueType.STRING:
                return isinstance(value, str)
            case ValueType.INT:
                # bool is int too, but never a valid one here
                return isinstance(value, int) and not isinstance(value, bool)
            case ValueType.LIST:
                return isinstance(value, list)


def int_at_least(minimum: int) -> Validator:
    def validate(key: str, value: Any) -> Iterable[str]:  # noqa: ANN401
        if value < minimum:
            yield f"expected {key} to be at least ({minimum}), got {value}"

    return validate


@dataclass(slots=True, frozen=True)
class Attribute:
    key: str
    type: ValueType
    required: bool = False
    optional: bool = False
    computed: bool = False
    validators: tuple[Validator, ...] = ()
    description: str = ""
    # nested element of LIST attribute: its schema and record type to build entries of
    elem: "Schema | None" = None
    elem_type: type | None = None

    @property
    def zero_value(self: Self) -> Any:  # noqa: ANN401
        return self.type.zero_value

    @property
    def read_only(self: Self) -> bool:
        return self.computed and not (self.optional or self.required)


class Schema:
    def __init__(self: Self, *attributes: Attribute) -> None:
        self._attributes = {attribute.key: attribute for attribute in attributes}

    def __iter__(self: Self) -> Iterator[Attribute]:
        return iter(self._attributes.values())

    def __contains__(self: Self, key: str) -> bool:
        return key in self._attributes

    def __getitem__(self: Self, key: str) -> Attribute:
        return self._attributes[key]

    def __len__(self: Self) -> int:
        return len(self._attributes)

    def validate_config(self: Self, config: dict[str, Any], prefix: str = "") -> list[str]:
        """
        Check user-supplied configuration against declared attributes.

        Returns list of found problems, empty list means configuration is valid.
        Computed-only attributes can't be configured, required ones must be present.
        """
        problems = []

        for key in config:
            if key not in self._attributes:
                problems.append(f"{prefix}{key}: unsupported argument")

        for attribute in self._attributes.values():
            full_key = f"{prefix}{attribute.key}"
            value = config.get(attribute.key)

            if value is None:
                if attribute.required:
                    problems.append(f"{full_key}: required argument is missing")
                continue

            if attribute.read_only:
                problems.append(f"{full_key}: value is computed and can't be configured")
                continue

            if not attribute.type.accepts(value):
                problems.append(f"{full_key}: expected {attribute.type.value}, got {type(value).__name__}")
                continue

            for validate in attribute.validators:
                problems.extend(f"{full_key}: {problem}" for problem in validate(full_key, value))

            if attribute.type is ValueType.LIST and attribute.elem is not None:
                problems.extend(_validate_entries(attribute.elem, value, full_key))

        return problems


def _validate_entries(elem: Schema, entries: list, key: str) -> Iterable[str]:
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            yield f"{key}.{i}: expected object, got {type(entry).__name__}"
            continue

        yield from elem.validate_config(entry, prefix=f"{key}.{i}.")
