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

from dataclasses import dataclass
from enum import Enum
from typing import Self


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(slots=True, frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""
    attribute: str | None = None


class Diagnostics(list[Diagnostic]):
    """Problems that didn't stop the operation, host decides how to report them"""

    @property
    def has_errors(self: Self) -> bool:
        return any(diagnostic.severity is Severity.ERROR for diagnostic in self)

    def add_error(self: Self, summary: str, detail: str = "", attribute: str | None = None) -> Self:
        self.append(Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail, attribute=attribute))
        return self
