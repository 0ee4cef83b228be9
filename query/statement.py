"""
query/statement.py
------------------
The parameterized statement handed from the builders to the executor.
"""

import re
from dataclasses import dataclass, field
from typing import Any

_PLACEHOLDER = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class Statement:
    """
    Query text with positional placeholders plus the values bound to them.

    Attributes:
        text: SQL containing `$1..$N` placeholders.
        parameters: `parameters[i]` is bound to placeholder `$i+1`.
    """
    text: str
    parameters: tuple = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but keep the statement immutable.
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def placeholders(self) -> list[int]:
        """Placeholder numbers in the order they appear in the text."""
        return [int(n) for n in _PLACEHOLDER.findall(self.text)]

    def to_pyformat(self) -> tuple[str, dict[str, Any]]:
        """
        Render the statement in the psycopg2 `pyformat` paramstyle.

        `$N` becomes `%(pN)s` and literal percent signs in the text are
        doubled, so the driver binds every value itself.

        Returns:
            (sql, params) ready for `cursor.execute(sql, params)`.
        """
        sql = _PLACEHOLDER.sub(lambda m: f"%(p{m.group(1)})s", self.text.replace("%", "%%"))
        params = {f"p{i}": value for i, value in enumerate(self.parameters, start=1)}
        return sql, params

    def __str__(self) -> str:
        return f"{self.text} -- {list(self.parameters)}"
