import re
from typing import Any

from pydantic import BaseModel, ConfigDict

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    name: str
    version: str
    description: str
    inputs: dict[str, str]
    template: str

    model_config = ConfigDict(extra="forbid")

    def render(self, **values: Any) -> str:
        """Fill ``{{ name }}`` placeholders.

        Every declared input must be supplied; extra values are ignored.
        """
        missing = [name for name in self.inputs if name not in values]
        if missing:
            raise KeyError(
                f"Prompt '{self.name}' missing inputs: {', '.join(sorted(missing))}"
            )

        def _substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in values:
                return match.group(0)
            return str(values[key])

        return _PLACEHOLDER.sub(_substitute, self.template)
