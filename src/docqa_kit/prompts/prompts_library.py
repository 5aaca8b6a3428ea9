import logging
from pathlib import Path

import yaml

from .prompt import Prompt

logger = logging.getLogger(__name__)

BUILTIN_PROMPTS_DIR = Path(__file__).parent / "library"


class PromptsLibrary:
    """Versioned prompts loaded from ``*.yaml`` files in one directory."""

    def __init__(self, directory: str | Path) -> None:
        self._prompts: dict[tuple[str, str], Prompt] = {}
        logger.info("Initializing PromptsLibrary from directory: %s", directory)
        self._load_all(Path(directory))
        logger.info("Loaded %d prompts", len(self._prompts))

    @classmethod
    def builtin(cls) -> "PromptsLibrary":
        """The prompts shipped with the package."""
        return cls(BUILTIN_PROMPTS_DIR)

    def get(self, name: str, version: str | None = None) -> Prompt:
        """Look up a prompt; without ``version`` the highest version wins."""
        logger.debug("Getting prompt: name=%s, version=%s", name, version)
        if version is None:
            versions = [v for (n, v) in self._prompts if n == name]
            if not versions:
                logger.error("Prompt not found: name=%s", name)
                raise KeyError(f"Prompt '{name}' not found")
            version = max(versions, key=_version_key)

        try:
            return self._prompts[(name, version)]
        except KeyError:
            logger.error("Prompt not found: name=%s, version=%s", name, version)
            raise KeyError(f"Prompt '{name}' version '{version}' not found") from None

    def list(self) -> list[tuple[str, str]]:
        return list(self._prompts.keys())

    def _load_all(self, directory: Path) -> None:
        for file_path in sorted(directory.glob("*.yaml")):
            prompt = self._load_prompt(file_path)
            self._prompts[(prompt.name, prompt.version)] = prompt
            logger.debug(
                "Loaded prompt: %s v%s from %s", prompt.name, prompt.version, file_path
            )

    def _load_prompt(self, file_path: Path) -> Prompt:
        with open(file_path) as f:
            data = yaml.safe_load(f)
        return Prompt(**data)


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) if part.isdigit() else 0 for part in version.split("."))
