"""
Pydantic configuration models for pydecenttree.

ConstructionOptions holds the scalar options of a tree construction request.
Options can be passed as keyword arguments, loaded from YAML files, or set
from CLI arguments.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ConstructionOptions(BaseModel):
    """
    Options forwarded with a tree construction request.

    Attributes:
        number_of_threads: Worker threads for parallel algorithms. Zero or
            less keeps the current default; counts above the platform
            maximum are ignored.
        precision: Decimal digits written for branch lengths in the
            Newick output.
        verbosity: 0 silences the algorithm's progress reporting; anything
            higher lets it log progress at INFO level.

    Values are checked strictly: text such as "3" is rejected rather than
    parsed as an integer.
    """

    number_of_threads: int = Field(
        default=0,
        description="Worker threads (<= 0 keeps the default)",
    )
    precision: int = Field(
        default=6,
        description="Decimal digits for branch lengths",
    )
    verbosity: int = Field(
        default=0,
        description="0 suppresses algorithm progress reporting",
    )

    @classmethod
    def from_yaml(cls, path: Path) -> ConstructionOptions:
        """
        Load construction options from a YAML file.

        Options may sit at the top level or under a ``construction`` section.
        Unknown keys are ignored (forward compatibility).

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConstructionOptions populated from YAML values merged with defaults.

        Raises:
            FileNotFoundError: If YAML file does not exist.
            ValueError: If YAML is not a mapping or holds invalid values.
        """
        import yaml

        raw = yaml.safe_load(path.read_text())
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            msg = f"YAML config must be a mapping, got {type(raw).__name__}"
            raise ValueError(msg)

        section = raw.get("construction", raw)
        if not isinstance(section, dict):
            msg = "'construction' section must be a mapping"
            raise ValueError(msg)

        known = {k: v for k, v in section.items() if k in cls.model_fields}
        ignored = sorted(set(section) - set(known))
        if ignored:
            logger.debug("Ignoring unknown option keys in %s: %s", path, ", ".join(ignored))
        return cls(**known)

    def to_yaml(self, path: Path) -> None:
        """
        Write construction options to a YAML file.

        Args:
            path: Output file path.
        """
        path.write_text(self.to_yaml_str())

    def to_yaml_str(self) -> str:
        """
        Serialize construction options to a YAML string.

        Returns:
            YAML-formatted string with a ``construction`` section.
        """
        import yaml

        data: dict[str, Any] = {"construction": self.model_dump()}
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def merged(self, **overrides: Any) -> ConstructionOptions:
        """Return a copy with every non-None override applied and validated."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ConstructionOptions(**values)

    model_config = {"frozen": True, "strict": True}
