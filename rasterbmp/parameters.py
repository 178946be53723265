"""Configuration for the gradient export."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SIZE = 1000
DEFAULT_OUTPUT = Path("gradient.bmp")


@dataclass(frozen=True)
class GradientParameters:
    """Dimensions, output path and colour settings for a gradient export."""

    height: int = DEFAULT_SIZE
    width: int = DEFAULT_SIZE
    output: Path = DEFAULT_OUTPUT
    blue: float = 0.5
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "output", Path(self.output))
        if self.height < 0 or self.width < 0:
            raise ValueError(
                f"Image dimensions must be non-negative, got {self.height}x{self.width}"
            )
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")

    @classmethod
    def from_json(cls, path: Path, **overrides: Any) -> "GradientParameters":
        with Path(path).open("r", encoding="utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path}")
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["output"] = str(self.output)
        return data
