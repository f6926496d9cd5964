"""
Run configuration.

Everything that changes how a run behaves is passed explicitly through
these objects; there is no module-level formatting or solver state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class Strategy(str, Enum):
    """Factorization used to solve the least-squares problem."""
    NORMAL = "normal"   # (X'X) b = X'y via symmetric-indefinite LDL'
    QR = "qr"           # X = QR with column pivoting

    @classmethod
    def parse(cls, value: Union[str, "Strategy"]) -> "Strategy":
        """Accept a Strategy or its string name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(repr(s.value) for s in cls)
            raise ValueError(
                f"Unknown strategy: {value!r}. Valid options: {valid}"
            ) from None


@dataclass(frozen=True)
class OutputFormat:
    """
    How coefficients are rendered.

    Attributes
    ----------
    precision : int
        Significant digits (17 round-trips any float64)
    notation : str
        printf conversion: 'g', 'e' or 'f'
    delimiter : str
        Column separator (only matters for multi-column output)
    newline : str
        Line terminator written after every coefficient
    """
    precision: int = 17
    notation: str = "g"
    delimiter: str = ", "
    newline: str = "\n"

    def __post_init__(self):
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if self.notation not in ("g", "e", "f"):
            raise ValueError(
                f"notation must be 'g', 'e' or 'f', got {self.notation!r}"
            )

    @property
    def fmt(self) -> str:
        """printf-style field format."""
        return f"%.{self.precision}{self.notation}"


@dataclass(frozen=True)
class RunConfig:
    """One invocation of the estols pipeline."""
    matrix_path: Optional[str] = None
    response_path: Optional[str] = None
    output_path: Optional[str] = None
    strategy: Strategy = Strategy.NORMAL
    backend: str = "auto"
    speed_test: Optional[Tuple[int, int]] = None   # (m, n)
    seed: Optional[int] = None
    output_format: OutputFormat = field(default_factory=OutputFormat)

    @property
    def is_speed_test(self) -> bool:
        return self.speed_test is not None


__all__ = ["Strategy", "OutputFormat", "RunConfig"]
