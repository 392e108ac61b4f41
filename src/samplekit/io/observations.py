"""Observation data: ``(x, y, sigma)`` records loaded from text files.

Files are plain ``.txt`` with one observation per line and three
whitespace-separated columns::

    0.94907928   0.97453964   1.0
    0.49061674   0.74530837   1.0

Blank lines are ignored. There is no comment syntax: a header line such
as ``# x y sigma`` is a malformed row. How malformed rows are handled
depends on the *rigidity* flag:

- ``rigidity=False`` (lenient): the row is skipped and a warning is logged.
  A row with more than three fields keeps its first three and is logged.
- ``rigidity=True`` (strict): the first malformed row aborts the load with
  :class:`~samplekit.exceptions.MalformedRowError` or
  :class:`~samplekit.exceptions.DataDomainError`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from samplekit.exceptions import (
    DataDomainError,
    DataError,
    DataFileError,
    MalformedRowError,
)

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSION = ".txt"
_FIELDS = ("input", "output", "sigma")


def _frozen(values) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class Observations:
    """Immutable, ordered observation set.

    Attributes:
        inputs: Independent variable values ``x_i``.
        outputs: Observed values ``y_i``.
        sigmas: Strictly positive measurement errors ``sigma_i``.
    """

    inputs: NDArray[np.float64]
    outputs: NDArray[np.float64]
    sigmas: NDArray[np.float64]

    def __post_init__(self) -> None:
        inputs = _frozen(self.inputs)
        outputs = _frozen(self.outputs)
        sigmas = _frozen(self.sigmas)
        if not (inputs.shape == outputs.shape == sigmas.shape):
            raise DataError(
                "inputs, outputs and sigmas must have equal length, got "
                f"{inputs.shape[0]}, {outputs.shape[0]} and {sigmas.shape[0]}"
            )
        if np.any(sigmas <= 0.0):
            raise DataError("All sigma values must be strictly positive")
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "outputs", outputs)
        object.__setattr__(self, "sigmas", sigmas)

    @property
    def num_points(self) -> int:
        return int(self.inputs.shape[0])

    def __len__(self) -> int:
        return self.num_points

    def to_frame(self) -> pd.DataFrame:
        """Return the observations as a DataFrame with columns x, y, sigma."""
        import pandas as pd

        return pd.DataFrame(
            {"x": self.inputs, "y": self.outputs, "sigma": self.sigmas}
        )


def _check_path(path: Path) -> None:
    suffix = path.suffix.lower()
    if suffix != SUPPORTED_EXTENSION:
        raise DataFileError(
            f"Incorrect file extension: {suffix or '<none>'} instead of "
            f"{SUPPORTED_EXTENSION} for file {path}",
            path,
        )
    if not path.is_file():
        raise DataFileError(f"Unable to open file: {path}", path)


def _parse_field(token: str | None) -> float | None:
    if token is None:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_row(
    line: str,
    line_number: int,
    path: Path,
    rigidity: bool,
) -> tuple[float, float, float] | None:
    """Parse one line; return None when the row is skipped."""
    text = line.strip()
    tokens = text.split()

    values: list[float] = []
    for idx, field_name in enumerate(_FIELDS):
        token = tokens[idx] if idx < len(tokens) else None
        value = _parse_field(token)
        if value is None:
            if rigidity:
                raise MalformedRowError(
                    f"Invalid {field_name} data read from line {line_number} : {text}",
                    path=path,
                    line_number=line_number,
                    line=text,
                )
            logger.warning(
                "Skipping row - Error reading %s data from line %d : %s",
                field_name,
                line_number,
                text,
            )
            return None
        values.append(value)

    x, y, sigma = values
    if sigma <= 0.0:
        if rigidity:
            raise DataDomainError(
                f"Sigma must be strictly positive, got {sigma} in line "
                f"{line_number} : {text}",
                path=path,
                line_number=line_number,
                line=text,
            )
        logger.warning(
            "Skipping row - Sigma value %s is not strictly positive in line %d : %s",
            sigma,
            line_number,
            text,
        )
        return None

    if len(tokens) > len(_FIELDS):
        if rigidity:
            raise DataDomainError(
                "Unexpected data exceeding three fields x, y and sigma in line "
                f"{line_number} : {text}",
                path=path,
                line_number=line_number,
                line=text,
            )
        logger.warning(
            "Unexpected data exceeding three fields x, y and sigma in line %d : %s",
            line_number,
            text,
        )

    return x, y, sigma


def load_observations(
    filepath: str | Path,
    rigidity: bool = False,
) -> Observations:
    """Load observations from a whitespace-delimited ``.txt`` file.

    Args:
        filepath: Path to the data file.
        rigidity: When True, any malformed row raises; otherwise malformed
            rows are skipped with a logged warning.

    Returns:
        Observations in file order.

    Raises:
        DataFileError: Wrong extension, or the file cannot be opened or
            decoded as UTF-8.
        MalformedRowError: Missing/non-numeric field (strict only).
        DataDomainError: Non-positive sigma or extra fields (strict only).
    """
    path = Path(filepath)
    _check_path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DataFileError(f"Unable to decode file as UTF-8 text: {path}", path) from e
    except OSError as e:
        raise DataFileError(f"Unable to open file: {path}", path) from e

    inputs: list[float] = []
    outputs: list[float] = []
    sigmas: list[float] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        row = _parse_row(line, line_number, path, rigidity)
        if row is None:
            continue
        x, y, sigma = row
        inputs.append(x)
        outputs.append(y)
        sigmas.append(sigma)

    logger.info("Loaded %d observations from %s", len(inputs), path)
    return Observations(inputs=inputs, outputs=outputs, sigmas=sigmas)
