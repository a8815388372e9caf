"""Base output strategy interface for decision support results."""

from pathlib import Path
from typing import Protocol

from irrigation_dss.models.results import DSSResult


class OutputStrategy(Protocol):
    """Protocol for output strategies that serialize a DSSResult.

    The orchestrator returns domain models; the caller decides when and where
    to write them using an appropriate strategy.
    """

    def write(self, result: DSSResult, output_path: Path) -> Path:
        """Write the result to a file.

        Args:
            result: Decision support result for one run
            output_path: Path where the output file should be written

        Returns:
            Path to the written output file

        Raises:
            OSError: If writing fails
        """
        ...
