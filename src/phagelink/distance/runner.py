"""Run `mash dist` against a reference sketch."""

import subprocess
from pathlib import Path

import structlog

from phagelink.config.schema import PipelineConfig

logger = structlog.get_logger()


class DistanceToolError(RuntimeError):
    """The distance tool is missing or exited with an error."""


class MashRunner:
    """Synchronous wrapper around ``mash dist -i``.

    Attributes:
        executable: mash binary name or path
        max_p_value: Passed as ``-v``; hits above it are not reported
    """

    def __init__(self, executable: str = "mash", max_p_value: float = 1.0):
        self.executable = executable
        self.max_p_value = max_p_value

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "MashRunner":
        return cls(
            executable=config.distance.executable,
            max_p_value=config.distance.max_p_value,
        )

    def build_command(self, index: Path | str, queries: Path | str) -> list[str]:
        return [
            self.executable,
            "dist",
            "-i",
            str(index),
            str(queries),
            "-v",
            f"{self.max_p_value:g}",
        ]

    def compute_distances(self, index: Path | str, queries: Path | str) -> str:
        """Run mash and return its standard output.

        Args:
            index: Mash sketch built from the phage reference genomes
            queries: FASTA of query contigs (compared per sequence)

        Returns:
            Raw tab-delimited mash output

        Raises:
            FileNotFoundError: If the sketch or query file is missing
            DistanceToolError: If mash cannot be started or exits non-zero
        """
        for path, label in ((index, "mash sketch"), (queries, "contigs file")):
            if not Path(path).is_file():
                raise FileNotFoundError(f"Cannot read the {label}: {path}")

        cmd = self.build_command(index, queries)
        logger.info("mash_run_start", command=" ".join(cmd))

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise DistanceToolError(
                f"Failed to execute {self.executable}: not found on PATH"
            ) from e

        if completed.returncode != 0:
            raise DistanceToolError(
                f"{self.executable} exited with status {completed.returncode}: "
                f"{completed.stderr.strip()}"
            )

        logger.info("mash_run_complete", lines=completed.stdout.count("\n"))
        return completed.stdout
