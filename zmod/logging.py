"""
Structured logging for zmod validation runs.

Produces:
  - manifest.json: One-time run metadata (git hash, config, host info)
  - checks.jsonl: One record per executed check
  - failures.jsonl: Failed checks only, flushed immediately
  - metrics.jsonl: Timing data
"""

import json
import os
import platform
import subprocess
import sys
import time
from contextlib import ExitStack
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any, Optional

import numpy as np

from .config import ArithConfig, get_config


@dataclass
class RunManifest:
    """Run-level metadata, saved once per run."""
    run_id: str
    timestamp: str
    git_commit: str
    config_hash: str
    node_name: str
    python_version: str
    numpy_version: str
    zmod_version: str
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def _get_git_commit() -> str:
    """Get current git commit hash, or 'unknown'."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True, text=True, timeout=5,
        )
        return result.stdout.strip() if result.returncode == 0 else "unknown"
    except (OSError, subprocess.SubprocessError):
        return "unknown"


def create_manifest(run_id: str,
                    config: Optional[ArithConfig] = None) -> RunManifest:
    """Create a RunManifest with auto-detected metadata."""
    from . import __version__

    config = config or get_config()
    return RunManifest(
        run_id=run_id,
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        git_commit=_get_git_commit(),
        config_hash=config.config_hash(),
        node_name=os.environ.get("HOSTNAME", platform.node()),
        python_version=sys.version,
        numpy_version=np.__version__,
        zmod_version=__version__,
        config=config.to_dict(),
    )


class RunLogger:
    """Structured JSONL logger for one validation run.

    Writes three files:
      - checks.jsonl    (every check)
      - failures.jsonl  (failed checks)
      - metrics.jsonl   (timing / perf data)
    """

    def __init__(self, output_dir: Path, rank: int = 0):
        self.output_dir = Path(output_dir)
        self.rank = rank

        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._checks_path = self.output_dir / "checks.jsonl"
        self._failures_path = self.output_dir / "failures.jsonl"
        self._metrics_path = self.output_dir / "metrics.jsonl"

        # Append mode so reruns accumulate; a failed open closes the others
        with ExitStack() as stack:
            self._checks_f = stack.enter_context(open(self._checks_path, 'a'))
            self._failures_f = stack.enter_context(open(self._failures_path, 'a'))
            self._metrics_f = stack.enter_context(open(self._metrics_path, 'a'))
            self._files = stack.pop_all()

        self._checks_count = 0
        self._failures_count = 0

    def _stamp(self, record: Dict[str, Any]) -> str:
        record["rank"] = self.rank
        record["timestamp"] = time.time()
        return json.dumps(record, default=str) + "\n"

    def log_check(self, name: str, passed: bool, detail: str = "",
                  **extra: Any) -> bool:
        """Log one check result; failures also go to failures.jsonl.

        Returns ``passed`` so calls can be collected directly.
        """
        record = {"check": name, "passed": bool(passed), "detail": detail}
        record.update(extra)
        line = self._stamp(record)
        self._checks_f.write(line)
        self._checks_count += 1
        if self._checks_count % 100 == 0:
            self._checks_f.flush()
        if not passed:
            self._failures_f.write(line)
            self._failures_f.flush()
            self._failures_count += 1
        return bool(passed)

    def log_metrics(self, record: Dict[str, Any]):
        """Log timing / performance metrics."""
        self._metrics_f.write(self._stamp(record))
        self._metrics_f.flush()

    def close(self):
        """Flush and close all log files."""
        self._files.close()

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "checks_logged": self._checks_count,
            "failures_logged": self._failures_count,
        }

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
