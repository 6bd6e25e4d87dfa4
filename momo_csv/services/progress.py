from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

One bar per batch, advanced once per converted workbook, with running
success / failed / rows counters as postfix. Without a TTY (CI, redirected
output) no bar is created and the counters are still kept.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress for a conversion batch."""

    def __init__(self, total_files: int, *, description: str = "Converting files") -> None:
        self.total_files = total_files
        self.description = description
        self.done = 0
        self.success = 0
        self.failed = 0
        self.rows = 0

        self.pbar: TqdmType[Any] | None = None
        if is_tty_enabled():
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )

    @property
    def enabled(self) -> bool:
        return self.pbar is not None

    def advance(self, file_name: str, *, success: bool, rows: int = 0) -> None:
        """Count one finished workbook and refresh the bar."""
        self.done += 1
        if success:
            self.success += 1
            self.rows += rows
        else:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_name})")
            self.pbar.set_postfix(success=self.success, failed=self.failed, rows=self.rows)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.set_description(self.description)
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
