from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a conversion batch."""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a batch.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} rows={rows}
    shipment={shipment_files} return={return_files} elapsed_sec={elapsed}
    throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 7, 10, 15, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 7, 10, 15, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=2, failed_files=0, total_rows=40, shipment_files=1,
        ...     return_files=1, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=20.0
        ... )
        >>> render_summary_line(2, result)
        'SUMMARY files=2/2 success=2 failed=0 rows=40 shipment=1 return=1 elapsed_sec=2 throughput_rps=20'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"shipment={result.shipment_files} "
        f"return={result.return_files} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
