import csv
import json
import logging
from pathlib import Path

from core.exceptions import ReportWriteException
from pnl.entities import ReconciledRecord, ReportArtifacts

REPORT_FIELDS = ["chain", "wallet", "token", "qty", "base_qty", "diff"]


class ReportEmitter:
    """
    Writes reconciled records as a CSV table plus a JSON mirror.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def emit(self, records: list[ReconciledRecord], out_path: str | Path) -> ReportArtifacts:
        """
        Persist the report.

        Parameters
        ----------
        records : list[ReconciledRecord]
            Records in the order they should appear
        out_path : str | Path
            CSV path; the JSON mirror goes next to it with a ``.json`` suffix

        Returns
        -------
        ReportArtifacts
            Paths written and row count

        Raises
        ------
        ReportWriteException
            If either file cannot be written, or the CSV path already
            carries the ``.json`` suffix of its mirror
        """
        csv_path = Path(out_path)
        json_path = csv_path.with_suffix(".json")
        if json_path == csv_path:
            raise ReportWriteException(
                f"Report path {csv_path} would be overwritten by its JSON mirror"
            )
        rows = [record.model_dump() for record in records]

        try:
            self.write_csv(rows, csv_path)
            self.write_json(rows, json_path)
        except OSError as e:
            # a failed run leaves no report behind
            csv_path.unlink(missing_ok=True)
            raise ReportWriteException(f"Failed to write report: {e}") from e

        self.logger.info(f"Wrote {len(rows)} rows to {csv_path} and {json_path}")
        return ReportArtifacts(csv_path=csv_path, json_path=json_path, rows=len(rows))

    def write_csv(self, rows: list[dict], path: Path) -> None:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
            writer.writeheader()
            writer.writerows(rows)

    def write_json(self, rows: list[dict], path: Path) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(rows, f, indent=2)
