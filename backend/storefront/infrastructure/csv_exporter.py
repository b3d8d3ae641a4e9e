"""CSV Order Exporter — writes committed order records to a flat file.

Invariants:
    - Header is always ID,Nombre,Cantidad; one row per record in input order
    - Parent directory created when absent
    - The file is replaced as a whole: readers never see a half-written export
    - Any OS/csv failure is raised as ExportError (path included)
    - A staged file never becomes visible at `path` unless publish() is called

Design Decisions:
    - Overwrite per order (not append): the file mirrors the latest committed order
    - Two steps: stage() writes a temp file next to `path`, publish() os.replace()s
      it into place. The order commit publishes only after the store commit
    - Synchronous API: callers run it through asyncio.to_thread
"""

import csv
import logging
import os
import tempfile
from collections.abc import Sequence

from storefront.core.domain_types import OrderRecord
from storefront.core.errors import ExportError

logger = logging.getLogger(__name__)

CSV_HEADER = ("ID", "Nombre", "Cantidad")


class CsvOrderExporter:
    """Export order records to `path` as comma-separated values."""

    def __init__(self, path: str):
        self.path = path

    def stage(self, records: Sequence[OrderRecord]) -> str:
        """Write records to a temp file beside `path`; returns the temp path."""
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=directory, prefix=".ordenes-", suffix=".csv.tmp",
            )
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as fh:
                writer = csv.writer(fh)
                writer.writerow(CSV_HEADER)
                for record in records:
                    writer.writerow((record.id, record.name, record.cantidad))
        except (OSError, csv.Error) as e:
            if tmp_path:
                self.discard(tmp_path)
            raise ExportError(str(e), self.path) from e
        return tmp_path

    def publish(self, staged_path: str) -> str:
        try:
            os.replace(staged_path, self.path)
        except OSError as e:
            self.discard(staged_path)
            raise ExportError(str(e), self.path) from e
        logger.info("Order export published", extra={"path": self.path})
        return self.path

    def discard(self, staged_path: str) -> None:
        try:
            os.unlink(staged_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(
                f"Could not remove staged export: {e}",
                extra={"path": staged_path},
            )

    def export(self, records: Sequence[OrderRecord]) -> str:
        """Stage and publish in one call."""
        return self.publish(self.stage(records))
