import csv
import logging
from typing import Dict, List

from ..core.records import RecordType

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Type", "Name", "Value")


class CSVParser:
    """Read generic records from a Type,Name,Value CSV file.

    Rows are not validated here; the providers parse each record and
    reject unsupported types before anything is sent.
    """

    def __init__(self, csv_path: str):
        self.csv_path = csv_path

    def parse(self) -> List[Dict[str, str]]:
        """Parse CSV file into generic records."""
        records = []

        with open(self.csv_path, "r", newline="") as f:
            reader = csv.DictReader(f)

            fieldnames = reader.fieldnames or []
            missing = [c for c in REQUIRED_COLUMNS if c not in fieldnames]
            if missing:
                raise ValueError(f"CSV must contain {', '.join(REQUIRED_COLUMNS)} columns")

            for row_num, row in enumerate(reader, start=2):
                if not any((v or "").strip() for v in row.values()):
                    logger.debug(f"Skipping empty row {row_num}")
                    continue
                records.append(self._to_record(row))

        logger.info(f"Successfully parsed {len(records)} records from CSV")
        return records

    @staticmethod
    def _to_record(row: Dict[str, str]) -> Dict[str, str]:
        record_type = (row["Type"] or "").strip().upper()
        name = (row["Name"] or "").strip()
        value = row["Value"] or ""

        if record_type == RecordType.TXT.value:
            return {"type": record_type, "name": name, "text": value}
        return {"type": record_type, "name": name, "ip": value.strip()}
