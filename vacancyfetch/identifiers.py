import csv
from pathlib import Path
from typing import List, Sequence

from .logger import get_logger

logger = get_logger()


def column_index(header: Sequence[str], column_name: str) -> int:
    """Position of column_name in header, or -1 when absent."""
    for i, name in enumerate(header):
        if name == column_name:
            return i
    return -1


def load_identifiers(path: Path, column_name: str) -> List[str]:
    """
    Read the identifiers in `column_name` from a CSV file, in file order.

    A missing file, an empty file, or a missing column is logged and yields
    an empty list. Rows too short to hold the column are skipped with a
    warning. Duplicates are kept.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                logger.error("Error reading CSV header: file is empty", path=str(path))
                return []
            logger.debug("CSV header", path=str(path), header=header)

            index = column_index(header, column_name)
            if index == -1:
                logger.error("Column not found", path=str(path), column=column_name)
                return []

            identifiers: List[str] = []
            for record in reader:
                if index < len(record):
                    identifiers.append(record[index])
                else:
                    logger.warning(
                        "Column index is out of range for the current record",
                        path=str(path),
                        line=reader.line_num,
                    )
    except OSError as e:
        logger.error("Error opening CSV file", path=str(path), error=str(e))
        return []
    except UnicodeDecodeError as e:
        logger.error("Error decoding CSV file", path=str(path), error=str(e))
        return []
    except csv.Error as e:
        logger.error("Error parsing CSV file", path=str(path), error=str(e))
        return []

    logger.info(f"Loaded {len(identifiers)} identifiers", path=str(path), column=column_name)
    return identifiers
