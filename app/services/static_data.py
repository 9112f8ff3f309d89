import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from structlog import get_logger

from app.config import settings
from app.core.errors import ErrorKind
from app.core.geo import Candidate
from app.schemas.biergarten import StaticCandidate

logger = get_logger()


# Loaded once per process, on first successful read
_STATIC_DATA: Optional[List[Dict[str, Any]]] = None


def _read_dataset(path: str) -> List[Dict[str, Any]]:
    global _STATIC_DATA
    if _STATIC_DATA is None:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError("Biergarten dataset must be a JSON list")
        _STATIC_DATA = data
    return _STATIC_DATA


def reset_static_cache() -> None:
    global _STATIC_DATA
    _STATIC_DATA = None


def parse_static_records(records: List[Dict[str, Any]]) -> List[Candidate]:
    candidates: List[Candidate] = []
    for i, record in enumerate(records):
        try:
            candidates.append(StaticCandidate.model_validate(record).to_candidate())
        except ValidationError as e:
            logger.warning("Skipping malformed Biergarten record", index=i, error=str(e))
    return candidates


async def load_static_biergartens(path: Optional[str] = None) -> List[Candidate]:
    """
    Candidates from the bundled dataset. Any read or parse failure is logged
    and yields an empty list.
    """
    path = path or settings.BIERGARTEN_DATA_PATH
    try:
        records = _read_dataset(path)
    except (OSError, ValueError) as e:
        logger.error("Error fetching Biergarten data", kind=ErrorKind.candidate_fetch_failed.value, path=path, error=str(e))
        return []
    candidates = parse_static_records(records)
    logger.info("Loaded static Biergarten data", path=path, count=len(candidates))
    return candidates
