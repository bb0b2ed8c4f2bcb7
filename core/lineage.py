from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from core.history import HistoryStack
from core.models import EditorFile


class VersionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    ordinal: int          # index of the snapshot inside the history stack
    timestamp: datetime
    file: EditorFile
    is_latest: bool = False


def lineage(history: HistoryStack, file_id: str) -> List[VersionRecord]:
    """Distinct states one file went through in the stack, newest first.

    A snapshot whose copy of the file has the same data as the last retained
    version adds nothing; snapshots without the file are skipped.
    """
    records = []

    for ordinal, (snapshot, timestamp) in enumerate(history.entries()):
        found = next((f for f in snapshot if f.id == file_id), None)
        if found is None:
            continue
        if records and records[-1].file.data == found.data:
            continue
        records.append(VersionRecord(ordinal=ordinal, timestamp=timestamp, file=found))

    if records:
        records[-1] = records[-1].model_copy(update={"is_latest": True})
    records.reverse()
    return records


def version_pair(records: List[VersionRecord], index: int) -> Tuple[VersionRecord, Optional[VersionRecord]]:
    """Selected version and the one it is compared against (next older, else itself)."""
    selected = records[index]
    previous = records[index + 1] if index + 1 < len(records) else selected
    return selected, previous
