"""Classification of metadata-probe outcomes."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Optional

from bucketprobe.storage.errors import status_code_of


class ProbeOutcome(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    INDETERMINATE = "indeterminate"


def classify_probe(error: Optional[BaseException]) -> ProbeOutcome:
    """Map the result of a HEAD/stat request onto a probe outcome.

    Only the canonical not-found status means the object is absent. A
    forbidden response, a transport failure or an error without any status
    code is indeterminate: it says nothing about whether the object exists.
    """
    if error is None:
        return ProbeOutcome.PRESENT
    if status_code_of(error) == HTTPStatus.NOT_FOUND:
        return ProbeOutcome.ABSENT
    return ProbeOutcome.INDETERMINATE
