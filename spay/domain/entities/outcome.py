"""Classified outcome of a single gateway exchange."""

from dataclasses import dataclass
from typing import Union

from spay.domain.exceptions import BusinessError, TransportError


@dataclass(frozen=True)
class Success:
    """A 2xx response whose body is ready for endpoint-specific decoding."""

    status_code: int
    payload: bytes


ClassifiedOutcome = Union[Success, BusinessError, TransportError]
