"""DTOs for hospital profile use cases."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HospitalProfileChanges:
    """Partial update of hospital columns plus the full set of offered service ids.

    service_ids replaces the hospital's services; None leaves them unchanged.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    service_ids: list[str] | None = None
