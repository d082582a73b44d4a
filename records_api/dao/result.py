"""
Controller result types and the data-access contract used by services.

WHAT: ``Success`` and ``Failure`` form the tagged result every controller
call returns; ``RecordController`` names the four operations a service may
call.

WHY: Services never catch database exceptions themselves. A controller
either hands back a value or a failure message, and the service turns a
failure into its error envelope.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable


@dataclass(frozen=True)
class Success:
    """Successful controller call carrying its value."""

    value: Any

    @property
    def failed(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Failed controller call carrying a message safe to show clients."""

    error: str

    @property
    def failed(self) -> bool:
        return True


ControllerResult = Union[Success, Failure]


def mutation_ack(matched: int, modified: int) -> Dict[str, int]:
    """
    Build the acknowledgement returned by update and delete operations.

    ``n`` counts matched records and ``nModified`` the ones actually changed.
    """
    return {"ok": 1, "nModified": modified, "n": matched}


@runtime_checkable
class RecordController(Protocol):
    """
    Data-access contract for record services.

    Implementations must not raise for storage errors; they return
    ``Failure`` instead.
    """

    async def create_record(self, data: Mapping[str, Any]) -> ControllerResult:
        ...

    async def read_records(
        self,
        conditions: Mapping[str, Any],
        fields_to_return: Optional[List[str]] = None,
        sort: Optional[List[Tuple[str, bool]]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        count: bool = False,
    ) -> ControllerResult:
        ...

    async def update_records(
        self, conditions: Mapping[str, Any], data: Mapping[str, Any]
    ) -> ControllerResult:
        ...

    async def delete_records(self, conditions: Mapping[str, Any]) -> ControllerResult:
        ...
