"""
Data Access Object (DAO) layer.

WHY: DAOs keep SQLAlchemy out of the services. Services talk to the
RecordController contract and receive Success or Failure results.
"""

from records_api.dao.base import BaseDAO
from records_api.dao.record import RecordDAO
from records_api.dao.result import (
    ControllerResult,
    Failure,
    RecordController,
    Success,
    mutation_ack,
)

__all__ = [
    "BaseDAO",
    "RecordDAO",
    "ControllerResult",
    "Failure",
    "RecordController",
    "Success",
    "mutation_ack",
]
