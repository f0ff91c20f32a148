"""ORM models."""

from dball.models.spot import Spot
from dball.models.ticket import Ticket

__all__ = ["Spot", "Ticket"]
