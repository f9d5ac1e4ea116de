"""Inpatient bounded context: Ward and Bed Inventory.

Handles ward lifecycle, bed provisioning and renumbering, and patient
occupancy (assign, discharge, transfer). Mutations raise domain events that
are broadcast to connected listeners after commit.
"""

import structlog
from protean.domain import Domain

inpatient = Domain(name="inpatient")

logger = structlog.get_logger(__name__)
