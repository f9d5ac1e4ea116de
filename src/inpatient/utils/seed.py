"""Default ward layout for a fresh installation."""

import structlog
from protean.utils.globals import current_domain

from inpatient.ward.management import CreateWard
from inpatient.ward.ward import Ward, derive_ward_id

logger = structlog.get_logger(__name__)

DEFAULT_WARDS = [
    {"name": "General Ward", "prefix": "GEN", "ward_type": "general", "rate_per_day": 1500.0, "num_beds": 10, "floor": "1"},
    {"name": "ICU", "prefix": "ICU", "ward_type": "icu", "rate_per_day": 8000.0, "num_beds": 6, "floor": "2"},
    {"name": "CCU", "prefix": "CCU", "ward_type": "cardiac", "rate_per_day": 7500.0, "num_beds": 6, "floor": "2"},
    {"name": "Maternity", "prefix": "MAT", "ward_type": "maternity", "rate_per_day": 3000.0, "num_beds": 8, "floor": "3"},
    {"name": "Pediatric", "prefix": "PED", "ward_type": "pediatric", "rate_per_day": 2500.0, "num_beds": 8, "floor": "3"},
    {"name": "Surgical", "prefix": "SURG", "ward_type": "surgical", "rate_per_day": 4000.0, "num_beds": 8, "floor": "4"},
    {"name": "Orthopedic", "prefix": "ORTH", "ward_type": "orthopedic", "rate_per_day": 3500.0, "num_beds": 6, "floor": "4"},
]


def seed_wards(wards=None) -> list[str]:
    """Create any default ward that does not exist yet; returns the ids created.

    Must run inside a domain context.
    """
    repo = current_domain.repository_for(Ward)
    created = []
    for layout in wards or DEFAULT_WARDS:
        if repo.has_ward(derive_ward_id(layout["name"])):
            logger.info("Ward already present, skipping", name=layout["name"])
            continue
        created.append(current_domain.process(CreateWard(**layout), asynchronous=False))
    return created
