import pytest
from protean.integrations.pytest import DomainFixture

from inpatient.realtime import reset_publisher, set_publisher
from inpatient.realtime.memory import InMemoryPublisher


@pytest.fixture(scope="session")
def inpatient_testbed():
    from inpatient.domain import inpatient

    bed = DomainFixture(inpatient)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(inpatient_testbed):
    with inpatient_testbed.domain_context():
        yield


@pytest.fixture(autouse=True)
def publisher():
    """Fresh in-memory publisher per test; broadcasts are recorded for assertions."""
    installed = set_publisher(InMemoryPublisher())
    yield installed
    reset_publisher()
