from bizhub.domain.base import utcnow
from tests.fixtures.factories import make_tenant


def test_timestamps_are_naive_utc():
    # Columns are timezone-less DateTime
    assert utcnow().tzinfo is None
    assert make_tenant().created_at.tzinfo is None
