from datetime import date

from hardwaste.common.models import Address, ResultRecord
from hardwaste.pipeline.aggregate import aggregate_results


def _record(address_id: str, pickup: date) -> ResultRecord:
    return ResultRecord(
        address=Address(id=address_id, line=f"{address_id} Example St", lat=-37.8, lon=145.3),
        pickup_date=pickup,
    )


RECORDS = [
    _record("a", date(2025, 8, 4)),
    _record("b", date(2025, 7, 15)),
    _record("c", date(2025, 8, 4)),
    _record("d", date(2025, 6, 30)),
    _record("e", date(2025, 7, 15)),
]


def test_aggregate_keeps_first_record_per_date():
    results = aggregate_results(RECORDS)
    assert [record.address.id for record in results] == ["d", "b", "a"]


def test_aggregate_dates_unique_and_ascending():
    dates = [record.pickup_date for record in aggregate_results(RECORDS)]
    assert len(dates) == len(set(dates))
    assert dates == sorted(dates)


def test_aggregate_is_idempotent():
    once = aggregate_results(RECORDS)
    assert aggregate_results(once) == once


def test_aggregate_empty():
    assert aggregate_results([]) == []
