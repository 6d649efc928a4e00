import pytest

from app.errors import UnsupportedOperatorError
from app.store.base import QueryFilter
from app.store.mongo import build_mongo_query


def test_equality_filters_stay_plain():
    query = build_mongo_query(
        [
            QueryFilter(field="class_id", operator="==", value="C1"),
            QueryFilter(field="date", operator="==", value="2024-03-01"),
        ]
    )

    assert query == {"class_id": "C1", "date": "2024-03-01"}


def test_range_filters_on_same_field_merge():
    query = build_mongo_query(
        [
            QueryFilter(field="date", operator=">=", value="2024-03-01"),
            QueryFilter(field="date", operator="<", value="2024-04-01"),
            QueryFilter(field="balance", operator=">", value=0),
        ]
    )

    assert query == {
        "date": {"$gte": "2024-03-01", "$lt": "2024-04-01"},
        "balance": {"$gt": 0},
    }


def test_in_filter_becomes_list():
    query = build_mongo_query([QueryFilter(field="status", operator="in", value=("P", "L"))])

    assert query == {"status": {"$in": ["P", "L"]}}


def test_no_filters_matches_everything():
    assert build_mongo_query([]) == {}


def test_unknown_operator_rejected():
    bad = QueryFilter.model_construct(field="date", operator="!=", value="x")

    with pytest.raises(UnsupportedOperatorError):
        build_mongo_query([bad])
