from datetime import date, datetime, timezone

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from database import create_document, create_documents, get_documents, object_id, serialize_doc, to_document
from schemas import Booking, Hotel


def test_to_document_converts_dates_and_drops_none():
    booking = Booking(user_id="u", hotel_id="h", room_id="r", check_in=date(2024, 3, 10), check_out=date(2024, 3, 15))
    doc = to_document(booking)
    assert doc["check_in"] == datetime(2024, 3, 10, tzinfo=timezone.utc)
    assert to_document(Hotel(name="A", location="B")) == {"name": "A", "location": "B", "amenities": []}


def test_create_and_get_documents(db):
    first = create_document(db, "hotel", {"name": "A", "location": "B"})
    rest = create_documents(db, "hotel", [Hotel(name="C", location="D"), Hotel(name="E", location="F")])
    docs = get_documents(db, "hotel")
    assert [str(d["_id"]) for d in docs] == [first] + rest


def test_serialize_doc():
    oid = ObjectId()
    assert serialize_doc({"_id": oid, "name": "A"}) == {"id": str(oid), "name": "A"}
    assert serialize_doc(None) is None


def test_object_id_rejects_malformed_values():
    with pytest.raises(InvalidId):
        object_id("nope")
