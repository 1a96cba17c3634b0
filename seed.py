"""
Seed the database with sample users, hotels, rooms, bookings and reviews.

Run once with `python seed.py` (or the `hotels-seed` script). Existing documents
in all five collections are removed first.
"""

import os
import logging
from datetime import date
from typing import Dict

from pymongo.database import Database

from database import close, connect, create_documents, ensure_indexes
from schemas import Booking, Hotel, Review, Room, User

logger = logging.getLogger(__name__)

COLLECTIONS = ["user", "hotel", "room", "booking", "review"]


def seed(db: Database) -> Dict[str, int]:
    for name in COLLECTIONS:
        db[name].delete_many({})
    ensure_indexes(db)

    users = [
        User(name="Alinur", role="guest", email="alinurlpv@gmail.com"),
        User(name="Erkezhan", role="admin", email="erkezhan@gmail.com"),
        User(name="Hotel Luxe", role="hotel_owner", email="luxe@example.com"),
    ]
    user_ids = create_documents(db, "user", users)

    hotels = [
        Hotel(
            name="Grand Hotel",
            location="Almaty",
            rating=4.5,
            amenities=["Wi-Fi", "Pool", "Fitness"],
            metadata={
                "reviews_count": 120,
                "special_offers": [
                    {"type": "discount", "value": 10},
                    {"type": "bonus", "description": "Free breakfast"},
                ],
            },
        ),
        Hotel(
            name="City Inn",
            location="Astana",
            rating=4.2,
            amenities=["Wi-Fi", "Parking"],
            metadata={
                "reviews_count": 80,
                "special_offers": [{"type": "discount", "value": 15}],
            },
        ),
    ]
    hotel_ids = create_documents(db, "hotel", hotels)

    rooms = [
        Room(hotel_id=hotel_ids[0], type="Deluxe", price=15000, status="available"),
        Room(hotel_id=hotel_ids[0], type="Standard", price=10000, status="booked"),
        Room(hotel_id=hotel_ids[1], type="Suite", price=20000, status="available"),
    ]
    room_ids = create_documents(db, "room", rooms)

    bookings = [
        Booking(
            user_id=user_ids[0],
            hotel_id=hotel_ids[0],
            room_id=room_ids[0],
            check_in=date(2024, 3, 10),
            check_out=date(2024, 3, 15),
            status="confirmed",
        ),
    ]
    booking_ids = create_documents(db, "booking", bookings)

    reviews = [
        Review(user_id=user_ids[0], hotel_id=hotel_ids[0], rating=5, comment="Great hotel, clean and cosy!"),
        Review(user_id=user_ids[0], hotel_id=hotel_ids[1], rating=4, comment="Decent place, but the parking is small."),
    ]
    review_ids = create_documents(db, "review", reviews)

    return {
        "user": len(user_ids),
        "hotel": len(hotel_ids),
        "room": len(room_ids),
        "booking": len(booking_ids),
        "review": len(review_ids),
    }


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    db = connect()
    try:
        counts = seed(db)
        logger.info("Database seeded: %s", counts)
    except Exception:
        logger.exception("Seeding failed")
        raise
    finally:
        close(db)


if __name__ == "__main__":
    main()
