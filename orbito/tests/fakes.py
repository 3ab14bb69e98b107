from __future__ import annotations

from datetime import datetime, timedelta, timezone

from orbito.recommendations.models import Booking, Tour
from orbito.tours.data_store import TourStore
from orbito.tours.errors import StoreError


class FakeTourStore(TourStore):
    name = "fake"

    def __init__(
        self,
        tours: list[Tour],
        bookings: list[Booking] | None = None,
        user_tours: dict[str, list[Tour]] | None = None,
        fail_user_lookup: bool = False,
        fail_catalog: bool = False,
    ) -> None:
        self.tours = tours
        self.bookings = bookings or []
        self.user_tours = user_tours or {}
        self.fail_user_lookup = fail_user_lookup
        self.fail_catalog = fail_catalog
        self.catalog_reads = 0

    def list_tours(self, category=None, destination=None):
        if self.fail_catalog:
            raise StoreError("catalog down")
        self.catalog_reads += 1
        return [
            t for t in self.tours
            if (category is None or t.category == category)
            and (destination is None or destination.lower() in (t.destination or "").lower())
        ]

    def get_tour(self, tour_id):
        if self.fail_catalog:
            raise StoreError("catalog down")
        return next((t for t in self.tours if str(t.id) == str(tour_id)), None)

    def get_recent_bookings(self, since):
        return [b for b in self.bookings if b.created_at >= since]

    def get_user_booked_tours(self, user_id):
        if self.fail_user_lookup:
            raise StoreError("bookings table unavailable")
        return self.user_tours.get(user_id, [])


def make_tour(id, **kwargs) -> Tour:
    defaults = {
        "rating": 4.0,
        "review_count": 10,
        "price_adult": 50.0,
        "category": "Food",
        "destination": "Paris",
        "duration": "3 hours",
    }
    defaults.update(kwargs)
    return Tour(id=id, **defaults)


SAMPLE_TOURS = [
    make_tour("paris-food", title="Montmartre Food Walk", rating=4.8, review_count=400),
    make_tour("paris-louvre", category="Museums", rating=4.6, review_count=1800, price_adult=79),
    make_tour("rome-colosseum", category="History", destination="Rome", rating=4.9,
              review_count=2200, price_adult=89),
    make_tour("rome-food", destination="Rome", rating=4.7, review_count=500, price_adult=72,
              duration="4 hours"),
    make_tour("bcn-hike", category="Adventure", destination="Barcelona", rating=4.5,
              review_count=200, price_adult=99, duration="Full day (7 hours)"),
    make_tour("london-kayak", category="Adventure", destination="London", rating=4.3,
              review_count=90, price_adult=48, duration="2 hours"),
]


def recent_bookings(now: datetime | None = None) -> list[Booking]:
    now = now or datetime.now(timezone.utc)
    return [
        Booking(tour_id="london-kayak", created_at=now - timedelta(days=1)),
        Booking(tour_id="london-kayak", created_at=now - timedelta(days=2)),
        Booking(tour_id="london-kayak", created_at=now - timedelta(days=3)),
        Booking(tour_id="paris-food", created_at=now - timedelta(days=6)),
        Booking(tour_id="rome-colosseum", created_at=now - timedelta(days=10)),
    ]


