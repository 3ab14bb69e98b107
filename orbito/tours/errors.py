from __future__ import annotations


class StoreError(Exception):
    """The tour store could not be read."""


class TourNotFoundError(LookupError):
    def __init__(self, tour_id: int | str) -> None:
        super().__init__(f"Tour {tour_id!r} not found")
        self.tour_id = tour_id
