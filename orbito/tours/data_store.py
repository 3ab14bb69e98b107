from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

import pandas as pd
from supabase import Client, create_client

from ..recommendations.models import Booking, Tour
from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .errors import StoreError

logger = logging.getLogger(__name__)


class TourStore(ABC):
    """Read-only access to the tour catalog and booking log."""

    name: str = "abstract"

    @abstractmethod
    def list_tours(
        self, category: str | None = None, destination: str | None = None,
    ) -> list[Tour]: ...

    @abstractmethod
    def get_tour(self, tour_id: int | str) -> Tour | None: ...

    @abstractmethod
    def get_recent_bookings(self, since: datetime) -> list[Booking]: ...

    @abstractmethod
    def get_user_booked_tours(self, user_id: str) -> list[Tour]:
        """Tours the user has booked, most recent booking first."""


# ── Local CSV catalog ────────────────────────────────────────────────────


def _records(df: pd.DataFrame) -> list[dict[str, Any]]:
    # Round-trip through JSON so numpy scalars and NaN become plain Python values
    return json.loads(df.to_json(orient="records"))


class LocalTourStore(TourStore):
    name = "local"

    def __init__(self, config: StoreConfig = DEFAULT_STORE_CONFIG) -> None:
        self._config = config
        self._tours: pd.DataFrame | None = None
        self._bookings: pd.DataFrame | None = None

    def _load_tours(self) -> pd.DataFrame:
        if self._tours is None:
            try:
                df = pd.read_csv(self._config.tours_path, dtype={"id": str})
            except (OSError, pd.errors.ParserError) as exc:
                raise StoreError(f"Cannot read {self._config.tours_path}") from exc
            df["destination_lower"] = df["destination"].fillna("").str.lower()
            self._tours = df
        return self._tours

    def _load_bookings(self) -> pd.DataFrame:
        if self._bookings is None:
            path = self._config.bookings_path
            if not path.exists():
                df = pd.DataFrame(columns=["tour_id", "user_id", "created_at"])
            else:
                try:
                    df = pd.read_csv(path, dtype={"tour_id": str, "user_id": str, "created_at": str})
                except (OSError, pd.errors.ParserError) as exc:
                    raise StoreError(f"Cannot read {path}") from exc
            try:
                df["_created"] = pd.to_datetime(df["created_at"], utc=True)
            except (ValueError, KeyError) as exc:
                raise StoreError(f"Bad booking timestamps in {path}") from exc
            self._bookings = df
        return self._bookings

    def _to_tours(self, df: pd.DataFrame) -> list[Tour]:
        return [Tour(**row) for row in _records(df.drop(columns=["destination_lower"]))]

    def list_tours(
        self, category: str | None = None, destination: str | None = None,
    ) -> list[Tour]:
        df = self._load_tours()
        mask = pd.Series(True, index=df.index)
        if "is_available" in df.columns:
            mask = mask & df["is_available"].fillna(False).astype(bool)
        if category:
            mask = mask & (df["category"] == category)
        if destination:
            mask = mask & df["destination_lower"].str.contains(
                destination.strip().lower(), regex=False, na=False,
            )
        return self._to_tours(df.loc[mask])

    def get_tour(self, tour_id: int | str) -> Tour | None:
        df = self._load_tours()
        match = df.loc[df["id"] == str(tour_id)]
        if match.empty:
            return None
        return self._to_tours(match.head(1))[0]

    def get_recent_bookings(self, since: datetime) -> list[Booking]:
        df = self._load_bookings()
        recent = df.loc[df["_created"] >= pd.Timestamp(since)]
        return [Booking(**row) for row in _records(recent.drop(columns=["_created"]))]

    def get_user_booked_tours(self, user_id: str) -> list[Tour]:
        bookings = self._load_bookings()
        mine = bookings.loc[bookings["user_id"] == user_id].sort_values(
            "_created", ascending=False, kind="stable",
        )
        tours = self._load_tours().set_index("id", drop=False)
        booked = [tid for tid in mine["tour_id"] if tid in tours.index]
        if not booked:
            return []
        return self._to_tours(tours.loc[booked].reset_index(drop=True))


# ── Supabase ─────────────────────────────────────────────────────────────


class SupabaseTourStore(TourStore):
    name = "supabase"

    def __init__(self, config: StoreConfig = DEFAULT_STORE_CONFIG, client: Client | None = None) -> None:
        self._config = config
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            try:
                self._client = create_client(self._config.supabase_url, self._config.supabase_key)
            except Exception as exc:
                raise StoreError("Cannot create Supabase client") from exc
        return self._client

    def _execute(self, query: Any, what: str) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as exc:
            raise StoreError(f"Supabase query failed: {what}") from exc
        return response.data or []

    def list_tours(
        self, category: str | None = None, destination: str | None = None,
    ) -> list[Tour]:
        query = self.client.table("tours").select("*").eq("is_available", True)
        if category:
            query = query.eq("category", category)
        if destination:
            query = query.ilike("destination", f"%{destination}%")
        query = query.order("created_at", desc=True)
        return [Tour(**row) for row in self._execute(query, "list tours")]

    def get_tour(self, tour_id: int | str) -> Tour | None:
        query = self.client.table("tours").select("*").eq("id", tour_id).limit(1)
        rows = self._execute(query, f"get tour {tour_id}")
        return Tour(**rows[0]) if rows else None

    def get_recent_bookings(self, since: datetime) -> list[Booking]:
        query = (
            self.client.table("bookings")
            .select("tour_id, user_id, created_at")
            .gte("created_at", since.isoformat())
        )
        return [Booking(**row) for row in self._execute(query, "recent bookings")]

    def get_user_booked_tours(self, user_id: str) -> list[Tour]:
        query = (
            self.client.table("bookings")
            .select("created_at, tours(*)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        rows = self._execute(query, f"bookings for user {user_id}")
        return [Tour(**row["tours"]) for row in rows if row.get("tours")]


_store: TourStore | None = None


def get_tour_store() -> TourStore:
    """Return the process-wide store, creating it on first call."""
    global _store
    if _store is None:
        if DEFAULT_STORE_CONFIG.use_supabase:
            _store = SupabaseTourStore(DEFAULT_STORE_CONFIG)
        else:
            logger.warning("Supabase credentials not set; serving the bundled local catalog")
            _store = LocalTourStore(DEFAULT_STORE_CONFIG)
    return _store
