from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _supabase_key() -> str:
    # Service role bypasses row level security; anon key is the fallback.
    return os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY", "")


@dataclass(frozen=True)
class StoreConfig:
    supabase_url: str = os.getenv("SUPABASE_URL", "")
    supabase_key: str = field(default_factory=_supabase_key)
    data_dir: Path = Path(
        os.getenv("ORBITO_DATA_DIR", str(Path(__file__).resolve().parent.parent / "data"))
    )
    tours_filename: str = "tours.csv"
    bookings_filename: str = "bookings.csv"

    @property
    def use_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def tours_path(self) -> Path:
        return self.data_dir / self.tours_filename

    @property
    def bookings_path(self) -> Path:
        return self.data_dir / self.bookings_filename


DEFAULT_STORE_CONFIG = StoreConfig()
