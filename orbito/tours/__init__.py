"""
Tour catalog access.

Responsibilities:
- Read tours and bookings from Supabase, or from the bundled local catalog.
- Normalise rows into the Tour and Booking models used by the scorer.
- Surface backend failures as StoreError so callers can degrade gracefully.
"""
