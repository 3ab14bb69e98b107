"""
Tour recommendation engine.

Responsibilities:
- Score tours against a user's booking history (personalized ranking).
- Find tours similar to a given tour by content attributes.
- Rank trending tours from the last week of bookings.
- Orchestrate store reads, caching and analytics for the HTTP layer.
"""
