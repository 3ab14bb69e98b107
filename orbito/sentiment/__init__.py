"""
Review sentiment analysis.

Responsibilities:
- Label single reviews POSITIVE / NEGATIVE / NEUTRAL from a polarity score.
- Summarise batches of reviews and derive an overall verdict for a tour.
- Keep the polarity scorer injectable so callers and tests can swap it.
"""
