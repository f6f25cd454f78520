"""Rooms app package: the bookable rooms catalogue and its HTTP API."""
