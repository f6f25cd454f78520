"""Bookings app package.

Reservations of rooms for time windows: the booking aggregate and its
status lifecycle, the command and query handlers, and the HTTP API.
Overlapping windows are rejected under a lock on the room row and, on
PostgreSQL, by an exclusion constraint.
"""
