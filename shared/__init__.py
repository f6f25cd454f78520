"""
Shared Kernel

Base domain classes, the unit of work, the message bus and API glue
used by both the rooms and the bookings apps.
"""
