"""Django apps of the room booking service."""
