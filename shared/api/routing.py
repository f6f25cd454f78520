"""Route fragments shared by the app routers."""

# Matches canonical and hyphen-less UUIDs; anything else never reaches a view
UUID_PATTERN = r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"
