"""Local (SQLite) infrastructure."""
