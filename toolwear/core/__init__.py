"""Core infrastructure: settings, logging, database, middleware and locks."""
