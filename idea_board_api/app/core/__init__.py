"""Settings, logging, database access and domain exceptions."""
