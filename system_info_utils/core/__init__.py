"""Reader configuration and logging setup."""
