"""Domain layer for Clinitrack: models, errors and pure services."""
