"""Domain models for Clinitrack."""
