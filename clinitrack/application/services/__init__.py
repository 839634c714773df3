"""Application services for Clinitrack."""
