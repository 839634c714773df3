"""Pydantic request/response models for the Clinitrack API."""
