"""Bootstrap wiring: builds store adapters and services once per process."""
