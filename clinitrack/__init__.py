"""
Clinitrack - Multi-domain clinical assessment tracking

Collects assessment data across five independent domains
(Physiotherapy, Biomechanics, Physiology, Nutrition, Psychology),
derives per-domain and global completion status on every write, and
supports soft-delete with audit-trailed restore.

Ground rules:
- Derived status is a cache, always recomputed from raw domain data
- The archive store, not the audit log, decides what is restorable
- A failed audit write never blocks the action it describes
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
