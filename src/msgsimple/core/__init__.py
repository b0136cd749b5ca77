"""Concurrency primitives shared by sources and providers.

Kept outside the runtime package so that sources can use them without
importing MessageBundle.

Python 3.13+.
"""

from .rwlock import RWLock

__all__ = ["RWLock"]
