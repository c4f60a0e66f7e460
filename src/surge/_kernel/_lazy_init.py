"""
Deferred routine resolution for kernel modules.

A kernel module defines ``_init_signatures()`` to resolve its BLAS/LAPACK
routines. Functions decorated with ``lazy_kernel`` make sure that hook
has run once for their module before the first call, so importing
``surge`` never fails just because scipy cannot provide a routine.
"""

import threading
from functools import wraps

from .lib_loader import LibraryNotFoundError

__all__ = ['lazy_kernel', 'initialized_modules']

_ready = set()
_lock = threading.Lock()


def _ensure_ready(func):
    module = func.__module__
    if module in _ready:
        return
    with _lock:
        if module in _ready:
            return
        hook = func.__globals__.get('_init_signatures')
        if hook is not None:
            try:
                hook()
            except (LibraryNotFoundError, ValueError) as e:
                raise RuntimeError(f"Kernels of {module} unavailable: {e}") from e
        _ready.add(module)


def lazy_kernel(func):
    """Run the defining module's ``_init_signatures`` before the first call.

    Example:
        >>> @lazy_kernel
        ... def gemm(order, trans_a, trans_b, m, n, k, alpha, *operands):
        ...     ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        _ensure_ready(func)
        return func(*args, **kwargs)

    return wrapper


def initialized_modules():
    """Names of kernel modules whose routines have been resolved."""
    return frozenset(_ready)
