"""Strided span helpers shared by the vector and matrix kernels.

All helpers build numpy views over the caller's buffer. None of them
copies data.
"""

import numpy as np
from numpy.lib.stride_tricks import as_strided


__all__ = ['span', 'span_fits', 'grid', 'grid_fits']


def span_fits(buffer: np.ndarray, offset: int, inc: int, n: int) -> bool:
    """Whether ``n`` elements from ``offset`` stepping ``inc`` lie in ``buffer``."""
    if n == 0:
        return True
    last = offset + inc * (n - 1)
    size = buffer.shape[0]
    return 0 <= offset < size and 0 <= last < size


def span(buffer: np.ndarray, offset: int, inc: int, n: int) -> np.ndarray:
    """
    Strided 1-D view of ``n`` elements.

    Args:
        buffer: Contiguous 1-D array.
        offset: Physical index of the first element.
        inc: Element increment (non-zero, may be negative).
        n: Element count.

    Returns:
        numpy view aliasing ``buffer``.
    """
    if n == 0:
        return buffer[0:0]
    last = offset + inc * (n - 1)
    if inc > 0:
        return buffer[offset:last + 1:inc]
    stop = last - 1
    return buffer[offset:(stop if stop >= 0 else None):inc]


def grid_fits(
    buffer: np.ndarray,
    offset: int,
    major: int,
    minor: int,
    ld: int,
) -> bool:
    """Whether a ``major`` x ``minor`` grid with leading dimension ``ld`` fits."""
    if major == 0 or minor == 0:
        return offset >= 0
    if ld < minor:
        return False
    last = offset + (major - 1) * ld + (minor - 1)
    return 0 <= offset and last < buffer.shape[0]


def grid(
    buffer: np.ndarray,
    offset: int,
    rows: int,
    cols: int,
    ld: int,
    column_major: bool,
    writeable: bool = False,
) -> np.ndarray:
    """
    Strided 2-D view of a ``rows`` x ``cols`` matrix stored in ``buffer``.

    Row-major storage keeps each row contiguous with rows ``ld`` apart;
    column-major storage keeps each column contiguous with columns ``ld``
    apart. Callers validate the extent with ``grid_fits`` first.
    """
    item = buffer.itemsize
    strides = (item, ld * item) if column_major else (ld * item, item)
    return as_strided(buffer[offset:], shape=(rows, cols), strides=strides, writeable=writeable)
