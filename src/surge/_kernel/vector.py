"""
Vector Kernels

Low-level strided vector routines. Every operand is passed C-style as
``(buffer, offset, inc)`` plus a shared element count ``n``; results are
written into a caller-provided destination with the same convention.

Routing:
    - dot, axpy, scal, copy use BLAS level-1 when enabled and every
      increment is positive (and, for axpy/copy, source and destination
      do not share memory).
    - Everything else runs numpy ufuncs over strided views of the same
      buffers.
    - fmod, remainder and sqrt only support unit increments; callers
      validate that before dispatch.
"""

import logging

import numpy as np

from .._config import config
from .lib_loader import get_lib, lib_for
from ._lazy_init import lazy_kernel
from .utils import span

__all__ = [
    'vcopy', 'vfill',
    'vadd', 'vsub', 'vmul', 'vdiv',
    'vsadd', 'vsmul', 'vsdiv', 'svdiv', 'vsmsa',
    'axpy', 'scal', 'dot',
    'sve', 'maxv', 'minv', 'meanv', 'meamgv', 'measqv', 'rmsqv',
    'vfmod', 'vsfmod', 'vremainder', 'vsqrt',
]

logger = logging.getLogger("surge.kernel")


# =============================================================================
# Initialization
# =============================================================================

def _init_signatures():
    """Resolve the level-1 routines of both precisions."""
    for precision in ('f32', 'f64'):
        get_lib(precision)
    logger.debug("Vector kernels ready (use_blas=%s)", config.kernel.use_blas)


# Resolve routines eagerly; kernels retry lazily on first call
try:
    _init_signatures()
except Exception as e:
    import warnings
    warnings.warn(f"Surge kernels not ready: {e}")


def _blas_eligible(*incs: int) -> bool:
    return config.kernel.use_blas and all(inc > 0 for inc in incs)


# =============================================================================
# Copy / Fill
# =============================================================================

@lazy_kernel
def vcopy(a, a_off, a_inc, out, out_off, out_inc, n):
    """out[i] = a[i]"""
    if n == 0:
        return
    if _blas_eligible(a_inc, out_inc) and not np.may_share_memory(a, out):
        result = lib_for(out).copy(
            a, out, n=n, offx=a_off, incx=a_inc, offy=out_off, incy=out_inc
        )
        if result is not out:
            out[...] = result
        return
    span(out, out_off, out_inc, n)[...] = span(a, a_off, a_inc, n)


def vfill(value, out, out_off, out_inc, n):
    """out[i] = value"""
    span(out, out_off, out_inc, n)[...] = value


# =============================================================================
# Vector-Vector Elementwise
# =============================================================================

def vadd(a, a_off, a_inc, b, b_off, b_inc, out, out_off, out_inc, n):
    """out[i] = a[i] + b[i]"""
    np.add(span(a, a_off, a_inc, n), span(b, b_off, b_inc, n),
           out=span(out, out_off, out_inc, n))


def vsub(a, a_off, a_inc, b, b_off, b_inc, out, out_off, out_inc, n):
    """out[i] = a[i] - b[i]"""
    np.subtract(span(a, a_off, a_inc, n), span(b, b_off, b_inc, n),
                out=span(out, out_off, out_inc, n))


def vmul(a, a_off, a_inc, b, b_off, b_inc, out, out_off, out_inc, n):
    """out[i] = a[i] * b[i]"""
    np.multiply(span(a, a_off, a_inc, n), span(b, b_off, b_inc, n),
                out=span(out, out_off, out_inc, n))


def vdiv(a, a_off, a_inc, b, b_off, b_inc, out, out_off, out_inc, n):
    """out[i] = a[i] / b[i]"""
    with np.errstate(divide='ignore', invalid='ignore'):
        np.divide(span(a, a_off, a_inc, n), span(b, b_off, b_inc, n),
                  out=span(out, out_off, out_inc, n))


# =============================================================================
# Vector-Scalar Elementwise
# =============================================================================

def vsadd(a, a_off, a_inc, scalar, out, out_off, out_inc, n):
    """out[i] = a[i] + scalar"""
    np.add(span(a, a_off, a_inc, n), out.dtype.type(scalar),
           out=span(out, out_off, out_inc, n))


def vsmul(a, a_off, a_inc, scalar, out, out_off, out_inc, n):
    """out[i] = a[i] * scalar"""
    np.multiply(span(a, a_off, a_inc, n), out.dtype.type(scalar),
                out=span(out, out_off, out_inc, n))


def vsdiv(a, a_off, a_inc, scalar, out, out_off, out_inc, n):
    """out[i] = a[i] / scalar"""
    with np.errstate(divide='ignore', invalid='ignore'):
        np.divide(span(a, a_off, a_inc, n), out.dtype.type(scalar),
                  out=span(out, out_off, out_inc, n))


def svdiv(scalar, a, a_off, a_inc, out, out_off, out_inc, n):
    """out[i] = scalar / a[i]"""
    with np.errstate(divide='ignore', invalid='ignore'):
        np.divide(out.dtype.type(scalar), span(a, a_off, a_inc, n),
                  out=span(out, out_off, out_inc, n))


def vsmsa(a, a_off, a_inc, multiplier, addend, out, out_off, out_inc, n):
    """out[i] = a[i] * multiplier + addend"""
    dst = span(out, out_off, out_inc, n)
    np.multiply(span(a, a_off, a_inc, n), out.dtype.type(multiplier), out=dst)
    np.add(dst, out.dtype.type(addend), out=dst)


# =============================================================================
# BLAS Level-1
# =============================================================================

@lazy_kernel
def axpy(alpha, x, x_off, x_inc, y, y_off, y_inc, n):
    """y[i] += alpha * x[i]"""
    if n == 0:
        return
    if _blas_eligible(x_inc, y_inc) and not np.may_share_memory(x, y):
        result = lib_for(y).axpy(
            x, y, n=n, a=alpha, offx=x_off, incx=x_inc, offy=y_off, incy=y_inc
        )
        if result is not y:
            y[...] = result
        return
    dst = span(y, y_off, y_inc, n)
    src = span(x, x_off, x_inc, n)
    if alpha == 1:
        np.add(dst, src, out=dst)
    elif alpha == -1:
        np.subtract(dst, src, out=dst)
    else:
        dst += y.dtype.type(alpha) * src


@lazy_kernel
def scal(alpha, x, x_off, x_inc, n):
    """x[i] *= alpha"""
    if n == 0:
        return
    if _blas_eligible(x_inc):
        result = lib_for(x).scal(alpha, x, n=n, offx=x_off, incx=x_inc)
        if result is not x:
            x[...] = result
        return
    dst = span(x, x_off, x_inc, n)
    np.multiply(dst, x.dtype.type(alpha), out=dst)


@lazy_kernel
def dot(a, a_off, a_inc, b, b_off, b_inc, n):
    """sum(a[i] * b[i])"""
    if n == 0:
        return 0.0
    if _blas_eligible(a_inc, b_inc):
        return float(lib_for(a).dot(a, b, n=n, offx=a_off, incx=a_inc, offy=b_off, incy=b_inc))
    return float(np.dot(span(a, a_off, a_inc, n), span(b, b_off, b_inc, n)))


# =============================================================================
# Reductions
# =============================================================================

def sve(a, a_off, a_inc, n):
    """Sum of elements."""
    return float(np.add.reduce(span(a, a_off, a_inc, n)))


def maxv(a, a_off, a_inc, n):
    """Maximum element; -inf when n == 0."""
    if n == 0:
        return float('-inf')
    return float(np.maximum.reduce(span(a, a_off, a_inc, n)))


def minv(a, a_off, a_inc, n):
    """Minimum element; +inf when n == 0."""
    if n == 0:
        return float('inf')
    return float(np.minimum.reduce(span(a, a_off, a_inc, n)))


def meanv(a, a_off, a_inc, n):
    """Mean of elements; nan when n == 0."""
    if n == 0:
        return float('nan')
    return float(np.add.reduce(span(a, a_off, a_inc, n))) / n


def meamgv(a, a_off, a_inc, n):
    """Mean of element magnitudes."""
    if n == 0:
        return float('nan')
    return float(np.add.reduce(np.abs(span(a, a_off, a_inc, n)))) / n


def measqv(a, a_off, a_inc, n):
    """Mean of element squares."""
    if n == 0:
        return float('nan')
    x = span(a, a_off, a_inc, n)
    return float(np.dot(x, x)) / n


def rmsqv(a, a_off, a_inc, n):
    """Root of the mean of element squares."""
    return float(np.sqrt(measqv(a, a_off, a_inc, n)))


# =============================================================================
# Unit-Stride Functions
# =============================================================================

def vfmod(a, a_off, b, b_off, out, out_off, n):
    """out[i] = fmod(a[i], b[i]), result takes the sign of a[i]."""
    with np.errstate(divide='ignore', invalid='ignore'):
        np.fmod(a[a_off:a_off + n], b[b_off:b_off + n], out=out[out_off:out_off + n])


def vsfmod(a, a_off, scalar, out, out_off, n):
    """out[i] = fmod(a[i], scalar)"""
    with np.errstate(divide='ignore', invalid='ignore'):
        np.fmod(a[a_off:a_off + n], out.dtype.type(scalar), out=out[out_off:out_off + n])


def vremainder(a, a_off, b, b_off, out, out_off, n):
    """out[i] = a[i] - rint(a[i] / b[i]) * b[i] (IEEE remainder)."""
    x = a[a_off:a_off + n]
    y = b[b_off:b_off + n]
    dst = out[out_off:out_off + n]
    with np.errstate(divide='ignore', invalid='ignore'):
        quotient = np.rint(np.divide(x, y))
        np.subtract(x, quotient * y, out=dst)


def vsqrt(a, a_off, out, out_off, n):
    """out[i] = sqrt(a[i])"""
    with np.errstate(invalid='ignore'):
        np.sqrt(a[a_off:a_off + n], out=out[out_off:out_off + n])
