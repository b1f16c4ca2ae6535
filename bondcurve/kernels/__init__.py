"""
Kernel layer.

This package groups the deterministic kernels used by the pricing engine.
- `bondcurve/kernels/dex/` contains kernel specs (.yaml).
- `bondcurve/kernels/python/` contains production Python kernels (human-readable)
  and the loader that checks the curve table against its kernel spec.
"""
