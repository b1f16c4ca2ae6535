"""
Integer kernels and the curve kernel-spec loader.

Everything here is pure and deterministic: no floats, no I/O except reading
the YAML spec on request.
"""
