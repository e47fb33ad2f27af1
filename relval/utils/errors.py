"""
Error classes raised at the analytics API boundary.
"""


class InvalidArgumentError(ValueError):
    """
    Raised when a caller passes an out-of-range or malformed argument.

    **Conceptual**: The engines are total functions over well-typed inputs; the
    only failures they surface are caller mistakes caught at the boundary
    (negative sample count, unknown strategy name, negative custom thresholds).
    Everything else (zero denominators, empty inputs) degrades to documented
    fallback values instead of raising.

    Subclasses ValueError so existing ``except ValueError`` handlers still work.
    """
    pass
