import math


# Integral results are truncated into int64, saturating at its limits; 2**63
# prints as 9223372036854775807. Beyond that they keep their float form.
_INT64_MIN = -2 ** 63
_INT64_MAX = 2 ** 63 - 1


def format_result(value):
    '''
    Render a result: integral values without a trailing .0, anything else
    as Python's shortest round-tripping float repr (2.5, inf, nan).
    '''
    if math.isfinite(value) and value.is_integer():
        truncated = max(_INT64_MIN, min(int(value), _INT64_MAX))
        # Saturated value only counts if it rounds back to the same float
        if float(truncated) == value:
            return str(truncated)
    return repr(float(value))
