from lispy.types.value import (
    ErrorKind,
    Value,
    ValueKind,
    append,
    count_values,
    destroy,
    format_value,
    make_error,
    make_number,
    make_qexpr,
    make_sexpr,
    make_symbol,
    remove_at,
    take_at,
)
from lispy.types.tracker import AllocationTracker
