"""optex.core — results, errors, date types and calendars."""

from optex.core.calendar import (
    Calendar as Calendar,
)
from optex.core.calendar import (
    NullCalendar as NullCalendar,
)
from optex.core.calendar import (
    WeekendsOnly as WeekendsOnly,
)
from optex.core.calendar import (
    adjust_date as adjust_date,
)
from optex.core.calendar import (
    advance_date as advance_date,
)
from optex.core.errors import (
    FieldViolation as FieldViolation,
)
from optex.core.errors import (
    IndexOutOfRangeError as IndexOutOfRangeError,
)
from optex.core.errors import (
    InvalidDateOrderingError as InvalidDateOrderingError,
)
from optex.core.errors import (
    OptexError as OptexError,
)
from optex.core.errors import (
    SizeMismatchError as SizeMismatchError,
)
from optex.core.errors import (
    UnsupportedOperationError as UnsupportedOperationError,
)
from optex.core.errors import (
    ValidationError as ValidationError,
)
from optex.core.result import (
    Err as Err,
)
from optex.core.result import (
    Ok as Ok,
)
from optex.core.result import (
    Result as Result,
)
from optex.core.result import (
    sequence as sequence,
)
from optex.core.result import (
    unwrap as unwrap,
)
from optex.core.types import (
    UNBOUNDED_PAST as UNBOUNDED_PAST,
)
from optex.core.types import (
    BusinessDayConvention as BusinessDayConvention,
)
from optex.core.types import (
    TimeUnit as TimeUnit,
)
from optex.core.types import (
    UtcDatetime as UtcDatetime,
)
