"""optex.exercise -- exercise styles and rebate schedules."""

from optex.exercise.rebate import (
    PerDateRebate as PerDateRebate,
)
from optex.exercise.rebate import (
    RebatedExercise as RebatedExercise,
)
from optex.exercise.rebate import (
    RebateSpec as RebateSpec,
)
from optex.exercise.rebate import (
    ScalarRebate as ScalarRebate,
)
from optex.exercise.styles import (
    AmericanExercise as AmericanExercise,
)
from optex.exercise.styles import (
    BermudanExercise as BermudanExercise,
)
from optex.exercise.styles import (
    EarlyExercise as EarlyExercise,
)
from optex.exercise.styles import (
    EuropeanExercise as EuropeanExercise,
)
from optex.exercise.styles import (
    Exercise as Exercise,
)
from optex.exercise.styles import (
    ExerciseType as ExerciseType,
)
from optex.exercise.styles import (
    is_early_exercise as is_early_exercise,
)
