"""Match a new workout against the user's saved routines."""

import logging
from collections.abc import Sequence

from logrecall.schemas.entries import ExerciseSet, SavedRoutine, as_aware
from logrecall.schemas.suggestions import ExerciseDiff, MatchingRoutine
from logrecall.services.repeated_entry import EXERCISE_KEY_SIMILARITY, key_set_similarity

logger = logging.getLogger(__name__)


def compute_exercise_diffs(
    new_exercises: Sequence[ExerciseSet],
    saved_exercises: Sequence[ExerciseSet],
) -> list[ExerciseDiff]:
    """Compute signed sets/reps/weight changes for exercises present in both.

    Unchanged fields stay None, so an exercise repeated exactly yields an entry
    with no deltas; the display layer decides whether to show it.
    """
    saved_by_key: dict[str, ExerciseSet] = {}
    for saved in saved_exercises:
        saved_by_key.setdefault(saved.exercise_key, saved)

    diffs = []
    for index, exercise in enumerate(new_exercises):
        saved = saved_by_key.get(exercise.exercise_key)
        if saved is None:
            continue

        diffs.append(
            ExerciseDiff(
                index=index,
                exercise_key=exercise.exercise_key,
                sets=exercise.sets - saved.sets if exercise.sets != saved.sets else None,
                reps=exercise.reps - saved.reps if exercise.reps != saved.reps else None,
                weight_lbs=(
                    exercise.weight_lbs - saved.weight_lbs
                    if exercise.weight_lbs != saved.weight_lbs
                    else None
                ),
            )
        )

    return diffs


def find_matching_saved_routine(
    new_exercises: Sequence[ExerciseSet],
    saved_routines: Sequence[SavedRoutine],
) -> MatchingRoutine | None:
    """Find the saved routine closest to a newly logged workout.

    Requires exercise-key Jaccard >= 0.7. The highest similarity wins; ties go
    to the most recently used routine, and a routine never used counts as
    older than any that was.
    """
    if not new_exercises or not saved_routines:
        return None

    new_keys = frozenset(exercise.exercise_key for exercise in new_exercises)

    candidates = [
        (key_set_similarity(new_keys, routine.exercise_keys), routine) for routine in saved_routines
    ]
    candidates = [(sim, routine) for sim, routine in candidates if sim >= EXERCISE_KEY_SIMILARITY]
    if not candidates:
        return None

    similarity, routine = max(
        candidates, key=lambda candidate: (candidate[0], as_aware(candidate[1].last_used_at))
    )

    logger.info(f"Workout matches saved routine '{routine.name}' ({similarity:.2f})")
    return MatchingRoutine(
        id=routine.id,
        name=routine.name,
        similarity=similarity,
        diffs=compute_exercise_diffs(new_exercises, routine.exercise_sets),
    )
