"""Error types for meal history access."""


class MealSourceError(RuntimeError):
    """Raised by a meal history source when meals cannot be loaded.

    Covers transport and storage failures. Callers that own observable state
    (the weekly tracker) convert it into an error message instead of propagating.
    """
