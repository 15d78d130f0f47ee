"""NLU exception definitions.

Custom exception hierarchy for the intent pipeline. Lookups that simply
find nothing (empty queries, unknown items, dangling prepositions) are not
errors and return empty results instead.
"""


class NluError(Exception):
    """Base exception for NLU operations."""

    pass


class ConfigurationError(NluError):
    """Invalid configuration detected at construction time."""

    pass


class SearchOptionsError(ConfigurationError, ValueError):
    """Fuzzy search options failed validation.

    Attributes:
        field_name: Name of the offending option.
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name


class LexiconError(NluError):
    """A lexicon or synonym file could not be loaded.

    Attributes:
        path: Path of the file that failed to load, if any.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class UnknownRoleError(NluError, LookupError):
    """No rule set is registered for the actor role."""

    def __init__(self, role: str) -> None:
        super().__init__(f"Unknown role: {role}")
        self.role = role


class RuleIterationLimitError(NluError):
    """Rule evaluation did not reach a fixpoint within the iteration cap.

    Attributes:
        iterations: Number of iterations that ran.
    """

    def __init__(self, iterations: int) -> None:
        super().__init__(f"Rules did not converge after {iterations} iterations")
        self.iterations = iterations


class ToolNotFoundError(NluError, LookupError):
    """Requested tool name is not registered."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class TaggingError(NluError):
    """The part-of-speech tagger failed or is unavailable."""

    pass
