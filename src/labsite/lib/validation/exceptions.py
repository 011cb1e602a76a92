class ValidationError(ValueError, AssertionError):
    """
    Raised when author or publication input is malformed or inconsistent.

    ``field`` names the offending input where there is one, so callers can point the user at it.
    """

    def __init__(self, *args: object, field=None, triggers=None) -> None:
        super().__init__(*args)
        self.field = field
        self.triggering_exceptions = triggers
