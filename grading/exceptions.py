class GradingScaleError(Exception):
    """
    Levée par la couche service pour bloquer un enregistrement.
    `errors`: liste de messages, ou {département: [messages]}.
    """
    def __init__(self, errors):
        self.errors = errors
        super().__init__(self._summary())

    def _summary(self):
        if isinstance(self.errors, dict):
            count = sum(len(v) for v in self.errors.values())
        else:
            count = len(self.errors)
        return f"{count} grading scale error(s)"
