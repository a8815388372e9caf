"""Exceptions raised by the calculation pipeline."""


class DomainError(ValueError):
    """Inputs make a calculation mathematically undefined (e.g. ETc of zero)."""


class DSSCalculationError(RuntimeError):
    """A stage of the main irrigation/economic chain failed.

    The message always reads "DSS calculation failed: <cause>"; ``stage``
    names the step that raised and the original exception is chained as
    ``__cause__``.
    """

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        super().__init__(f"DSS calculation failed: {cause}")
