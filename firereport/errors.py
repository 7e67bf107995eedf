"""Exceptions raised by the report renderer."""


class ReportError(Exception):
    """Base class for everything the renderer raises."""


class RecordError(ReportError):
    """The input record could not be read at all."""


class LayoutError(ReportError):
    """The layout engine was asked to do something impossible."""


class ReportGenerationError(ReportError):
    """A render failed; carries the stage it failed in and the cause."""

    def __init__(self, stage, cause):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Failed to generate PDF during {stage}: {cause}")
