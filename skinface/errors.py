"""
Error taxonomy for the skinface pipeline.

Every failure in the pipeline is fatal: there is exactly one photograph to
process, so no error is caught or recovered internally. Each class also
derives from the closest built-in exception so that generic callers
(``except OSError``, ``except ValueError``) keep working.
"""


class SkinfaceError(Exception):
    """Base class for all pipeline errors."""


class ResourceLoadError(SkinfaceError, OSError):
    """The photograph, template, or detection graph cannot be read or decoded."""


class GraphContractError(SkinfaceError, LookupError):
    """The detection graph lacks an expected named input or output."""


class InferenceError(SkinfaceError, RuntimeError):
    """The graph invocation failed or returned inconsistent outputs."""


class NoFaceDetectedError(SkinfaceError, LookupError):
    """The engine returned zero face candidates."""


class CropOutOfBoundsError(SkinfaceError, ValueError):
    """The selected bounding box falls outside the source image."""


class TemplateTooSmallError(SkinfaceError, ValueError):
    """The template cannot receive the composited thumbnail."""


class OutputWriteError(SkinfaceError, OSError):
    """The output image cannot be persisted."""
