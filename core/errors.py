"""Pipeline error types."""


class PipelineError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class ValidationError(PipelineError, ValueError):
    """The request itself is unusable (empty, too long). Nothing was generated."""


class TransportError(PipelineError, RuntimeError):
    """A call to the generation service failed.

    Role calls capture this into their RoleResult; the orchestrator only raises
    it when every role failed, with the collected results attached.
    """

    def __init__(self, message, results=None):
        super().__init__(message)
        self.results = list(results or [])


class ConfigurationError(PipelineError, LookupError):
    """The role catalog does not contain a requested role. Catalog defect."""


class SessionClosedError(PipelineError, ValueError):
    """A message was posted to a collaboration session that is already resolved."""
