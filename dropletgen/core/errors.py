"""
User-input validation failures raised at the batch-generation boundary.
The pure building blocks (design, interpolation, mapping, normalization,
assembly) never raise these; they degrade to empty or degenerate results.
"""


class DropletGenerationError(Exception):
    """Base class. `code` is stable for API clients, `detail` is for humans."""

    code = "generation_error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"[{self.code}] {detail}")


class InsufficientFactorsError(DropletGenerationError):
    code = "insufficient_factors"


class InvalidRangeError(DropletGenerationError):
    code = "invalid_range"


class NoDropletsGeneratedError(DropletGenerationError):
    code = "no_droplets_generated"


class UnknownParameterError(DropletGenerationError):
    code = "unknown_parameter"


class DropletImportError(DropletGenerationError):
    code = "droplet_import"
