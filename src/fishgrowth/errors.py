"""
Configuration errors raised when building a growth model.

Every error derives from GrowthModelError, which is a ValueError, so callers
can catch the whole family at once or one specific condition.
"""


class GrowthModelError(ValueError):
    """Invalid or incomplete combination of parameters and data."""


class MissingNoiseParameterError(GrowthModelError):
    """log_sigma_1 was not supplied."""

    def __init__(self):
        super().__init__("noise intercept parameter required: 'par' must include 'log_sigma_1'")


class MissingReferenceLengthsError(GrowthModelError):
    """log_sigma_2 was supplied without Lshort and Llong."""

    def __init__(self, missing):
        super().__init__(
            "reference lengths required when length-varying noise is requested: "
            f"'data' must include {', '.join(repr(m) for m in missing)} "
            "when 'log_sigma_2' is specified"
        )


class MissingReferenceAgesError(GrowthModelError):
    """A Schnute-parametrized family was requested without t1 and t2."""

    def __init__(self, family, missing):
        super().__init__(
            f"reference ages required: the {family} model needs "
            f"{', '.join(repr(m) for m in missing)} in 'data'"
        )


class NoUsableDataError(GrowthModelError):
    """Neither a complete otolith subset nor a complete tag subset is present."""

    def __init__(self):
        super().__init__(
            "no usable data: supply otoliths (Aoto, Loto) and/or "
            "tags (Lrel, Lrec, liberty together with 'log_age' in 'par')"
        )


class LatentAgeLengthError(GrowthModelError):
    """log_age does not have one element per tagged fish."""

    def __init__(self, n_age, n_tags):
        super().__init__(
            f"latent age vector length mismatch: 'log_age' has {n_age} "
            f"elements but there are {n_tags} tagged fish"
        )


class MissingCurveParameterError(GrowthModelError):
    """A parameter required by the growth curve was not supplied."""

    def __init__(self, family, missing):
        super().__init__(
            f"the {family} model requires {', '.join(repr(m) for m in missing)} in 'par'"
        )


class ObservationLengthError(GrowthModelError):
    """Paired observation vectors have different lengths."""

    def __init__(self, subset, lengths):
        detail = ", ".join(f"{name}={n}" for name, n in lengths.items())
        super().__init__(f"{subset} vectors must have equal length ({detail})")


class UnknownParameterError(GrowthModelError):
    """A parameter named in 'fixed' is not part of the model."""

    def __init__(self, names):
        super().__init__(
            f"cannot fix unknown parameter(s): {', '.join(repr(n) for n in names)}"
        )
