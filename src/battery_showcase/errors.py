class ShowcaseError(Exception):
    pass


class ReadError(ShowcaseError):
    """Value source could not produce a reading for this tick."""


class ConfigurationError(ShowcaseError, ValueError):
    pass
