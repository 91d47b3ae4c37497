# tech_matcher/errors.py


class MatchingError(Exception):
    """Base class for everything the matching engine raises."""


class InvalidInputError(MatchingError, TypeError):
    """The caller passed something that is not a roster or a record at all."""


class ConfigError(MatchingError, ValueError):
    pass


class RosterError(MatchingError, ValueError):
    pass
