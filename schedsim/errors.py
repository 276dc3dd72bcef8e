from __future__ import annotations


class SchedulerError(ValueError):
    """
    Base class for input errors raised before any simulation work starts.
    """


class InvalidWorkload(SchedulerError):
    pass


class InvalidQuantum(SchedulerError):
    pass


class UnknownPolicy(SchedulerError):
    pass
