"""Errors raised while fetching metrics and building widget timelines."""


class DataUnavailable(Exception):
    """The metrics provider could not produce a snapshot."""


class SchedulingError(Exception):
    """Timestamp arithmetic failed while building a timeline."""


class ConfigurationInvalid(ValueError):
    """An unrecognised display mode or color theme value."""
