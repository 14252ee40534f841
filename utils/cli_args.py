"""
argparse value types for the command-line scripts.

Bad values become usage errors (exit code 2) instead of tracebacks later on.
"""
import argparse


def _number(value: str, convert):
    try:
        return convert(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None


def positive_float(value: str) -> float:
    number = _number(value, float)
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def non_negative_float(value: str) -> float:
    number = _number(value, float)
    if not number >= 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def positive_int(value: str) -> int:
    number = _number(value, int)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number
