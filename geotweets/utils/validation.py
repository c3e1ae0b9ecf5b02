"""
Input validation utilities for the map-data pipeline.

Reusable checks for the scalar arguments callers hand to the pipeline
(country codes, continent names, sample sizes, seeds).
"""

import re

from geotweets.core.errors import InvalidSampleSizeError


ISO2_PATTERN = re.compile(r"^[A-Z]{2}$")


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_country_code(country_code: str, field_name: str = "country_code") -> str:
    """
    Validate an ISO 3166-1 alpha-2 country code.

    Args:
        country_code: The code to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated code, stripped of whitespace

    Raises:
        ValidationError: If the code is not two upper-case letters

    Examples:
        >>> validate_country_code("KE")
        'KE'
        >>> validate_country_code(" ZA ")
        'ZA'
        >>> validate_country_code("ke")  # doctest: +SKIP
        ValidationError: country_code must be two upper-case letters
    """
    if not country_code or not isinstance(country_code, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    country_code = country_code.strip()

    if not ISO2_PATTERN.match(country_code):
        raise ValidationError(f"{field_name} must be two upper-case letters, got {country_code!r}")

    return country_code


def validate_continent(continent: str, field_name: str = "continent") -> str:
    """
    Validate a continent name.

    Matching against the reference table is exact and case-sensitive, so the
    value is returned unchanged apart from the emptiness check.

    Examples:
        >>> validate_continent("Africa")
        'Africa'
    """
    if not isinstance(continent, str) or not continent.strip():
        raise ValidationError(f"{field_name} must be a non-empty string")

    return continent


def validate_sample_size(n: int) -> int:
    """
    Validate a requested sample size.

    Negative sizes are rejected rather than clamped to zero.

    Raises:
        InvalidSampleSizeError: If n is not a non-negative integer

    Examples:
        >>> validate_sample_size(1000)
        1000
        >>> validate_sample_size(0)
        0
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidSampleSizeError(n)

    return n


def validate_seed(seed: int, field_name: str = "seed") -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValidationError(f"{field_name} must be an integer, got {seed!r}")

    return seed
