"""
Field validation functions used by the configuration validators.
"""

import re
from typing import Any, List, Optional

from .exceptions import ValidationError

_SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:[-_][a-z0-9]+)*$')


def validate_positive_integer(
    value: Any, 
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within a range.
    
    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated
        
    Returns:
        Validated integer value
        
    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a string with visible content."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_slug(value: Any, field_name: str = "slug") -> str:
    """
    Validate a WordPress-style slug.

    Slugs are lowercase alphanumeric words separated by single hyphens or
    underscores, e.g. ``my-plugin`` or ``theme_child``.

    Raises:
        ValidationError: If the slug is malformed
    """
    slug = validate_non_empty_string(value, field_name=field_name)
    if not _SLUG_PATTERN.match(slug):
        raise ValidationError(
            f"{field_name} must contain only lowercase letters, digits, hyphens and underscores: {slug}",
            field_name=field_name,
            value=value
        )
    return slug


def validate_bool(value: Any, field_name: str = "value") -> bool:
    """Validate that a value is a real boolean, not a truthy stand-in."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_enum_choice(
    value: Any, 
    valid_choices: List[str], 
    field_name: str = "choice",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.
    
    Args:
        value: Value to validate
        valid_choices: List of valid choices
        field_name: Name of the field being validated
        case_sensitive: Whether comparison should be case sensitive
        
    Returns:
        Validated choice, normalized to the spelling in valid_choices
        
    Raises:
        ValidationError: If value is not in valid choices
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    
    if case_sensitive:
        if value in valid_choices:
            return value
    else:
        for choice in valid_choices:
            if value.lower() == choice.lower():
                return choice
    
    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_string_mapping(value: Any, field_name: str = "mapping") -> dict:
    """Validate a table of string keys to string values (aliases, externals)."""
    if not isinstance(value, dict):
        raise ValidationError(
            f"{field_name} must be a table of strings",
            field_name=field_name,
            value=value
        )
    for key, item in value.items():
        if not isinstance(item, str):
            raise ValidationError(
                f"{field_name}.{key} must be a string, got {type(item).__name__}",
                field_name=f"{field_name}.{key}",
                value=item
            )
    return dict(value)
