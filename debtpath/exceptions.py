"""
Custom exceptions for debtpath.

Purpose
-------
Provides a unified exception hierarchy for the boundaries around the
computational core (configuration files, argument validation, JSON I/O).
The calculators themselves never raise for numeric degeneracies: they
return sentinels (``math.inf``, ``0``, ``"N/A"``) and stop at iteration caps.

Exception Hierarchy
-------------------
DebtPathError (base)
├── ConfigurationError - Invalid plan files or settings
├── ValidationError - Invalid arguments (unknown strategy, malformed debt)
└── SerializationError - Unreadable or malformed JSON files

Usage
-----
>>> from debtpath.exceptions import DebtPathError, ValidationError
>>>
>>> try:
...     sort_debts(debts, "random")
... except DebtPathError as e:
...     print(f"debtpath error: {e}")
"""


class DebtPathError(Exception):
    """
    Base exception for all debtpath errors.

    Examples
    --------
    >>> try:
    ...     plan = load_plan(path)
    ... except DebtPathError as e:
    ...     logger.error("Could not load plan: %s", e)
    """
    pass


class ConfigurationError(DebtPathError):
    """
    Invalid configuration content.

    Raised when a plan or loan configuration fails schema validation, such as:
    - Negative balances or minimum payments
    - Duplicate debt ids within one plan
    - Unknown strategy names in a plan file

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Invalid plan file plan.json: debts.0.balance must be >= 0"
    ... )
    """
    pass


class ValidationError(DebtPathError):
    """
    Invalid arguments to a library call.

    Raised for inputs that are not numeric degeneracies, such as:
    - A strategy other than "avalanche" or "snowball"
    - A debt mapping without a balance, rate or payment field

    Examples
    --------
    >>> raise ValidationError(
    ...     "strategy must be one of ('avalanche', 'snowball'), got 'random'"
    ... )
    """
    pass


class SerializationError(DebtPathError):
    """
    Unreadable or malformed files.

    Examples
    --------
    >>> raise SerializationError(f"{path} is not valid JSON: {exc}")
    """
    pass
