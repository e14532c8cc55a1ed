#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbrender library.

Only configuration mistakes raise. Problems found in the markup itself
(unknown tags, stray closing tags, unclosed tags and forbidden tags) are
reported as diagnostics on the parse result instead.

Exception Hierarchy
-------------------
- BBRenderError (base exception)

  - ValidationError (bad argument or option value)
    - InvalidOptionsError (wrong options class passed to the parser)
    - RuleTemplateError (rule template does not match the template grammar)

"""

from typing import Any


class BBRenderError(Exception):
    """Root of every exception raised by bbrender.

    Parameters
    ----------
    message : str
        What went wrong
    original_error : Exception, optional
        Lower-level exception this one wraps

    Attributes
    ----------
    message : str
        Same as ``message``
    original_error : Exception or None
        Same as ``original_error``

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(BBRenderError):
    """A configuration value or call argument was rejected.

    Raised for things like a rule set that is not a list, a callback that
    is not callable, or parse input that is not a string.

    Parameters
    ----------
    message : str
        What was wrong with the value
    parameter_name : str, optional
        Argument or option the value was given for
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        Lower-level exception this one wraps

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """``parse`` was given an options object of the wrong class.

    Parameters
    ----------
    expected_type : type
        Options class ``parse`` accepts
    received_type : type
        Class of the object actually passed
    message : str, optional
        Overrides the generated message

    """

    def __init__(
        self,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        if message is None:
            message = f"Expected {expected_type.__name__}, got {received_type.__name__}"
        super().__init__(
            message,
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.expected_type = expected_type
        self.received_type = received_type


class RuleTemplateError(ValidationError):
    """A rule template does not start with a ``[tagname ...]`` tag.

    Parameters
    ----------
    template : Any
        The rejected template value
    message : str, optional
        Overrides the generated message

    """

    def __init__(self, template: Any, message: str | None = None):
        if message is None:
            message = f"Invalid template format: {template!r}"
        super().__init__(message, parameter_name="template", parameter_value=template)
        self.template = template
