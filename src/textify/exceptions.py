#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the textify library.

This module defines specialized exception classes for the error conditions
that can occur while loading HTML and rendering it as Markdown-style text.
The rendering core itself never raises for a well-formed node tree; these
exceptions cover the surfaces around it (options, parsing, CLI).

Exception Hierarchy
-------------------
- TextifyError (base exception)

  - ValidationError (parameter/option validation)

  - ParsingError (HTML loading failures)

  - RenderingError (output generation failures)

  - DependencyError (missing optional parser backends)

"""

from __future__ import annotations

from typing import Any


class TextifyError(Exception):
    """Base exception class for all textify-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(TextifyError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ParsingError(TextifyError):
    """Exception raised when HTML markup cannot be loaded into a node tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(TextifyError):
    """Exception raised when text rendering cannot complete.

    The layout engine is total over well-formed trees, so this is only raised
    for inputs outside that contract, such as documents nested deeper than
    the interpreter's recursion limit.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(TextifyError):
    """Exception raised when an optional parser backend is not installed.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        install_command: str = "",
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            message = f"{converter_name.upper()} requires a parser backend that is not installed"
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message = f"{converter_name.upper()} requires the following packages: {pkg_list}"
            if install_command:
                message += f"\nInstall with: {install_command}"
            elif missing_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.install_command = install_command


__all__ = [
    "TextifyError",
    "ValidationError",
    "ParsingError",
    "RenderingError",
    "DependencyError",
]
