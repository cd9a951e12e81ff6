#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdview library.

This module defines specialized exception classes for the error conditions
that can occur while configuring, parsing and rendering markdown views.

Exception Hierarchy
-------------------
- MdViewError (base exception)

  - ValidationError (parameter/option validation)
    - ThemeError (invalid theme definitions or theme files)

  - ParsingError (markdown parsing failures)

  - RenderingError (fragment generation failures)
    - StyleTransformError (syntax-highlighting stylesheet failures)

  - DependencyError (missing/incompatible packages)

Most of these never escape a render call: parse failures travel inside a
``ParseResult`` and highlighting failures degrade to plain text. They are
raised at configuration time or by the lower-level building blocks.

"""

from __future__ import annotations

from typing import Any


class MdViewError(Exception):
    """Base exception class for all mdview-specific errors.

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


class ValidationError(MdViewError):
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


class ThemeError(ValidationError):
    """Exception raised when a theme definition or theme file is invalid.

    Parameters
    ----------
    message : str
        Description of the problem
    theme_path : str, optional
        Path of the theme file being loaded, when applicable
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, theme_path: str | None = None, original_error: Exception | None = None):
        """Initialize the theme error."""
        super().__init__(message, parameter_name="theme", parameter_value=theme_path, original_error=original_error)
        self.theme_path = theme_path


class ParsingError(MdViewError):
    """Exception raised when markdown parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    line : int, optional
        1-based line where the failure was detected
    column : int, optional
        1-based column where the failure was detected
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.line = line
        self.column = column


class RenderingError(MdViewError):
    """Exception raised when fragment rendering fails.

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


class StyleTransformError(RenderingError):
    """Exception raised when a highlighting stylesheet cannot be transformed."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the transform error."""
        super().__init__(message, rendering_stage="stylesheet", original_error=original_error)


class DependencyError(MdViewError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring dependencies (e.g. "markdown")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{feature_name} requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{feature_name} has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
