"""Validation structures and cutting advisories.

Schema validation is handled by pydantic. This module adds checks that
need the whole configuration: items that can never fit a bar, requests
that are certain to exceed the bar limit, and advisories about poor
packing or missing weight data.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from cutplan.application.config.schema import CuttingPlanConfiguration


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "items[0].length")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 valid, 1 errors, 2 valid with warnings."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def estimate_minimum_bars(config: CuttingPlanConfiguration) -> int:
    """Lower bound on bars needed: total consumed length over bar length.

    Items that can never fit are excluded.
    """
    kerf = config.plan.cutting_thickness
    bar_length = config.plan.bar_length
    total = sum(
        (item.length + kerf) * item.quantity
        for item in config.items
        if item.length + kerf <= bar_length
    )
    return math.ceil(total / bar_length) if total else 0


def validate_config(config: CuttingPlanConfiguration) -> ValidationResult:
    """Perform full validation of a cutting plan configuration.

    Args:
        config: A configuration already validated by pydantic

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    bar_length = config.plan.bar_length
    kerf = config.plan.cutting_thickness

    for index, item in enumerate(config.items):
        path = f"items[{index}]"
        required = item.length + kerf
        if required > bar_length:
            result.add_error(
                path=f"{path}.length",
                message=(
                    f"Item '{item.drawing_code}' #{item.item_number} needs "
                    f"{required:g}mm including kerf but bars are {bar_length:g}mm"
                ),
                value=item.length,
            )
        elif required > bar_length / 2 and item.quantity > 1:
            result.add_warning(
                path=f"{path}.length",
                message=(
                    f"Item '{item.drawing_code}' #{item.item_number} uses more than "
                    f"half a bar; each of its {item.quantity} pieces needs its own bar"
                ),
                suggestion="Check for a longer stock length to reduce offcuts",
            )

    minimum = estimate_minimum_bars(config)
    if minimum > config.plan.max_bars:
        result.add_error(
            path="plan.max_bars",
            message=(
                f"Items need at least {minimum} bars but max_bars is "
                f"{config.plan.max_bars}"
            ),
            value=config.plan.max_bars,
        )

    duplicates = Counter(
        (item.drawing_code, item.item_number)
        for item in config.items
        if item.drawing_code or item.item_number
    )
    for (drawing_code, item_number), count in duplicates.items():
        if count > 1:
            result.add_warning(
                path="items",
                message=(
                    f"Drawing '{drawing_code}' item #{item_number} is listed "
                    f"{count} times"
                ),
                suggestion="Merge the entries and sum their quantities",
            )

    if config.material.weight_per_meter == 0:
        result.add_warning(
            path="material.weight_per_meter",
            message="Weight per meter is 0; plan weights will be reported as 0",
        )

    return result
