"""Configuration schema and loading for cutting plan runs.

Public API:
    - CuttingPlanConfiguration: Root configuration model
    - PlanSettingsConfig, MaterialConfig, OrderConfig, CutItemConfig
    - load_config / load_config_from_dict: Load and validate configuration
    - ConfigError: Exception for configuration errors
    - validate_config: Cross-field validation and cutting advisories
    - config_to_plan_config / config_to_requests / config_to_metadata:
      Convert configuration into domain objects
"""

from cutplan.application.config.adapter import (
    config_to_metadata,
    config_to_plan_config,
    config_to_requests,
    item_config_to_request,
)
from cutplan.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cutplan.application.config.schema import (
    SUPPORTED_VERSIONS,
    CutItemConfig,
    CuttingPlanConfiguration,
    MaterialConfig,
    OrderConfig,
    PlanSettingsConfig,
)
from cutplan.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    estimate_minimum_bars,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "CutItemConfig",
    "CuttingPlanConfiguration",
    "MaterialConfig",
    "OrderConfig",
    "PlanSettingsConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_metadata",
    "config_to_plan_config",
    "config_to_requests",
    "estimate_minimum_bars",
    "item_config_to_request",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
