"""Configuration validation utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..errors import UnknownFrequencyError
from ..interest.models import CompoundingFrequency, TenureUnit


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _as_decimal(value: Any) -> Optional[Decimal]:
    """Numeric config value as Decimal, or None if not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_rate_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rate resolution parameters."""
        errors = []

        if "additional_rate_cap" in params:
            value = params["additional_rate_cap"]
            number = _as_decimal(value)
            if number is None or number < 0:
                errors.append(ValidationError(
                    field="additional_rate_cap",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "max_classifications" in params:
            value = params["max_classifications"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="max_classifications",
                    message="Must be a positive integer",
                    value=value
                ))

        if "rate_places" in params:
            value = params["rate_places"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="rate_places",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_compounding_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate compounding parameters."""
        errors = []

        if "precision" in params:
            value = params["precision"]
            if not _is_positive_int(value) or value < 20:
                errors.append(ValidationError(
                    field="precision",
                    message="Must be an integer of at least 20 significant digits",
                    value=value
                ))

        if "money_places" in params:
            value = params["money_places"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="money_places",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "default_frequency" in params:
            value = params["default_frequency"]
            try:
                CompoundingFrequency.parse(value)
            except UnknownFrequencyError:
                errors.append(ValidationError(
                    field="default_frequency",
                    message="Must be one of monthly, quarterly, half_yearly, annually",
                    value=value
                ))

        if "default_tenure_unit" in params:
            value = params["default_tenure_unit"]
            if TenureUnit.parse_or_none(value) is None:
                errors.append(ValidationError(
                    field="default_tenure_unit",
                    message="Must be months or years",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_tax_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate tax parameters."""
        errors = []

        if "default_tds_rate" in params:
            value = params["default_tds_rate"]
            number = _as_decimal(value)
            if number is None or number < 0 or number > 100:
                errors.append(ValidationError(
                    field="default_tds_rate",
                    message="Must be a percentage between 0 and 100",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_standalone_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate the standalone classification bonus table."""
        errors = []

        bonus_rates = params.get("bonus_rates")
        if bonus_rates is None:
            return errors

        if not isinstance(bonus_rates, dict):
            errors.append(ValidationError(
                field="bonus_rates",
                message="Must be a mapping of classification to rate",
                value=bonus_rates
            ))
            return errors

        for label, rate in bonus_rates.items():
            number = _as_decimal(rate)
            if number is None or number < 0:
                errors.append(ValidationError(
                    field=f"bonus_rates.{label}",
                    message="Must be a non-negative number",
                    value=rate
                ))

        return errors

    @staticmethod
    def validate_cache_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rate matrix cache parameters."""
        errors = []

        if "ttl_seconds" in params:
            value = params["ttl_seconds"]
            number = _as_decimal(value)
            if number is None or number <= 0:
                errors.append(ValidationError(
                    field="ttl_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "max_entries" in params:
            value = params["max_entries"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="max_entries",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_comparison_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate comparison parameters."""
        errors = []

        if "parallel" in params and not isinstance(params["parallel"], bool):
            errors.append(ValidationError(
                field="parallel",
                message="Must be a boolean",
                value=params["parallel"]
            ))

        if "max_workers" in params:
            value = params["max_workers"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="max_workers",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "rates" in config:
            errors.extend(ConfigValidator.validate_rate_params(config["rates"]))

        if "compounding" in config:
            errors.extend(ConfigValidator.validate_compounding_params(config["compounding"]))

        if "tax" in config:
            errors.extend(ConfigValidator.validate_tax_params(config["tax"]))

        if "standalone" in config:
            errors.extend(ConfigValidator.validate_standalone_params(config["standalone"]))

        if "cache" in config:
            errors.extend(ConfigValidator.validate_cache_params(config["cache"]))

        if "comparison" in config:
            errors.extend(ConfigValidator.validate_comparison_params(config["comparison"]))

        if "default_rate" in config:
            value = config["default_rate"]
            number = _as_decimal(value)
            if number is None or number < 0:
                errors.append(ValidationError(
                    field="default_rate",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors
