"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields, is_dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from ..utils.numbers import to_decimal
from .defaults import (
    CacheParams,
    ComparisonParams,
    CompoundingParams,
    DefaultConfig,
    RateParams,
    StandaloneParams,
    TaxParams,
    get_default_config,
)
from .validation import ConfigValidator

SECTION_TYPES = {
    "rates": RateParams,
    "compounding": CompoundingParams,
    "tax": TaxParams,
    "standalone": StandaloneParams,
    "cache": CacheParams,
    "comparison": ComparisonParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_products(self) -> dict[str, Any]:
        """Load all per-product overrides from products.yaml."""
        products_file = self.config_dir / "products.yaml"

        if not products_file.exists():
            return {}

        with open(products_file) as f:
            products_config = yaml.safe_load(f) or {}

        return products_config.get("products") or {}

    def load_product_config(self, product_id: Any) -> dict[str, Any]:
        """Load product-specific configuration overrides."""
        if product_id is None:
            return {}

        # YAML may key products by int or str
        for key, value in self.load_products().items():
            if str(key) == str(product_id):
                return value or {}
        return {}

    def product_default_rate(self, product_id: Any) -> Optional[Decimal]:
        """Product-level fallback rate used when no base slab matches."""
        value = self.load_product_config(product_id).get("default_rate")
        if value is None:
            return None
        return to_decimal(value, field="default_rate")

    def merge_config(
        self,
        product_id: Any = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Product-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        product_config = self.load_product_config(product_id)
        config = self._deep_merge(config, product_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(
        self,
        product_id: Any = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge and validate configuration, returning typed parameters.

        Raises:
            ConfigurationError: If any merged value fails validation
        """
        merged = self.merge_config(product_id, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(
                    f"{err.field}: {err.message} (got: {err.value})" for err in errors
                ),
                errors=errors,
                context={"product_id": product_id},
            )

        sections = {
            name: self._build_section(section_type, merged.get(name, {}))
            for name, section_type in SECTION_TYPES.items()
        }
        return DefaultConfig(**sections)

    def _build_section(self, section_type: type, values: dict[str, Any]) -> Any:
        """Build a params dataclass, coercing YAML scalars to field types."""
        kwargs = {}
        for f in fields(section_type):
            if f.name not in values:
                continue
            value = values[f.name]
            if f.type is Decimal:
                value = to_decimal(value, field=f.name)
            elif f.type is int:
                value = int(value)
            elif f.type is float:
                value = float(value)
            elif f.name == "bonus_rates":
                value = {
                    str(label).upper(): to_decimal(rate, field=f"bonus_rates.{label}")
                    for label, rate in value.items()
                }
            kwargs[f.name] = value
        return section_type(**kwargs)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if is_dataclass(obj):
            result = {}
            for f in fields(obj):
                value = getattr(obj, f.name)
                if is_dataclass(value):
                    result[f.name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[f.name] = dict(value)
                else:
                    result[f.name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
