#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fd_pricing.config.loader import ConfigLoader
from fd_pricing.config.validation import ConfigValidator, ValidationError


def validate_product_config(loader: ConfigLoader, product_id: str) -> List[ValidationError]:
    """Validate merged configuration for a specific product."""
    config = loader.merge_config(product_id)
    return ConfigValidator.validate_config(config)


def main() -> int:
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating FD pricing configuration in {loader.config_dir}...")

    product_ids = [str(product_id) for product_id in loader.load_products()]
    product_ids.append("UNKNOWN-PRODUCT")  # Should use defaults

    all_valid = True

    for product_id in product_ids:
        print(f"\n📊 Validating {product_id}...")

        try:
            errors = validate_product_config(loader, product_id)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
                continue

            loader.load_config(product_id)
            default_rate = loader.product_default_rate(product_id)
            suffix = f" (default rate {default_rate}%)" if default_rate is not None else ""
            print(f"✅ {product_id} configuration is valid{suffix}")

        except Exception as e:
            print(f"❌ Error validating {product_id}: {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configurations are valid!")
        return 0

    print("\n💥 Some configurations have errors!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
