#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flexrecord.config.loader import ConfigLoader
from flexrecord.config.validation import ConfigValidator, ValidationError
from flexrecord.errors import ConfigurationError


def validate_config_file(config_path: Optional[Path] = None) -> List[ValidationError]:
    """Validate the merged configuration for a config file."""
    loader = ConfigLoader.create(config_path)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_path)

    print(f"🔍 Validating flexrecord configuration: {loader.config_path}")
    if not loader.config_path.exists():
        print("ℹ️  File not found, validating defaults only")

    all_valid = True

    try:
        errors = validate_config_file(config_path)

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print("✅ Configuration values are valid")

    except ConfigurationError as e:
        print(f"❌ Error loading configuration: {e}")
        all_valid = False

    if all_valid:
        print("\n📋 Resolving configured types...")
        try:
            registry = loader.build_type_registry()
            if registry is None:
                print("ℹ️  No types configured, __type hints are disabled")
            else:
                print(f"✅ {len(registry)} types resolved: {registry}")
        except ConfigurationError as e:
            print(f"❌ {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
