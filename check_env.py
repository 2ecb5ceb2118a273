#!/usr/bin/env python3
"""Helper script to check and create the .env file for Supabase and Google Maps."""

from pathlib import Path
import os
import sys

REQUIRED = ("LSE_SUPABASE_URL", "LSE_SUPABASE_KEY", "LSE_GOOGLE_MAPS_API_KEY")

TEMPLATE = """# Supabase Configuration (active_properties table)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
LSE_SUPABASE_URL=https://your-project-id.supabase.co
LSE_SUPABASE_KEY=your-service-role-key-here

# Google Maps web services (geocoding + distance matrix)
LSE_GOOGLE_MAPS_API_KEY=your-google-maps-key-here

# API Configuration
LSE_API_PREFIX=/api
# LSE_FRONTEND_ALLOWED_ORIGINS accepts a JSON array or a comma-separated list

# Route density
LSE_DEFAULT_RADIUS_MILES=1.0
"""


def _mask(value: str) -> str:
    return value[:12] + "..." if len(value) > 12 else value


def main() -> None:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env at {env_file}; fill in your credentials and rerun.")
        return

    print(f"Found .env at {env_file}")
    sys.path.insert(0, str(project_root / "src"))
    from landscape_estimator.config import settings

    configured = {
        "LSE_SUPABASE_URL": settings.supabase_url or os.getenv("LSE_SUPABASE_URL"),
        "LSE_SUPABASE_KEY": settings.supabase_key or os.getenv("LSE_SUPABASE_KEY"),
        "LSE_GOOGLE_MAPS_API_KEY": settings.google_maps_api_key or os.getenv("LSE_GOOGLE_MAPS_API_KEY"),
    }
    missing = [name for name in REQUIRED if not configured[name]]
    for name in REQUIRED:
        value = configured[name]
        print(f"{'OK ' if value else 'MISSING'} {name}{': ' + _mask(value) if value else ''}")

    if missing:
        print("\nTroubleshooting:")
        print("1. Make sure .env exists in the project root")
        print("2. Make sure variables start with the LSE_ prefix")
        print("3. Restart the backend after editing .env")
        sys.exit(1)


if __name__ == "__main__":
    main()
