"""Active-property import helpers."""

from .service import geocode_addresses, import_active_properties, normalize_header, read_rows

__all__ = ["geocode_addresses", "import_active_properties", "normalize_header", "read_rows"]
