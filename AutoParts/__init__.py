"""
AutoParts - Parts catalog backend with category, fitment and identifier integrity
"""

__version__ = "1.0.0"
__schema_version__ = "1.0.0"  # Database schema version

VERSION_INFO = {
    "app_version": __version__,
    "schema_version": __schema_version__,
    "description": "Catalog integrity engine: category hierarchy, vehicle fitment and catalog codes",
}
