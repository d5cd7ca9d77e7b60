"""
Factory for creating designer importers.
"""

from .client import TapestryClient
from .interface import DesignerImporter


class ImporterFactory:
    """Factory class for creating designer importers"""

    _importers: dict[str, type[DesignerImporter]] = {}

    @classmethod
    def register(cls, source_name: str, importer_class: type[DesignerImporter]):
        """Register an importer class for a source"""
        cls._importers[source_name.lower()] = importer_class

    @classmethod
    def create(cls, source_name: str, client: TapestryClient) -> DesignerImporter:
        """Create an importer for the given source, bound to an API client"""
        source_key = source_name.lower()

        if source_key not in cls._importers:
            available = ", ".join(cls._importers.keys())
            raise ValueError(
                f"Unknown source '{source_name}'. Available sources: {available}"
            )

        importer_class = cls._importers[source_key]
        return importer_class(client)

    @classmethod
    def get_available_sources(cls) -> list[str]:
        """Get list of available source names"""
        return list(cls._importers.keys())
