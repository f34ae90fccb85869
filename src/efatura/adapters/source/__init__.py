"""Document source adapters."""

from .yaml_source import YamlDocumentSource

__all__ = ["YamlDocumentSource"]
