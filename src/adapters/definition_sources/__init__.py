"""Tiers de diccionario (fuentes concretas).

Cada módulo implementa `core.interfaces.definition_source.DefinitionSource`.
"""

from adapters.definition_sources.free_dictionary import FreeDictionarySource
from adapters.definition_sources.wiktionary import WiktionarySource

__all__ = [
	"FreeDictionarySource",
	"WiktionarySource",
]
