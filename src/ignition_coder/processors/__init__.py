"""Document walkers for both conversion directions."""

from .extraction_walker import ExtractionWalker
from .embedding_walker import EmbeddingWalker

__all__ = ["ExtractionWalker", "EmbeddingWalker"]
