from docintel.logging.logger import Log


class EmbeddingGenerator:
    """Reserved extension point for document embeddings."""

    def generate(self, text: str) -> list[float]:
        # TODO: call an embedding model once search moves to vector similarity.
        _ = text
        Log.warning("Embedding generation not implemented")
        return []
