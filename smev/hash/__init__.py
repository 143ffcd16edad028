from .quantum_resistant import hash_bytes, hash_text, hash_to_string

__all__ = ["hash_bytes", "hash_text", "hash_to_string"]
