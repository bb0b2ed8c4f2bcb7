import hashlib

from core.models import Window


def get_text_hash(text: str) -> str:
    """SHA-256 of generated text, used to tell exported copies apart."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def window_fingerprint(window: Window) -> str:
    """Generates a SHA-256 hash of a window's canonical JSON form."""
    sha256_hash = hashlib.sha256()
    sha256_hash.update(window.model_dump_json(by_alias=True).encode("utf-8"))
    return sha256_hash.hexdigest()
