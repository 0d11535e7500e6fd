from .notification import ClientMessage

__all__ = ["ClientMessage"]
