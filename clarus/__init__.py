"""In-memory token ledger, root-call mandate, call weights and a block inspector."""

__version__ = "0.1.0"
__all__ = ["inspect", "mandate", "token", "token_types", "weights"]