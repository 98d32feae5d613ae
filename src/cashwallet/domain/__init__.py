"""Domain layer for cashwallet application."""

_SERVICES = {
    "AccountService": "cashwallet.domain.account",
    "LedgerService": "cashwallet.domain.ledger",
    "FraudService": "cashwallet.domain.fraud",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports entities from this
# package, so they are resolved lazily
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
