from cdi_ui.cli.main import app, ctx_store, main

__all__ = ["app", "ctx_store", "main"]
