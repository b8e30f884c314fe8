"""Wizard core: session, list loaders, CSV importer and state machine."""
