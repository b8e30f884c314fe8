"""Terminal front end for chirpstack-device-importer."""
