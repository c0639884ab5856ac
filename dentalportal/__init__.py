"""DentistPortal API service."""
