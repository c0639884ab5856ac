"""Infrastructure shared by the DentistPortal services."""
