"""
Custom exceptions for the entity model wizard configuration core.
"""

class WizardError(Exception):
    """Base exception for all wizard configuration errors."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}

class ConfigurationError(WizardError):
    """Raised when settings or a configuration document cannot be loaded."""
    pass

class ValidationError(WizardError):
    """Raised when input validation fails."""
    pass

class ProviderNotFoundError(WizardError):
    """Raised when a provider identity is not registered."""
    pass
