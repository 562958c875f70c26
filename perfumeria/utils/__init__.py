"""Utilidades del backend"""
from .error_utils import (
    APIError,
    ConfigurationError,
    UpstreamError,
    error_response,
    success_response,
    handle_errors,
    log_request,
    log_operation,
    validate_required
)
from .formato import format_currency
from .redondeo import (
    redondear,
    redondear_al_cien_mas_cercano,
    redondear_al_mil_mas_cercano
)

__all__ = [
    'APIError',
    'ConfigurationError',
    'UpstreamError',
    'error_response',
    'success_response',
    'handle_errors',
    'log_request',
    'log_operation',
    'validate_required',
    'format_currency',
    'redondear',
    'redondear_al_cien_mas_cercano',
    'redondear_al_mil_mas_cercano'
]
