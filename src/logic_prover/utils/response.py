"""
Response utilities for Lambda functions
Keeps API Gateway responses for the prover consistent
"""

import json
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,X-Amz-Date,Authorization,X-Api-Key',
    'Access-Control-Allow-Methods': 'POST,OPTIONS'
}


def _headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    headers = {'Content-Type': 'application/json', **CORS_HEADERS}
    if extra:
        headers.update(extra)
    return headers


def success_response(data: Any,
                     status_code: int = 200,
                     headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Create successful API Gateway response

    Args:
        data: Response data, JSON serialisable
        status_code: HTTP status code (default 200)
        headers: Additional headers

    Returns:
        API Gateway response dictionary
    """
    return {
        'statusCode': status_code,
        'headers': _headers(headers),
        'body': json.dumps(data)
    }


def error_response(status_code: int,
                   message: str,
                   error_type: Optional[str] = None,
                   details: Optional[Dict] = None) -> Dict[str, Any]:
    """
    Create error API Gateway response

    Args:
        status_code: HTTP status code
        message: Error message
        error_type: Type of error (optional)
        details: Additional error details (optional)

    Returns:
        API Gateway response dictionary
    """
    error_body = {
        'error': {
            'message': message,
            'type': error_type or 'Error',
            'statusCode': status_code
        }
    }

    if details:
        error_body['error']['details'] = details

    logger.error(f"Returning error response: {status_code} - {message}")

    return {
        'statusCode': status_code,
        'headers': _headers(),
        'body': json.dumps(error_body)
    }


def validation_error_response(errors: List[str]) -> Dict[str, Any]:
    """400 response listing what was wrong with the request"""
    return error_response(
        status_code=400,
        message='Validation failed',
        error_type='ValidationError',
        details={'validation_errors': errors}
    )


def internal_error_response(request_id: Optional[str] = None) -> Dict[str, Any]:
    details = {'request_id': request_id} if request_id else None
    return error_response(
        status_code=500,
        message='Internal server error',
        error_type='InternalError',
        details=details
    )


def options_response() -> Dict[str, Any]:
    """Response for CORS preflight"""
    return {
        'statusCode': 200,
        'headers': {**CORS_HEADERS, 'Access-Control-Max-Age': '86400'},
        'body': ''
    }
