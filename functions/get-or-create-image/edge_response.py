"""
Edge Response
Builds CloudFront origin-response results from the inbound response.

Every result is a shallow copy of the inbound response with header
overrides merged in; the inbound dictionaries are never modified.
"""
import base64
from typing import Any, Dict

from handler_config import HandlerConfig


def _header(name: str, value: str) -> list:
    return [{'key': name, 'value': value}]


def _merge(response: Dict[str, Any], overrides: Dict[str, Any], headers: Dict[str, list]) -> Dict[str, Any]:
    merged_headers = dict(response.get('headers') or {})
    merged_headers.update(headers)
    return {**response, **overrides, 'headers': merged_headers}


def pass_through(response: Dict[str, Any], config: HandlerConfig) -> Dict[str, Any]:
    """Return the origin response with a long-lived Cache-Control header."""
    return _merge(response, {}, {
        'cache-control': _header('Cache-Control', config.cache_control)
    })


def image_found(response: Dict[str, Any], image: bytes, content_type: str,
                config: HandlerConfig) -> Dict[str, Any]:
    """Replace the origin error with the freshly generated image."""
    return _merge(response, {
        'status': '200',
        'statusDescription': 'Found',
        'body': base64.b64encode(image).decode('ascii'),
        'bodyEncoding': 'base64'
    }, {
        'content-type': _header('Content-Type', content_type),
        'cache-control': _header('Cache-Control', config.cache_control)
    })


def image_not_found(response: Dict[str, Any], message: str) -> Dict[str, Any]:
    # No Cache-Control override so the failure is not cached long-term
    return _merge(response, {
        'status': '404',
        'statusDescription': 'Not Found',
        'body': message,
        'bodyEncoding': 'text'
    }, {
        'content-type': _header('Content-Type', 'text/plain')
    })
