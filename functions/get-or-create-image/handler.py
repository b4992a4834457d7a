"""
Get Or Create Image Handler
Generates resized image variants on demand for CloudFront origin responses.
"""
import json
import logging
import functools
from datetime import datetime, timezone
from typing import Dict, Any, Callable, Optional

import boto3

from edge_response import image_found, image_not_found, pass_through
from generation_errors import ImageGenerationError
from handler_config import HandlerConfig, load_config
from image_storage import S3ImageStorage
from image_transcoder import resize_image
from resize_params import ResizeParams, bucket_from_domain, object_key_from_uri, parse_resize_params

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

COMPONENT = 'get-or-create-image'

LOGGER_NAMES = (__name__, 'image_storage', 'image_transcoder')

# Origin statuses meaning the derived object does not exist yet
MISSING_OBJECT_STATUSES = ('403', '404')


def log_error(component: str, operation: str, error: Exception, context: dict) -> None:
    """Log error with structured context."""
    logger.error(json.dumps({
        "component": component,
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }))


def emit_metric(config: HandlerConfig, metric_name: str, value: float = 1.0,
                dimensions: Optional[dict] = None) -> None:
    """Emit CloudWatch metric when a metrics namespace is configured."""
    if not config.metrics_namespace:
        return

    try:
        cloudwatch = boto3.client('cloudwatch')
        metric_data = {
            'MetricName': metric_name,
            'Value': value,
            'Unit': 'Count',
            'Timestamp': datetime.now(timezone.utc)
        }
        if dimensions:
            metric_data['Dimensions'] = [
                {'Name': k, 'Value': v} for k, v in dimensions.items()
            ]
        cloudwatch.put_metric_data(Namespace=config.metrics_namespace, MetricData=[metric_data])
    except Exception as e:
        logger.warning(f'Failed to emit metric {metric_name}: {e}')


def _inbound_response(event: Any) -> Dict[str, Any]:
    try:
        response = event['Records'][0]['cf']['response']
    except (KeyError, IndexError, TypeError):
        return {}
    return response if isinstance(response, dict) else {}


def handle_edge_errors(func: Callable) -> Callable:
    """Decorator turning unexpected failures into a plain-text 404 response."""
    @functools.wraps(func)
    def wrapper(event: Dict[str, Any], context: Any, *args, **kwargs) -> Dict[str, Any]:
        try:
            return func(event, context, *args, **kwargs)
        except Exception as e:
            log_error(
                component=COMPONENT,
                operation=func.__name__,
                error=e,
                context={"event_keys": list(event.keys()) if isinstance(event, dict) else []}
            )
            return image_not_found(_inbound_response(event), f'Error while handling origin response: {e}')
    return wrapper


def generate_image(params: ResizeParams, bucket: str, key: str,
                   storage: S3ImageStorage, config: HandlerConfig) -> bytes:
    """
    Fetch the source image, resize it and store the result under key.

    Each step runs only after the previous one succeeded.

    Raises:
        SourceFetchError: Source object missing or unreadable
        TranscodeError: Resize or encode failed
        StoreError: The derived object could not be written
    """
    source = storage.get(bucket, params.source_key)
    image = resize_image(
        source,
        params.width,
        params.height,
        params.next_extension,
        quality=config.quality,
        source_key=params.source_key,
        key=key
    )
    storage.put(bucket, key, image, params.content_type, storage_class=config.storage_class)
    return image


def get_or_create_image(cf_event: Dict[str, Any], storage: S3ImageStorage,
                        config: HandlerConfig) -> Dict[str, Any]:
    """
    Serve a derived image, generating it when the origin does not have it.

    Args:
        cf_event: CloudFront record holding 'request' and 'response'
        storage: Storage used to read the source and write the variant
        config: Handler settings

    Returns:
        Response for CloudFront to use in place of the origin response
    """
    request = cf_event['request']
    response = cf_event['response']

    if str(response.get('status')) not in MISSING_OBJECT_STATUSES:
        return pass_through(response, config)

    params = parse_resize_params(request.get('querystring'))
    if params is None:
        logger.info(f'Not a resize request, passing through: {request.get("uri")}')
        emit_metric(config, 'PassThrough', dimensions={'Component': COMPONENT})
        return pass_through(response, config)

    domain_name = request.get('origin', {}).get('s3', {}).get('domainName')
    bucket = bucket_from_domain(domain_name)
    if bucket is None:
        logger.warning(f'Origin is not an S3 bucket domain, passing through: {domain_name}')
        emit_metric(config, 'PassThrough', dimensions={'Component': COMPONENT})
        return pass_through(response, config)

    key = object_key_from_uri(request.get('uri', ''))

    try:
        image = generate_image(params, bucket, key, storage, config)
    except ImageGenerationError as e:
        log_error(COMPONENT, e.stage, e, {
            "bucket": bucket,
            "source_key": params.source_key,
            "key": key
        })
        emit_metric(config, 'ImageGenerationFailed', dimensions={'Component': COMPONENT, 'Stage': e.stage})
        return image_not_found(
            response,
            f'Error while getting source image object "{params.source_key}": {e}'
        )

    logger.info(f'Generated s3://{bucket}/{key} from "{params.source_key}" '
                f'({params.width}x{params.height or "auto"} {params.next_extension})')
    emit_metric(config, 'ImageGenerated', dimensions={'Component': COMPONENT})
    return image_found(response, image, params.content_type, config)


@handle_edge_errors
def handler(event: Dict[str, Any], context: Any,
            storage: Optional[S3ImageStorage] = None) -> Dict[str, Any]:
    """
    CloudFront origin-response entry point.

    Args:
        event: Lambda@Edge event with a single CloudFront record
        context: Lambda context
        storage: Storage to use, an S3ImageStorage over a new S3 client by default
    """
    config = load_config()
    for name in LOGGER_NAMES:
        logging.getLogger(name).setLevel(config.log_level)

    cf_event = event['Records'][0]['cf']
    if storage is None:
        storage = S3ImageStorage(boto3.client('s3'))

    return get_or_create_image(cf_event, storage, config)
