"""
Resize Parameters
Parses the resize request carried in the CloudFront query string.
"""
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs

LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?[0-9]+)')

# <bucket>.s3.amazonaws.com
S3_GLOBAL_DOMAIN_PATTERN = re.compile(r'^(?P<bucket>.+)\.s3\.amazonaws\.com$', re.IGNORECASE)

# <bucket>.s3.<region>.amazonaws.com, <bucket>.s3-<region>.amazonaws.com
S3_REGIONAL_DOMAIN_PATTERN = re.compile(
    r'^(?P<bucket>.+)\.s3[.-][a-z0-9-]+\.amazonaws\.com$',
    re.IGNORECASE
)


@dataclass(frozen=True)
class ResizeParams:
    source_image: str
    width: int
    height: Optional[int]
    next_extension: str

    @property
    def source_key(self) -> str:
        return object_key_from_uri(self.source_image)

    @property
    def content_type(self) -> str:
        return f'image/{self.next_extension}'


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the leading base-10 integer of a string.

    Trailing characters are ignored, so "200px" parses as 200.

    Args:
        value: Raw query string value

    Returns:
        Parsed integer, None if the value does not start with digits
    """
    if value is None:
        return None

    match = LEADING_INT_PATTERN.match(value)
    if not match:
        return None
    return int(match.group(1), 10)


def parse_resize_params(querystring: Optional[str]) -> Optional[ResizeParams]:
    """
    Extract resize parameters from an urlencoded query string.

    A request without a positive width, a source image or a target
    extension is not a resize request and yields None.
    """
    query = parse_qs(querystring or '', keep_blank_values=True)
    values = {name: items[0] for name, items in query.items() if items}

    width = parse_int(values.get('width'))
    if not width or width < 0:
        return None

    height = parse_int(values.get('height'))
    if not height or height < 0:
        height = None

    source_image = values.get('sourceImage')
    next_extension = values.get('nextExtension')
    if not source_image or not next_extension:
        return None

    return ResizeParams(
        source_image=source_image,
        width=width,
        height=height,
        next_extension=next_extension
    )


def bucket_from_domain(domain_name: Optional[str]) -> Optional[str]:
    """Extract the bucket name from an S3 origin domain name."""
    if not domain_name:
        return None

    match = S3_GLOBAL_DOMAIN_PATTERN.match(domain_name) or S3_REGIONAL_DOMAIN_PATTERN.match(domain_name)
    if not match:
        return None
    return match.group('bucket')


def object_key_from_uri(uri: str) -> str:
    """Strip the leading slash from a URI to get the S3 object key."""
    return re.sub(r'^/', '', uri)
