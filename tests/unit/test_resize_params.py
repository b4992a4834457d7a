"""Tests for query string parsing and key derivation."""
import pytest

from resize_params import ResizeParams, bucket_from_domain, object_key_from_uri, parse_int, parse_resize_params


class TestParseInt:
    """Leading base-10 integer parsing."""

    @pytest.mark.parametrize('raw, expected', [
        ('200', 200),
        ('  42', 42),
        ('200px', 200),
        ('007', 7),
        ('-5', -5),
        ('+3', 3),
        ('1e3', 1),
    ])
    def test_parses_leading_digits(self, raw, expected):
        assert parse_int(raw) == expected

    @pytest.mark.parametrize('raw', [None, '', 'wide', 'px200', '-', '.5', '\u0662\u0660\u0660', '\uff12\uff10\uff10'])
    def test_rejects_non_numeric(self, raw):
        assert parse_int(raw) is None


class TestParseResizeParams:
    """Resize intent extraction from the query string."""

    def test_full_request(self):
        params = parse_resize_params('sourceImage=%2Foriginals%2Fcat.jpg&width=320&height=240&nextExtension=webp')

        assert params == ResizeParams(
            source_image='/originals/cat.jpg',
            width=320,
            height=240,
            next_extension='webp'
        )
        assert params.source_key == 'originals/cat.jpg'
        assert params.content_type == 'image/webp'

    def test_height_is_optional(self):
        params = parse_resize_params('sourceImage=cat.jpg&width=320&nextExtension=jpeg')

        assert params.width == 320
        assert params.height is None

    @pytest.mark.parametrize('height', ['0', 'tall', '', '-10'])
    def test_invalid_height_is_dropped(self, height):
        params = parse_resize_params(f'sourceImage=cat.jpg&width=320&height={height}&nextExtension=png')

        assert params.height is None

    @pytest.mark.parametrize('querystring', [
        None,
        '',
        'sourceImage=cat.jpg&nextExtension=webp',
        'sourceImage=cat.jpg&width=0&nextExtension=webp',
        'sourceImage=cat.jpg&width=-20&nextExtension=webp',
        'sourceImage=cat.jpg&width=abc&nextExtension=webp',
        'sourceImage=cat.jpg&width=%D9%A2%D9%A0%D9%A0&nextExtension=webp',
        'width=200&nextExtension=webp',
        'sourceImage=cat.jpg&width=200',
        'sourceImage=&width=200&nextExtension=webp',
    ])
    def test_not_a_resize_request(self, querystring):
        assert parse_resize_params(querystring) is None

    def test_first_repeated_value_wins(self):
        params = parse_resize_params('sourceImage=a.jpg&sourceImage=b.jpg&width=100&width=50&nextExtension=png')

        assert params.source_image == 'a.jpg'
        assert params.width == 100


class TestBucketFromDomain:
    """Bucket name extraction from S3 origin domains."""

    @pytest.mark.parametrize('domain, bucket', [
        ('my-assets.s3.amazonaws.com', 'my-assets'),
        ('My-Assets.S3.AmazonAWS.com', 'My-Assets'),
        ('static.example.com.s3.amazonaws.com', 'static.example.com'),
        ('my-assets.s3.eu-west-1.amazonaws.com', 'my-assets'),
        ('my-assets.s3-us-west-2.amazonaws.com', 'my-assets'),
        ('logs.s3.s3.amazonaws.com', 'logs.s3'),
        ('logs.s3.s3.eu-west-1.amazonaws.com', 'logs.s3'),
    ])
    def test_extracts_bucket(self, domain, bucket):
        assert bucket_from_domain(domain) == bucket

    @pytest.mark.parametrize('domain', [None, '', 'images.example.com', 's3.amazonaws.com'])
    def test_rejects_other_domains(self, domain):
        assert bucket_from_domain(domain) is None


class TestObjectKeyFromUri:
    def test_strips_one_leading_slash(self):
        assert object_key_from_uri('/resized/cat.webp') == 'resized/cat.webp'
        assert object_key_from_uri('//double.webp') == '/double.webp'
        assert object_key_from_uri('plain.webp') == 'plain.webp'
