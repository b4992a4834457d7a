"""
Generation Errors
Failures of the fetch, transcode and store steps.
"""


class ImageGenerationError(Exception):
    """Base class for failures while generating a derived image."""

    stage = 'generate'

    def __init__(self, key: str, cause: object):
        self.key = key
        self.cause = cause
        super().__init__(self.describe())

    def describe(self) -> str:
        return str(self.cause)


class SourceFetchError(ImageGenerationError):
    """Source object missing or unreadable."""

    stage = 'fetch'


class TranscodeError(ImageGenerationError):
    """Resize or encode failed."""

    stage = 'transcode'

    def __init__(self, key: str, cause: object, source_key: str = ''):
        self.source_key = source_key
        super().__init__(key, cause)

    def describe(self) -> str:
        return f'Error while resizing "{self.source_key}" to "{self.key}": {self.cause}'


class StoreError(ImageGenerationError):
    """Writing the derived object failed."""

    stage = 'store'

    def __init__(self, key: str, cause: object, bucket: str = ''):
        self.bucket = bucket
        super().__init__(key, cause)

    def describe(self) -> str:
        return f'Error while putting resized image "{self.key}" into bucket "{self.bucket}": {self.cause}'
