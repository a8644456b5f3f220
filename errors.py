"""Exceptions raised inside the pipeline. Only app.ImageProxy handles them."""


class ImageProxyError(Exception):
    """Base class for collaborator failures that abort an invocation."""


class StorageFetchError(ImageProxyError):
    def __init__(self, bucket: str, key: str, reason: str):
        super().__init__(f"Could not fetch s3://{bucket}/{key}: {reason}")
        self.bucket = bucket
        self.key    = key


class ImageTransformError(ImageProxyError):
    pass
