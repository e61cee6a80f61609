"""Exceptions raised at the boundaries of rectcover."""

from typing import Optional


class RectCoverError(Exception):
    """Base exception for all rectcover errors.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for programmatic handling
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class InvalidBitmapError(RectCoverError):
    """Bitmap does not satisfy the decomposition preconditions."""

    def __init__(self, message: str):
        super().__init__(message, error_code="BITMAP_ERROR")


class InvalidRegionError(RectCoverError):
    """Region handed to a decomposer is empty or lies outside the bitmap."""

    def __init__(self, message: str):
        super().__init__(message, error_code="REGION_ERROR")


class ConfigurationError(RectCoverError):
    """Error in pipeline options.

    Attributes:
        config_key: The option that caused the error (if applicable)
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, error_code="CONFIG_ERROR")
        self.config_key = config_key


class ImageLoadError(RectCoverError):
    """Error while decoding or writing a raster image.

    Attributes:
        image_path: Path to the image being processed when error occurred
    """

    def __init__(self, message: str, image_path: Optional[str] = None):
        super().__init__(message, error_code="IMAGE_ERROR")
        self.image_path = image_path

    def __str__(self) -> str:
        if self.image_path:
            return f"{super().__str__()} (image: {self.image_path})"
        return super().__str__()


class OutputWriteError(RectCoverError):
    """Error while writing a text or vector output file.

    Attributes:
        output_path: Path of the file that could not be written
    """

    def __init__(self, message: str, output_path: Optional[str] = None):
        super().__init__(message, error_code="OUTPUT_ERROR")
        self.output_path = output_path

    def __str__(self) -> str:
        if self.output_path:
            return f"{super().__str__()} (output: {self.output_path})"
        return super().__str__()
