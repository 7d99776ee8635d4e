from pathlib import Path
from typing import Optional, Union

from ..errors import InferFormatError, InvalidFormatError
from ..models.output_format import OutputFormat


class FormatService:
    """Decides which codec an invocation writes. Pure; never touches the filesystem."""

    @staticmethod
    def resolve(output_path: Union[str, Path], explicit_format: Optional[str] = None) -> OutputFormat:
        """
        Resolve the output codec.

        An explicit format always wins; otherwise the output path's extension
        is used.

        Args:
            output_path: Where the encoded image will be written.
            explicit_format: Optional format name such as "webp" or "JPG".

        Returns:
            OutputFormat: The codec to encode with.

        Raises:
            InvalidFormatError: if the name or extension is not a supported format.
            InferFormatError: if no format is given and the path has no extension.
        """
        if explicit_format is not None:
            output_format = OutputFormat.lookup(explicit_format)
            if output_format is None:
                raise InvalidFormatError(explicit_format)
            return output_format

        extension = Path(output_path).suffix[1:]
        if not extension:
            raise InferFormatError(output_path)
        output_format = OutputFormat.lookup(extension)
        if output_format is None:
            raise InvalidFormatError(extension)
        return output_format
