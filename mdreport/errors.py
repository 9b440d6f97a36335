"""
Exception types raised by the report pipeline.
"""


class ReportIOError(OSError):
	"""
	An input or output file operation failed.
	"""

	def __init__(self, operation: str, path: str, error: Exception) -> None:
		super().__init__(f"Failed to {operation} {path}: {error}")
		self.errno = getattr(error, "errno", None)
		self.operation = operation
		self.path = path


class BuilderFinalizedError(RuntimeError):
	"""
	A document builder was used after finalize().
	"""


class ExtractionError(Exception):
	"""
	Base class for failures while locating an embedded attachment.
	"""


class ContainerReadError(ExtractionError):
	"""
	The container bytes could not be parsed as a PDF.
	"""


class NameDirectoryMissingError(ExtractionError):
	"""
	The document root has no embedded file name directory.
	"""


class AttachmentNotFoundError(ExtractionError):
	"""
	The name directory has no entry with the requested name.
	"""

	def __init__(self, name: str) -> None:
		super().__init__(f"Attachment not found in embedded files: {name}")
		self.name = name


class AttachmentUnreadableError(ExtractionError):
	"""
	The named entry exists but its stream cannot be read.
	"""
