"""
Embed files into a PDF name directory and extract them again.
"""

# Standard Library
import io
import pathlib
import zlib

# PIP3 modules
import pypdf
import pypdf.errors
import pypdf.generic

# local repo modules
import mdreport.config
import mdreport.errors


SOURCE_ATTACHMENT_NAME = mdreport.config.SOURCE_ATTACHMENT_NAME
STREAM_READ_ERRORS = (pypdf.errors.PyPdfError, zlib.error, ValueError, KeyError, TypeError)


#============================================
def _key_text(key) -> str:
	if isinstance(key, pypdf.generic.ByteStringObject):
		return bytes(key).decode("latin-1")
	return str(key)


#============================================
def _embedded_files_node(writer: pypdf.PdfWriter) -> pypdf.generic.DictionaryObject:
	"""
	Get or create root /Names /EmbeddedFiles on a writer.
	"""
	root = writer.root_object
	if "/Names" not in root:
		root[pypdf.generic.NameObject("/Names")] = writer._add_object(pypdf.generic.DictionaryObject())
	names = root["/Names"]
	if "/EmbeddedFiles" not in names:
		names[pypdf.generic.NameObject("/EmbeddedFiles")] = writer._add_object(pypdf.generic.DictionaryObject())
	embedded_files = names["/EmbeddedFiles"]
	if "/Names" not in embedded_files:
		embedded_files[pypdf.generic.NameObject("/Names")] = pypdf.generic.ArrayObject()
	return embedded_files


#============================================
def embed_attachment(
	writer: pypdf.PdfWriter,
	name: str,
	mime: str,
	data: bytes,
	compress: bool = True,
) -> pypdf.generic.IndirectObject:
	"""
	Store bytes as a named embedded file.

	The name array stays sorted; embedding an existing name replaces it.

	Args:
		writer: Finalized document writer.
		name: Attachment name.
		mime: MIME type stored as the stream /Subtype.
		data: Payload bytes, stored losslessly.
		compress: Flate compress the stream.

	Returns:
		Reference to the file specification.
	"""
	stream = pypdf.generic.DecodedStreamObject()
	stream.set_data(data)
	if compress:
		stream = stream.flate_encode()
	stream[pypdf.generic.NameObject("/Type")] = pypdf.generic.NameObject("/EmbeddedFile")
	stream[pypdf.generic.NameObject("/Subtype")] = pypdf.generic.NameObject("/" + mime)
	stream[pypdf.generic.NameObject("/Params")] = pypdf.generic.DictionaryObject({
		pypdf.generic.NameObject("/Size"): pypdf.generic.NumberObject(len(data)),
	})
	stream_ref = writer._add_object(stream)

	filespec = pypdf.generic.DictionaryObject({
		pypdf.generic.NameObject("/Type"): pypdf.generic.NameObject("/Filespec"),
		pypdf.generic.NameObject("/F"): pypdf.generic.TextStringObject(name),
		pypdf.generic.NameObject("/UF"): pypdf.generic.TextStringObject(name),
		pypdf.generic.NameObject("/EF"): pypdf.generic.DictionaryObject({pypdf.generic.NameObject("/F"): stream_ref}),
	})
	filespec_ref = writer._add_object(filespec)

	name_array = _embedded_files_node(writer)["/Names"]
	entries = {}
	for index in range(0, len(name_array) - 1, 2):
		entries[_key_text(name_array[index])] = name_array[index + 1]
	entries[name] = filespec_ref
	name_array.clear()
	for key in sorted(entries):
		name_array.append(pypdf.generic.TextStringObject(key))
		name_array.append(entries[key])
	return filespec_ref


#============================================
def find_in_name_tree(node: pypdf.generic.DictionaryObject, name: str):
	"""
	Look up a name in a PDF name tree, following /Kids.

	Args:
		node: Name tree node.
		name: Key to find.

	Returns:
		The resolved value, or None when absent.
	"""
	if "/Names" in node:
		entries = node["/Names"]
		for index in range(0, len(entries) - 1, 2):
			if _key_text(entries[index].get_object()) == name:
				return entries[index + 1].get_object()
	if "/Kids" in node:
		for kid in node["/Kids"]:
			found = find_in_name_tree(kid.get_object(), name)
			if found is not None:
				return found
	return None


#============================================
def extract_attachment(pdf_bytes: bytes, name: str = SOURCE_ATTACHMENT_NAME) -> bytes:
	"""
	Return the payload of a named embedded file.

	Args:
		pdf_bytes: Complete PDF file contents.
		name: Attachment name.

	Returns:
		Decompressed payload bytes.

	Raises:
		mdreport.errors.ContainerReadError: Bytes are not a readable PDF.
		mdreport.errors.NameDirectoryMissingError: No embedded file directory.
		mdreport.errors.AttachmentNotFoundError: No entry with that name.
		mdreport.errors.AttachmentUnreadableError: Entry has no readable stream.
	"""
	try:
		reader = pypdf.PdfReader(io.BytesIO(pdf_bytes))
		root = reader.trailer["/Root"]
	except STREAM_READ_ERRORS as error:
		raise mdreport.errors.ContainerReadError(f"Cannot read PDF container: {error}") from error

	if "/Names" not in root:
		raise mdreport.errors.NameDirectoryMissingError("No /Names dictionary in document root")
	names = root["/Names"]
	if "/EmbeddedFiles" not in names:
		raise mdreport.errors.NameDirectoryMissingError("No /EmbeddedFiles in /Names dictionary")

	filespec = find_in_name_tree(names["/EmbeddedFiles"], name)
	if filespec is None:
		raise mdreport.errors.AttachmentNotFoundError(name)
	if not isinstance(filespec, pypdf.generic.DictionaryObject) or "/EF" not in filespec:
		raise mdreport.errors.AttachmentUnreadableError(f"Attachment {name} has no /EF dictionary")
	embedded = filespec["/EF"]
	if "/F" not in embedded:
		raise mdreport.errors.AttachmentUnreadableError(f"Attachment {name} has no embedded stream")
	try:
		return embedded["/F"].get_data()
	except (AttributeError,) + STREAM_READ_ERRORS as error:
		raise mdreport.errors.AttachmentUnreadableError(f"Cannot decode attachment {name}: {error}") from error


#============================================
def extract_markdown(pdf_bytes: bytes, name: str = SOURCE_ATTACHMENT_NAME) -> str:
	"""
	Return the embedded markdown source as text.

	Raises:
		mdreport.errors.AttachmentUnreadableError: Payload is not UTF-8.
	"""
	data = extract_attachment(pdf_bytes, name)
	try:
		return data.decode("utf-8")
	except UnicodeDecodeError as error:
		raise mdreport.errors.AttachmentUnreadableError(f"Attachment {name} is not UTF-8 text") from error


#============================================
def extract_markdown_from_file(pdf_path: str, name: str = SOURCE_ATTACHMENT_NAME) -> str:
	"""
	Read a PDF file and return its embedded markdown source.

	Raises:
		mdreport.errors.ReportIOError: The PDF file cannot be read.
	"""
	path = pathlib.Path(pdf_path)
	try:
		pdf_bytes = path.read_bytes()
	except OSError as error:
		raise mdreport.errors.ReportIOError("read", str(path), error) from error
	return extract_markdown(pdf_bytes, name)
