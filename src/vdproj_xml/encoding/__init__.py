"""String encodings used by the vdproj and XML forms."""

from vdproj_xml.encoding.escape import escape, unescape
from vdproj_xml.encoding.names import decode_name, encode_name

__all__ = ["decode_name", "encode_name", "escape", "unescape"]
