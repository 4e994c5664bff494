"""vdproj-xml: Lossless converter between Visual Studio installer projects and XML.

This package provides tools for:
- Parsing the line-oriented .vdproj format into a canonical element stream
- Writing that stream as XML (optionally pretty-printed) and back
- Encoding arbitrary vdproj keys as valid XML names

Quick Start:
    >>> from vdproj_xml.converters import vdproj_to_xml_string, xml_to_vdproj_string
    >>>
    >>> xml_text = vdproj_to_xml_string('"ProductName" = "8:MyApp"')
    >>> xml_to_vdproj_string(xml_text)
    '"ProductName" = "8:MyApp"\\r\\n'

Modules:
    ir: Canonical element stream events and the optional materialized tree
    encoding: Backslash escaping and XML name encoding
    converters: vdproj and XML readers/writers, conversion pipeline
    models: Conversion options and config file loading
    cli: Command-line interface
"""

__version__ = "0.1.0"
