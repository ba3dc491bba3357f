"""
Manifest renderer — Info.plist for a generated app.

Rendering uses ``__PLACEHOLDER__`` substitution, one template for the
plist and one per document-type section. Exactly one section is emitted:
UTIs (``LSItemContentTypes``) or extensions (``CFBundleTypeExtensions``).

The result is parsed back with ``plistlib`` before it is returned, so a
malformed render is a TemplateRenderError rather than a broken bundle.
"""

from __future__ import annotations

import plistlib
import re
from xml.parsers.expat import ExpatError
from xml.sax.saxutils import escape

from termdrop import __version__
from termdrop.core.errors import TemplateRenderError
from termdrop.core.models.doc_types import DocumentTypeSpec

ICON_FILE_NAME = "AppIcon.icns"

# ── Templates ───────────────────────────────────────────────────

_INFO_PLIST_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
    <key>CFBundleDevelopmentRegion</key>
    <string>en</string>

    <key>CFBundleDocumentTypes</key>
    <array>
        <dict>
__DOCUMENT_TYPES__
            <key>CFBundleTypeRole</key>
            <string>Editor</string>
        </dict>
    </array>

    <key>CFBundleExecutable</key>
    <string>__APP_DISPLAY_NAME__</string>

    <key>CFBundleIconFile</key>
    <string>__ICON_FILE__</string>

    <key>CFBundleIdentifier</key>
    <string>__BUNDLE_ID__</string>

    <key>CFBundleInfoDictionaryVersion</key>
    <string>6.0</string>

    <key>CFBundleName</key>
    <string>__APP_DISPLAY_NAME__</string>

    <key>CFBundlePackageType</key>
    <string>APPL</string>

    <key>CFBundleShortVersionString</key>
    <string>__VERSION__</string>
</dict>
</plist>
"""

_SECTION_TEMPLATE = """\
            <key>__SECTION_KEY__</key>
            <array>
__SECTION_ENTRIES__
            </array>"""

_EMPTY_SECTION_TEMPLATE = """\
            <key>__SECTION_KEY__</key>
            <array/>"""

_ENTRY_TEMPLATE = "                <string>__ENTRY__</string>"

UTI_KEY = "LSItemContentTypes"
EXTENSION_KEY = "CFBundleTypeExtensions"

_PLACEHOLDER_RE = re.compile(r"__([A-Z][A-Z0-9_]*[A-Z0-9])__")


def render_manifest(
    app_display_name: str,
    doc_types: DocumentTypeSpec,
    bundle_identifier: str,
) -> str:
    """Render Info.plist text.

    Args:
        app_display_name: Bundle name, also the executable name.
        doc_types: Which files the app claims to open.
        bundle_identifier: Reverse-DNS bundle identifier.

    Raises:
        TemplateRenderError: If a template references an unknown
            placeholder or the output is not a valid property list.
    """
    key = EXTENSION_KEY if doc_types.uses_extensions else UTI_KEY
    entries = doc_types.manifest_entries()

    if entries:
        lines = "\n".join(_substitute(_ENTRY_TEMPLATE, {"ENTRY": escape(e)}) for e in entries)
        section = _substitute(_SECTION_TEMPLATE, {"SECTION_KEY": key, "SECTION_ENTRIES": lines})
    else:
        section = _substitute(_EMPTY_SECTION_TEMPLATE, {"SECTION_KEY": key})

    rendered = _substitute(_INFO_PLIST_TEMPLATE, {
        "DOCUMENT_TYPES": section,
        "APP_DISPLAY_NAME": escape(app_display_name),
        "ICON_FILE": ICON_FILE_NAME,
        "BUNDLE_ID": escape(bundle_identifier),
        "VERSION": __version__,
    })

    try:
        plistlib.loads(rendered.encode("utf-8"))
    except (ExpatError, ValueError) as e:
        raise TemplateRenderError(f"Error rendering Info.plist template: {e}") from e

    return rendered


def _substitute(template: str, values: dict[str, str]) -> str:
    """Replace every ``__NAME__`` marker of *template* in a single pass."""

    def _value(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            raise TemplateRenderError(
                f"Error rendering Info.plist template: no value for __{name}__"
            )
        return values[name]

    return _PLACEHOLDER_RE.sub(_value, template)
