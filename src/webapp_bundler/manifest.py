"""Info.plist rendering for macOS application bundles."""

from __future__ import annotations

from dataclasses import dataclass
from xml.sax.saxutils import escape

MANIFEST_FILENAME = "Info.plist"
IDENTIFIER_PREFIX = "com.web."

ICON_ENTRY_TEMPLATE = """\
	<key>CFBundleIconFile</key>
	<string>{icon_name}</string>
"""

PLIST_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
	<key>Application-Group</key>
	<array>
		<string>dot-mac</string>
	</array>
	<key>CFBundleDevelopmentRegion</key>
	<string>English</string>
	<key>CFBundleExecutable</key>
	<string>{executable_name}</string>
	<key>CFBundleIdentifier</key>
	<string>{identifier}</string>
	<key>CFBundleName</key>
	<string>{bundle_name}</string>
	<key>CFBundlePackageType</key>
	<string>APPL</string>
	<key>CFBundleSupportedPlatforms</key>
	<array>
		<string>MacOSX</string>
	</array>
	<key>NSSupportsSeamlessOpening</key>
	<true/>
	<key>NSSupportsSuddenTermination</key>
	<true/>
	<key>NSHighResolutionCapable</key>
	<true/>
{icon_entry}</dict>
</plist>
"""


@dataclass(frozen=True)
class ManifestFields:
    """Substitution values for the manifest template."""

    executable_name: str
    bundle_name: str
    icon_name: str = ""

    @property
    def identifier(self) -> str:
        """Bundle identifier derived from the trimmed bundle name."""
        return f"{IDENTIFIER_PREFIX}{self.bundle_name.strip()}"


def render_manifest(fields: ManifestFields) -> bytes:
    """Render ``Info.plist`` bytes for ``fields``.

    An empty ``icon_name`` omits the ``CFBundleIconFile`` entry.
    """
    icon_entry = ""
    if fields.icon_name:
        icon_entry = ICON_ENTRY_TEMPLATE.format(icon_name=escape(fields.icon_name))
    document = PLIST_TEMPLATE.format(
        executable_name=escape(fields.executable_name),
        identifier=escape(fields.identifier),
        bundle_name=escape(fields.bundle_name),
        icon_entry=icon_entry,
    )
    return document.encode("utf-8")
