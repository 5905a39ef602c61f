"""Common literal values used across docset_html.

These constants keep wire tokens, file suffixes, and CSS lookups centralized
so the dispatcher, the substitution pass, and tests share the same values.

Examples
--------
>>> from docset_html import _constants
>>> _constants.PLATFORM_CLASSES["jvm"]
'jvm-like'
>>> "page" + _constants.COMMAND_MANIFEST_EXTENSION
'page.commands.json'
"""

PATH_TO_ROOT_PATTERN = "###docset-path-to-root###"
PROJECT_NAME_PATTERN = "@@@docset-project-name@@@"
COMMAND_TAG = "docset-command"
COMMAND_MANIFEST_EXTENSION = ".commands.json"
HTML_EXTENSION = ".html"

DEFAULT_CODE_LANGUAGE = "kotlin"
DEFAULT_TAB_ORDER = ("Types", "Functions", "Properties", "Extensions", "Inheritors")
MAIN_SCRIPT = "scripts/main.js"
LOGO_ICON = "images/logo-icon.svg"
ATTRIBUTION_URL = "https://github.com/Kotlin/dokka"

PLATFORM_CLASSES: dict[str, str] = {
    "common": "common-like",
    "native": "native-like",
    "jvm": "jvm-like",
    "js": "js-like",
}

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp", "tif", "webp", "svg"})
