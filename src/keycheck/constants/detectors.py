"""Detector names, tags, and lexical patterns for Dart key idioms."""

from __future__ import annotations

import re
from re import Pattern

DETECTOR_VALUE_KEY: str = "ValueKey"
DETECTOR_KEY: str = "Key"
DETECTOR_OBJECT_KEY: str = "ObjectKey"
DETECTOR_SEMANTICS: str = "Semantics"
DETECTOR_KEY_CONSTANTS: str = "KeyConstants"
DETECTOR_FIND_BY_KEY: str = "FindByKey"
DETECTOR_PATROL_FINDER: str = "PatrolFinder"
DETECTOR_INTEGRATION_TEST_KEY: str = "IntegrationTestKey"
DETECTOR_MATERIAL_KEY: str = "MaterialKey"
DETECTOR_CUPERTINO_KEY: str = "CupertinoKey"

TAG_CONST: str = "const"
TAG_DYNAMIC: str = "dynamic"
TAG_SEMANTIC: str = "semantic"
TAG_ACCESSIBILITY: str = "accessibility"
TAG_RESOLVED: str = "resolved"
TAG_LITERAL: str = "literal"
TAG_UNRESOLVED: str = "unresolved"
TAG_TEST: str = "test"
TAG_PATROL: str = "patrol"
TAG_INTEGRATION: str = "integration"
TAG_MATERIAL: str = "material"
TAG_CUPERTINO: str = "cupertino"

KEY_CONSTANTS_CLASS: str = "KeyConstants"
INTERPOLATION_PLACEHOLDER: str = "${...}"

IDENTIFIER_CHARS: str = r"[A-Za-z0-9_$]"
TYPE_ARGUMENTS: str = r"(?:<[^<>()]*(?:<[^<>()]*>[^<>()]*)*>)?"

# Patterns run over the comment- and string-masked skeleton; each ends right
# after the opening parenthesis (or colon) so the argument can be read there.
VALUE_KEY_PATTERN: Pattern[str] = re.compile(
    rf"(?<!{IDENTIFIER_CHARS})(?P<const>const\s+)?ValueKey\s*{TYPE_ARGUMENTS}\s*\(\s*"
)
KEY_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})(?P<const>const\s+)?Key\s*\(\s*")
OBJECT_KEY_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})(?P<const>const\s+)?ObjectKey\s*\(\s*")
SEMANTICS_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})Semantics\s*\(")
FIND_BY_KEY_PATTERN: Pattern[str] = re.compile(
    rf"(?<!{IDENTIFIER_CHARS})find\s*\.\s*by(?:Value)?Key\s*\(\s*"
    rf"(?:(?:const\s+)?(?:Value)?Key\s*{TYPE_ARGUMENTS}\s*\(\s*)?"
)
PATROL_FINDER_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})\$\(\s*")
INTEGRATION_KEY_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})key\s*:\s*")
MATERIAL_KEY_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})MaterialKey\s*\(\s*")
CUPERTINO_KEY_PATTERN: Pattern[str] = re.compile(rf"(?<!{IDENTIFIER_CHARS})CupertinoKey\s*\(\s*")

KEY_CONSTANTS_FIELD_PATTERN: Pattern[str] = re.compile(
    r"\bstatic\s+const\s+(?:String\s+)?(?P<name>[A-Za-z_$][\w$]*)\s*=\s*"
)
KEY_CONSTANTS_METHOD_PATTERN: Pattern[str] = re.compile(
    r"\bstatic\s+(?:[A-Za-z_$][\w$]*(?:<[^<>]*>)?\??\s+)?(?:(?P<getter>get)\s+)?(?P<name>[A-Za-z_$][\w$]*)\s*"
    r"(?:\((?P<params>[^()]*)\))?\s*(?P<body>=>|\{)"
)
KEY_CONSTANTS_REFERENCE_PATTERN: Pattern[str] = re.compile(
    rf"(?<!{IDENTIFIER_CHARS})KeyConstants\s*\.\s*(?P<member>[A-Za-z_$][\w$]*)(?P<call>\s*\()?"
)

