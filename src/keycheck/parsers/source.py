"""Lexical model of a Dart source file.

This is not a grammar-level parser. It removes comments, indexes string
literals, matches brackets, and finds class and function bodies. That is
enough structure for the key detectors and the widget heuristics.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from functools import cached_property

from keycheck.constants.detectors import INTERPOLATION_PLACEHOLDER
from keycheck.exceptions import SourceParseError

_QUOTES = "'\""
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")": "(", "]": "[", "}": "{"}

_CLASS_DECLARATION = re.compile(
    r"(?<![\w$])(?:(?:abstract|base|final|interface|sealed|mixin)\s+)*"
    r"(?P<kind>class|mixin|extension|enum)\s+(?P<name>[A-Za-z_$][\w$]*)"
)
_FUNCTION_HEAD = re.compile(r"(?<![\w$])(?P<name>[A-Za-z_$][\w$]*)\s*(?:<[^<>()]*>)?\s*\(")
_GETTER_HEAD = re.compile(r"(?<![\w$])get\s+(?P<name>[A-Za-z_$][\w$]*)\s*(?==>|\{)")
_BODY_MODIFIER = re.compile(r"\s*(?:async\*?|sync\*)?\s*(?P<start>=>|\{)")
_NAMED_ARGUMENT = re.compile(r"\s*(?P<name>[A-Za-z_$][\w$]*)\s*:(?!:)")
_IDENTIFIER_AT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_NON_FUNCTION_NAMES = frozenset(
    {
        "assert",
        "await",
        "catch",
        "for",
        "if",
        "new",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "while",
    }
)


@dataclass(frozen=True)
class StringLiteral:
    """A top-level string literal (adjacent parts are separate literals)."""

    start: int
    end: int
    value: str
    template: str
    raw: bool
    dynamic: bool


@dataclass(frozen=True)
class Scope:
    """A class or function body found in the file."""

    kind: str
    name: str
    start: int
    body_start: int
    body_end: int
    parent: str | None = None

    @property
    def label(self) -> str:
        return f"{self.kind}:{self.name}"


@dataclass(frozen=True)
class Argument:
    """One top-level argument inside a call's parentheses."""

    name: str | None
    start: int
    value_start: int
    end: int


class _Tokenizer:
    """Single forward pass that blanks comments and string contents."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.length = len(text)
        self.code = list(text)
        self.skeleton = list(text)
        self.literals: list[StringLiteral] = []

    def run(self) -> None:
        self._scan_code(0, stop_at_brace=False)

    def _line_of(self, offset: int) -> int:
        return self.text.count("\n", 0, offset) + 1

    def _blank(self, target: list[str], start: int, end: int) -> None:
        for index in range(start, end):
            if target[index] != "\n":
                target[index] = " "

    def _scan_code(self, index: int, *, stop_at_brace: bool) -> int:
        text = self.text
        depth = 0
        while index < self.length:
            char = text[index]
            nxt = text[index + 1] if index + 1 < self.length else ""
            if char == "/" and nxt == "/":
                index = self._skip_line_comment(index)
            elif char == "/" and nxt == "*":
                index = self._skip_block_comment(index)
            elif char in _QUOTES:
                index = self._scan_string(index, index, raw=False, nested=stop_at_brace)
            elif char in "rR" and nxt != "" and nxt in _QUOTES and not _is_identifier_tail(text, index):
                index = self._scan_string(index, index + 1, raw=True, nested=stop_at_brace)
            elif char == "{":
                depth += 1
                index += 1
            elif char == "}":
                if stop_at_brace and depth == 0:
                    return index
                depth -= 1
                index += 1
            else:
                index += 1
        if stop_at_brace:
            raise SourceParseError("Unterminated string interpolation")
        return index

    def _skip_line_comment(self, index: int) -> int:
        end = self.text.find("\n", index)
        if end == -1:
            end = self.length
        self._blank(self.code, index, end)
        self._blank(self.skeleton, index, end)
        return end

    def _skip_block_comment(self, index: int) -> int:
        start = index
        depth = 0
        while index < self.length:
            if self.text.startswith("/*", index):
                depth += 1
                index += 2
            elif self.text.startswith("*/", index):
                depth -= 1
                index += 2
                if depth == 0:
                    self._blank(self.code, start, index)
                    self._blank(self.skeleton, start, index)
                    return index
            else:
                index += 1
        raise SourceParseError(f"Unterminated block comment starting at line {self._line_of(start)}")

    def _scan_string(self, start: int, quote_index: int, *, raw: bool, nested: bool) -> int:
        text = self.text
        quote = text[quote_index]
        triple = text.startswith(quote * 3, quote_index)
        delimiter = quote * 3 if triple else quote
        content_start = quote_index + len(delimiter)
        index = content_start
        value: list[str] = []
        template: list[str] = []
        dynamic = False

        while index < self.length:
            if text.startswith(delimiter, index):
                end = index + len(delimiter)
                self._blank(self.skeleton, content_start, index)
                if not nested:
                    self.literals.append(
                        StringLiteral(
                            start=start,
                            end=end,
                            value="".join(value),
                            template="".join(template),
                            raw=raw,
                            dynamic=dynamic,
                        )
                    )
                return end

            char = text[index]
            if char == "\n" and not triple:
                break
            if char == "\\" and not raw and index + 1 < self.length:
                escaped = text[index + 1]
                decoded = _ESCAPES.get(escaped, escaped)
                value.append(decoded)
                template.append(decoded)
                index += 2
                continue
            if char == "$" and not raw:
                if text.startswith("${", index):
                    close = self._scan_code(index + 2, stop_at_brace=True)
                    value.append(INTERPOLATION_PLACEHOLDER)
                    template.append("${" + text[index + 2 : close].strip() + "}")
                    dynamic = True
                    index = close + 1
                    continue
                match = _IDENTIFIER_AT.match(text, index + 1)
                if match:
                    value.append(INTERPOLATION_PLACEHOLDER)
                    template.append("${" + match.group(0) + "}")
                    dynamic = True
                    index = match.end()
                    continue
            value.append(char)
            template.append(char)
            index += 1

        raise SourceParseError(f"Unterminated string literal starting at line {self._line_of(start)}")


def _is_identifier_tail(text: str, index: int) -> bool:
    if index == 0:
        return False
    previous = text[index - 1]
    return previous.isalnum() or previous in "_$"


@dataclass
class SourceDocument:
    """Tokenized view of one file with offset/line helpers and scope lookup."""

    text: str
    code: str
    skeleton: str
    literals: list[StringLiteral]
    line_starts: list[int] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> SourceDocument:
        """Tokenize ``text``; raises ``SourceParseError`` on unterminated comments or strings."""
        tokenizer = _Tokenizer(text)
        tokenizer.run()
        line_starts = [0]
        line_starts.extend(match.end() for match in re.finditer(r"\n", text))
        return cls(
            text=text,
            code="".join(tokenizer.code),
            skeleton="".join(tokenizer.skeleton),
            literals=tokenizer.literals,
            line_starts=line_starts,
        )

    @property
    def line_count(self) -> int:
        if not self.text:
            return 0
        return len(self.line_starts) - (1 if self.text.endswith("\n") else 0)

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of ``offset``."""
        line_index = bisect.bisect_right(self.line_starts, offset) - 1
        return line_index + 1, offset - self.line_starts[line_index] + 1

    @cached_property
    def _literal_by_start(self) -> dict[int, StringLiteral]:
        return {literal.start: literal for literal in self.literals}

    @cached_property
    def _literal_starts(self) -> list[int]:
        return [literal.start for literal in self.literals]

    def literal_at(self, offset: int) -> StringLiteral | None:
        return self._literal_by_start.get(offset)

    def literal_containing(self, offset: int) -> StringLiteral | None:
        index = bisect.bisect_right(self._literal_starts, offset) - 1
        if index < 0:
            return None
        literal = self.literals[index]
        return literal if literal.start <= offset < literal.end else None

    def string_argument(self, offset: int) -> tuple[StringLiteral, str, str] | None:
        """Read a whole-argument string at ``offset``.

        Adjacent literals (``'a' 'b'``) are joined. Returns the first literal
        plus the joined value and template, or ``None`` when the argument is
        not purely a string (e.g. ``'row_' + id`` or a variable).
        """
        literal = self.literal_at(offset)
        if literal is None:
            return None
        value = [literal.value]
        template = [literal.template]
        index = literal.end
        while True:
            index = self._skip_space(index)
            following = self.literal_at(index)
            if following is None:
                break
            value.append(following.value)
            template.append(following.template)
            index = following.end
        if index < len(self.skeleton) and self.skeleton[index] not in ",;)]}":
            return None
        return literal, "".join(value), "".join(template)

    def _skip_space(self, index: int) -> int:
        while index < len(self.skeleton) and self.skeleton[index].isspace():
            index += 1
        return index

    @cached_property
    def brackets(self) -> dict[int, int]:
        """Map of opening bracket offset to its closing offset, over the skeleton."""
        pairs: dict[int, int] = {}
        stack: list[tuple[str, int]] = []
        for index, char in enumerate(self.skeleton):
            if char in _OPENERS:
                stack.append((char, index))
            elif char in _CLOSERS:
                # Tolerate stray closers: unwind to the matching opener if one exists.
                opener = _CLOSERS[char]
                for depth in range(len(stack) - 1, -1, -1):
                    if stack[depth][0] == opener:
                        pairs[stack[depth][1]] = index
                        del stack[depth:]
                        break
        return pairs

    def arguments(self, open_paren: int) -> list[Argument]:
        """Split the top-level arguments of the call whose ``(`` is at ``open_paren``."""
        close = self.brackets.get(open_paren)
        if close is None:
            return []
        arguments: list[Argument] = []
        start = open_paren + 1
        index = start
        skeleton = self.skeleton
        while index <= close:
            char = skeleton[index]
            if char in _OPENERS and index in self.brackets:
                index = self.brackets[index] + 1
                continue
            if char == "," or index == close:
                if skeleton[start:index].strip():
                    arguments.append(self._argument(start, index))
                start = index + 1
            index += 1
        return arguments

    def _argument(self, start: int, end: int) -> Argument:
        match = _NAMED_ARGUMENT.match(self.skeleton, start, end)
        if match:
            return Argument(
                name=match.group("name"),
                start=start,
                value_start=self._skip_space(match.end()),
                end=end,
            )
        return Argument(name=None, start=start, value_start=self._skip_space(start), end=end)

    @cached_property
    def scopes(self) -> list[Scope]:
        """Class and function bodies, ordered by start offset."""
        classes = self._class_scopes()
        functions = self._function_scopes(classes)
        return sorted(classes + functions, key=lambda scope: (scope.start, scope.body_end))

    @cached_property
    def function_names(self) -> list[str]:
        seen: dict[str, None] = {}
        for scope in self.scopes:
            if scope.kind in {"method", "function"}:
                seen.setdefault(scope.name, None)
        return list(seen)

    def enclosing_scopes(self, offset: int, kinds: frozenset[str] | None = None) -> list[Scope]:
        """Scopes whose body contains ``offset``, innermost first."""
        found: list[Scope] = []
        for scope in self.scopes:
            if scope.start > offset:
                break
            if kinds is not None and scope.kind not in kinds:
                continue
            if scope.body_start <= offset < scope.body_end:
                found.append(scope)
        found.sort(key=lambda scope: scope.body_start, reverse=True)
        return found

    def innermost_scope(self, offset: int, kinds: frozenset[str] | None = None) -> Scope | None:
        scopes = self.enclosing_scopes(offset, kinds)
        return scopes[0] if scopes else None

    def context_at(self, offset: int) -> str:
        """``method:x``, ``function:x``, ``class:X`` or ``global`` for an offset."""
        scope = self.innermost_scope(offset, frozenset({"method", "function"}))
        if scope is None:
            scope = self.innermost_scope(offset)
        return scope.label if scope is not None else "global"

    def class_scope(self, name: str) -> Scope | None:
        for scope in self.scopes:
            if scope.kind == "class" and scope.name == name:
                return scope
        return None

    def _class_scopes(self) -> list[Scope]:
        scopes: list[Scope] = []
        for match in _CLASS_DECLARATION.finditer(self.skeleton):
            # ``extension on Foo`` is unnamed.
            if match.group("kind") == "extension" and match.group("name") == "on":
                continue
            brace = self._header_brace(match.end())
            if brace is None:
                continue
            scopes.append(
                Scope(
                    kind="class",
                    name=match.group("name"),
                    start=match.start(),
                    body_start=brace,
                    body_end=self.brackets[brace] + 1,
                )
            )
        return scopes

    def _header_brace(self, index: int) -> int | None:
        """First ``{`` after a declaration header, unless a ``;`` ends it first."""
        skeleton = self.skeleton
        while index < len(skeleton):
            char = skeleton[index]
            if char == "{":
                return index if index in self.brackets else None
            if char in ";=":
                return None
            if char in "([" and index in self.brackets:
                index = self.brackets[index] + 1
                continue
            index += 1
        return None

    def _function_scopes(self, classes: list[Scope]) -> list[Scope]:
        scopes: list[Scope] = []
        for match in _FUNCTION_HEAD.finditer(self.skeleton):
            name = match.group("name")
            if name in _NON_FUNCTION_NAMES:
                continue
            open_paren = match.end() - 1
            close = self.brackets.get(open_paren)
            if close is None:
                continue
            body = self._function_body(close + 1)
            if body is None:
                continue
            scopes.append(self._function_scope(name, match.start(), body, classes))

        for match in _GETTER_HEAD.finditer(self.skeleton):
            body = self._function_body(match.end())
            if body is not None:
                scopes.append(self._function_scope(match.group("name"), match.start(), body, classes))
        return scopes

    def _function_scope(self, name: str, start: int, body: tuple[int, int], classes: list[Scope]) -> Scope:
        owner = None
        for scope in classes:
            if scope.body_start < start < scope.body_end:
                owner = scope
        return Scope(
            kind="method" if owner is not None else "function",
            name=name,
            start=start,
            body_start=body[0],
            body_end=body[1],
            parent=owner.name if owner is not None else None,
        )

    def _function_body(self, index: int) -> tuple[int, int] | None:
        match = _BODY_MODIFIER.match(self.skeleton, index)
        if match is None:
            return None
        start = match.start("start")
        if match.group("start") == "{":
            close = self.brackets.get(start)
            return (start, close + 1) if close is not None else None
        return start, self._expression_end(start + 2)

    def _expression_end(self, index: int) -> int:
        """End of an arrow body: the first ``;``, ``,`` or unmatched closer at depth zero."""
        skeleton = self.skeleton
        while index < len(skeleton):
            char = skeleton[index]
            if char in _OPENERS and index in self.brackets:
                index = self.brackets[index] + 1
                continue
            if char in ";," or char in _CLOSERS:
                return index
            index += 1
        return index

